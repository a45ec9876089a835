# File: src/managers/interrupt_manager.py
"""Per-pin interrupt registrations and event delivery."""

import asyncio
import inspect

from adafruit_ticks import ticks_ms, ticks_diff

from utilities.logger import BlockLogger

TAG = "INTR"


class InterruptState:
    REGISTERED = "REGISTERED"
    UNREGISTERED = "UNREGISTERED"


class InterruptEvent:
    """One board-side interrupt occurrence, stamped on arrival."""

    def __init__(self, pin, timestamp=None):
        self.pin = pin
        self.timestamp = ticks_ms() if timestamp is None else timestamp

    def __repr__(self):
        return f"InterruptEvent(pin={self.pin}, t={self.timestamp})"


class InterruptManager:
    """
    Keeps at most one (mode, body) registration per pin and runs bodies
    when the board reports the interrupt.

    Attach replaces any earlier registration on the same pin, detach of an
    unregistered pin does nothing. Events enter through ``notify``, which
    any thread may call; a single worker task drains the queue and starts
    every body as its own task, so a slow or failing body never blocks
    delivery of later events. A body that raises is logged and stays
    registered.
    """

    def __init__(self, peripheral):
        """
        Args:
            peripheral: BasePeripheral that arms and disarms board interrupts.
        """
        self.peripheral = peripheral
        self._registrations = {}  # pin -> (mode, body)
        self._lock = asyncio.Lock()
        self._queue = asyncio.Queue()
        self._loop = None
        self._worker_task = None
        self._body_tasks = set()
        self._stopped = False

    #region --- Registration ---
    async def attach(self, pin, mode, body):
        """Register body for pin and arm the interrupt on the board.

        If the peripheral refuses, the previous registration (or its absence)
        is restored and the error propagates.
        """
        pin = str(pin)
        async with self._lock:
            previous = self._registrations.get(pin)
            self._registrations[pin] = (mode, body)
            try:
                await self.peripheral.attach_interrupt(pin, mode, self.notify)
            except BaseException:
                self._restore(pin, previous)
                raise
        if previous is None:
            BlockLogger.info(TAG, f"Interrupt attached on pin {pin} ({mode})")
        else:
            BlockLogger.info(TAG, f"Interrupt on pin {pin} replaced ({previous[0]} -> {mode})")

    async def detach(self, pin):
        """Remove the registration for pin. Returns False if there was none."""
        pin = str(pin)
        async with self._lock:
            previous = self._registrations.pop(pin, None)
            if previous is None:
                BlockLogger.debug(TAG, f"Detach on pin {pin} ignored, nothing attached")
                return False
            try:
                await self.peripheral.detach_interrupt(pin)
            except BaseException:
                self._restore(pin, previous)
                raise
        BlockLogger.info(TAG, f"Interrupt detached from pin {pin}")
        return True

    def _restore(self, pin, previous):
        if previous is None:
            self._registrations.pop(pin, None)
        else:
            self._registrations[pin] = previous

    def state(self, pin):
        if str(pin) in self._registrations:
            return InterruptState.REGISTERED
        return InterruptState.UNREGISTERED

    def registration(self, pin):
        """Return (mode, body) for pin, or None."""
        return self._registrations.get(str(pin))

    @property
    def registered_pins(self):
        return tuple(self._registrations)
    #endregion

    #region --- Event Delivery ---
    def notify(self, pin):
        """Queue an interrupt event for pin. Safe to call from any thread."""
        if self._stopped:
            BlockLogger.debug(TAG, f"Event on pin {pin} dropped, delivery stopped")
            return
        event = InterruptEvent(str(pin))
        loop = self._loop
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if loop is None or running is loop:
            self._queue.put_nowait(event)
        else:
            loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def run(self):
        """Worker loop: drain events and start one task per body."""
        while True:
            event = await self._queue.get()
            try:
                registration = self._registrations.get(event.pin)
                if registration is None:
                    BlockLogger.debug(TAG, f"Event on pin {event.pin} dropped, nothing attached")
                    continue
                _, body = registration
                task = asyncio.create_task(self._run_body(event, body))
                self._body_tasks.add(task)
                task.add_done_callback(self._body_tasks.discard)
            finally:
                self._queue.task_done()

    async def _run_body(self, event, body):
        latency = ticks_diff(ticks_ms(), event.timestamp)
        BlockLogger.debug(TAG, f"Running body for pin {event.pin} ({latency}ms after event)")
        try:
            result = body()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Registration stays in place, later events still run the body
            BlockLogger.exception(TAG, f"Interrupt body on pin {event.pin} failed", e)

    async def join(self):
        """Wait until every queued event has been delivered and its body finished."""
        await self._queue.join()
        pending = [t for t in self._body_tasks if not t.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [t for t in self._body_tasks if not t.done()]
    #endregion

    #region --- Lifecycle ---
    def start(self):
        """Start the delivery worker on the running loop."""
        if self._worker_task is None or self._worker_task.done():
            self._stopped = False
            self._loop = asyncio.get_running_loop()
            self._worker_task = asyncio.create_task(self.run())
            BlockLogger.debug(TAG, "Interrupt worker started")

    async def stop(self):
        """Stop delivery, disarm every pin and cancel running bodies.

        Events reported after this are dropped until the next ``start``.
        """
        self._stopped = True
        tasks = list(self._body_tasks)
        if self._worker_task is not None:
            tasks.append(self._worker_task)
            self._worker_task = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._body_tasks.clear()

        async with self._lock:
            for pin in list(self._registrations):
                try:
                    await self.peripheral.detach_interrupt(pin)
                except Exception as e:
                    BlockLogger.warning(TAG, f"Could not disarm pin {pin} on stop: {e}")
            self._registrations.clear()
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        self._loop = None
        BlockLogger.debug(TAG, "Interrupt worker stopped")
    #endregion
