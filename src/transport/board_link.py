"""Board command surface implemented over a message transport."""

import asyncio
from collections import deque

from utilities.errors import BlockError, TransportError
from utilities.logger import BlockLogger

from .base_peripheral import BasePeripheral
from .message import Message
from .protocol import (
    ACTUATOR_COMMANDS,
    CMD_ACK,
    CMD_ALL_JOINTS,
    CMD_ANALOG_IN,
    CMD_ATTACH_INT,
    CMD_COORDINATES,
    CMD_DAC_OUT,
    CMD_DETACH_INT,
    CMD_DIGITAL_IN,
    CMD_DIGITAL_OUT,
    CMD_ERROR,
    CMD_GET_ANGLES,
    CMD_GET_COORDINATES,
    CMD_GRIPPER_ANGLE,
    CMD_GRIPPER_STATUS,
    CMD_INTERRUPT,
    CMD_JOINT_ANGLE,
    CMD_PIN_MODE,
    CMD_PWM_OUT,
    CMD_SC_SERVO,
    CMD_SERIAL_AVAILABLE,
    CMD_SERIAL_BEGIN,
    CMD_SERIAL_PRINT,
    CMD_SERIAL_READ,
    CMD_SERVO_OUT,
    CMD_TOUCH_IN,
    REQUEST_COMMANDS,
)

TAG = "LINK"


class BoardLink(BasePeripheral):
    """One implementation of the board command surface per board family.

    Actuator methods send a single message and return once the transport has
    accepted it. Read methods send a request and wait for the reply carrying
    the same command; replies are matched first-in first-out per command.
    An ERROR reply fails the oldest pending request it names, or the oldest
    pending request overall when it names none. An ERROR naming a command
    with nothing pending (an actuator, for instance) is logged and dropped.
    INTERRUPT messages from the board are routed to the callback registered
    for their pin.

    The link does not own the physical channel. It expects the transport to
    serialise access itself, and never retries a failed send.
    """

    def __init__(self, transport, board):
        """Initialize the link.

        Parameters:
            transport (BaseTransport): Message transport to the board.
            board (BoardProfile): Variant data of the connected board.
        """
        self.transport = transport
        self.board = board

        # (command, future) in send order
        self._pending = deque()
        self._interrupt_callbacks = {}
        self._rx_task = None

    #region --- Lifecycle ---
    @property
    def running(self):
        return self._rx_task is not None and not self._rx_task.done()

    def start(self):
        """Start the receive worker. Must be called from a running event loop."""
        if self._rx_task is None or self._rx_task.done():
            self._rx_task = asyncio.create_task(self._rx_worker())
            BlockLogger.debug(TAG, f"Link to {self.board.device_id} started")

    async def stop(self):
        """Stop the receive worker and fail every pending request."""
        task = self._rx_task
        self._rx_task = None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._fail_all(TransportError("Board link stopped"))
        self._interrupt_callbacks.clear()
        BlockLogger.debug(TAG, f"Link to {self.board.device_id} stopped")

    @property
    def pending_count(self):
        return sum(1 for _, future in self._pending if not future.done())
    #endregion

    #region --- Message Plumbing ---
    def _send(self, command, *payload):
        message = Message(command, payload)
        try:
            self.transport.send(message)
        except BlockError:
            raise
        except Exception as e:
            raise TransportError(f"Failed to send {command}: {e}", command=command) from e
        BlockLogger.debug(TAG, f"TX {message}")

    def _command(self, command, *payload):
        """Send a fire-and-forget actuator command."""
        if command not in ACTUATOR_COMMANDS:
            raise ValueError(f"{command} is not an actuator command")
        self._send(command, *payload)

    async def _request(self, command, *payload):
        """Send a request and wait for the matching reply message."""
        if command not in REQUEST_COMMANDS:
            raise ValueError(f"{command} is not a request command")
        future = asyncio.get_running_loop().create_future()
        entry = (command, future)
        self._pending.append(entry)
        try:
            self._send(command, *payload)
        except BlockError:
            self._pending.remove(entry)
            raise
        try:
            return await future
        finally:
            if entry in self._pending:
                self._pending.remove(entry)

    def _take_pending(self, command=None):
        """Pop the oldest live pending entry, optionally for one command."""
        for entry in self._pending:
            pending_command, future = entry
            if future.done():
                continue
            if command is None or pending_command == command:
                self._pending.remove(entry)
                return entry
        return None

    def _fail_all(self, exc):
        while self._pending:
            command, future = self._pending.popleft()
            if not future.done():
                future.set_exception(TransportError(str(exc), command=command))

    def handle_message(self, message):
        """Route one inbound message to a pending request or interrupt callback."""
        command = message.command

        if command == CMD_INTERRUPT:
            pin = str(message.value)
            callback = self._interrupt_callbacks.get(pin)
            if callback is None:
                BlockLogger.debug(TAG, f"Interrupt on unregistered pin {pin} ignored")
                return
            callback(pin)
            return

        if command == CMD_ACK:
            return

        if command == CMD_ERROR:
            failed_command = message.payload[0] if message.payload else None
            reason = message.payload[1] if len(message.payload) > 1 else "board reported an error"
            # A named command only ever fails its own oldest request
            entry = self._take_pending(failed_command)
            if entry is None:
                BlockLogger.warning(TAG, f"Board error matches no pending request: {message.payload}")
                return
            pending_command, future = entry
            future.set_exception(TransportError(f"{pending_command} failed: {reason}", command=pending_command))
            return

        entry = self._take_pending(command)
        if entry is None:
            BlockLogger.warning(TAG, f"Unsolicited reply dropped: {message}")
            return
        entry[1].set_result(message)

    async def _rx_worker(self):
        """Dedicated task that drains the transport and routes messages.

        This is the ONLY task that reads from the transport.
        """
        while True:
            try:
                message = await self.transport.receive()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                BlockLogger.error(TAG, f"Receive failed: {e}")
                self._fail_all(TransportError(f"Receive failed: {e}"))
                await asyncio.sleep(0.02)
                continue

            try:
                self.handle_message(message)
            except Exception as e:
                BlockLogger.exception(TAG, f"Error handling {message}", e)
            await asyncio.sleep(0)
    #endregion

    #region --- Pin Outputs ---
    async def set_pin_mode(self, pin, mode):
        self._command(CMD_PIN_MODE, pin, mode)

    async def set_digital_output(self, pin, level):
        self._command(CMD_DIGITAL_OUT, pin, level)

    async def set_pwm_output(self, pin, value, channel=None):
        if channel is None:
            self._command(CMD_PWM_OUT, pin, value)
        else:
            self._command(CMD_PWM_OUT, pin, value, channel)

    async def set_dac_output(self, pin, value):
        self._command(CMD_DAC_OUT, pin, value)

    async def set_servo_output(self, pin, value, channel=None):
        if channel is None:
            self._command(CMD_SERVO_OUT, pin, value)
        else:
            self._command(CMD_SERVO_OUT, pin, value, channel)

    async def set_sc_servo(self, servo_id, speed, position):
        self._command(CMD_SC_SERVO, servo_id, speed, position)
    #endregion

    #region --- Pin Inputs ---
    async def read_digital_pin(self, pin):
        reply = await self._request(CMD_DIGITAL_IN, pin)
        value = reply.value
        if isinstance(value, str):
            return value.strip().upper() in ("1", "HIGH", "TRUE")
        return bool(value)

    async def read_analog_pin(self, pin):
        reply = await self._request(CMD_ANALOG_IN, pin)
        return reply.value

    async def read_touch_pin(self, pin):
        reply = await self._request(CMD_TOUCH_IN, pin)
        return reply.value
    #endregion

    #region --- Interrupts ---
    async def attach_interrupt(self, pin, mode, callback):
        pin = str(pin)
        self._command(CMD_ATTACH_INT, pin, mode)
        self._interrupt_callbacks[pin] = callback

    async def detach_interrupt(self, pin):
        pin = str(pin)
        self._interrupt_callbacks.pop(pin, None)
        self._command(CMD_DETACH_INT, pin)
    #endregion

    #region --- Serial ---
    async def serial_begin(self, channel, baudrate):
        self._command(CMD_SERIAL_BEGIN, channel, baudrate)

    async def serial_print(self, channel, value, eol):
        self._command(CMD_SERIAL_PRINT, channel, value, eol)

    async def serial_available(self, channel):
        reply = await self._request(CMD_SERIAL_AVAILABLE, channel)
        return reply.value

    async def serial_read_byte(self, channel):
        reply = await self._request(CMD_SERIAL_READ, channel)
        return reply.value
    #endregion

    #region --- Robot Arm ---
    async def set_joint_angle(self, joint, angle, speed):
        self._command(CMD_JOINT_ANGLE, joint, angle, speed)

    async def set_all_joint_angles(self, angles, speed):
        self._command(CMD_ALL_JOINTS, *angles, speed)

    async def set_gripper_angle(self, angle, speed):
        self._command(CMD_GRIPPER_ANGLE, angle, speed)

    async def set_gripper_status(self, status, speed=None):
        if speed is None:
            self._command(CMD_GRIPPER_STATUS, status)
        else:
            self._command(CMD_GRIPPER_STATUS, status, speed)

    async def set_coordinates(self, coordinates, speed, mode):
        self._command(CMD_COORDINATES, *coordinates, speed, mode)

    async def get_all_angles(self):
        reply = await self._request(CMD_GET_ANGLES)
        return reply.payload

    async def get_all_coordinates(self):
        reply = await self._request(CMD_GET_COORDINATES)
        return reply.payload
    #endregion
