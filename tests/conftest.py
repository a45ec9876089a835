# tests/conftest.py
import asyncio
import os
import sys

import pytest

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.append(src_path)

from transport import BasePeripheral, BaseTransport  # noqa: E402
from utilities.logger import BlockLogger  # noqa: E402


class FakePeripheral(BasePeripheral):
    """Records every call in order and answers reads from ``readings``."""

    def __init__(self, readings=None, fail_with=None):
        self.calls = []
        self.readings = dict(readings or {})
        self.fail_with = fail_with
        self.interrupt_callbacks = {}

    async def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None:
            raise self.fail_with

    async def set_pin_mode(self, pin, mode):
        await self._record("set_pin_mode", pin, mode)

    async def set_digital_output(self, pin, level):
        await self._record("set_digital_output", pin, level)

    async def set_pwm_output(self, pin, value, channel=None):
        await self._record("set_pwm_output", pin, value, channel)

    async def set_dac_output(self, pin, value):
        await self._record("set_dac_output", pin, value)

    async def set_servo_output(self, pin, value, channel=None):
        await self._record("set_servo_output", pin, value, channel)

    async def set_sc_servo(self, servo_id, speed, position):
        await self._record("set_sc_servo", servo_id, speed, position)

    async def read_digital_pin(self, pin):
        await self._record("read_digital_pin", pin)
        return self.readings.get(("digital", pin), False)

    async def read_analog_pin(self, pin):
        await self._record("read_analog_pin", pin)
        return self.readings.get(("analog", pin), 0)

    async def read_touch_pin(self, pin):
        await self._record("read_touch_pin", pin)
        return self.readings.get(("touch", pin), 0)

    async def attach_interrupt(self, pin, mode, callback):
        await self._record("attach_interrupt", pin, mode)
        self.interrupt_callbacks[pin] = callback

    async def detach_interrupt(self, pin):
        await self._record("detach_interrupt", pin)
        self.interrupt_callbacks.pop(pin, None)

    async def serial_begin(self, channel, baudrate):
        await self._record("serial_begin", channel, baudrate)

    async def serial_print(self, channel, value, eol):
        await self._record("serial_print", channel, value, eol)

    async def serial_available(self, channel):
        await self._record("serial_available", channel)
        return self.readings.get(("available", channel), 0)

    async def serial_read_byte(self, channel):
        await self._record("serial_read_byte", channel)
        return self.readings.get(("byte", channel), -1)

    async def set_joint_angle(self, joint, angle, speed):
        await self._record("set_joint_angle", joint, angle, speed)

    async def set_all_joint_angles(self, angles, speed):
        await self._record("set_all_joint_angles", angles, speed)

    async def set_gripper_angle(self, angle, speed):
        await self._record("set_gripper_angle", angle, speed)

    async def set_gripper_status(self, status, speed=None):
        await self._record("set_gripper_status", status, speed)

    async def set_coordinates(self, coordinates, speed, mode):
        await self._record("set_coordinates", coordinates, speed, mode)

    async def get_all_angles(self):
        await self._record("get_all_angles")
        return self.readings.get("angles", (0, 0, 0, 0, 0, 0))

    async def get_all_coordinates(self):
        await self._record("get_all_coordinates")
        return self.readings.get("coordinates", (0, 0, 0, 0, 0, 0))


class FakeTransport(BaseTransport):
    """In-memory transport: ``sent`` collects outbound messages, ``feed`` queues inbound ones."""

    def __init__(self, fail_send=None):
        self.sent = []
        self.fail_send = fail_send
        self._inbox = None
        self.cleared = 0

    @property
    def inbox(self):
        # Created on first use so it binds to the loop of the running test
        if self._inbox is None:
            self._inbox = asyncio.Queue()
        return self._inbox

    def send(self, message):
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(message)

    def feed(self, message):
        self.inbox.put_nowait(message)

    async def receive(self):
        item = await self.inbox.get()
        if isinstance(item, Exception):
            raise item
        return item

    def clear_buffer(self):
        self.cleared += 1
        self._inbox = None


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep log output out of the test report and restore global logger state."""
    saved = (BlockLogger.LEVEL, BlockLogger.PRINT_TO_CONSOLE, BlockLogger.USE_COLORS,
             BlockLogger.WRITE_TO_FILE, BlockLogger.LOG_FILE_PATH)
    BlockLogger.PRINT_TO_CONSOLE = False
    yield
    (BlockLogger.LEVEL, BlockLogger.PRINT_TO_CONSOLE, BlockLogger.USE_COLORS,
     BlockLogger.WRITE_TO_FILE, BlockLogger.LOG_FILE_PATH) = saved


@pytest.fixture
def peripheral():
    return FakePeripheral()


@pytest.fixture
def transport():
    return FakeTransport()
