# File: src/managers/dispatcher.py
"""Runs one block: validates its arguments and routes the call."""

from dataclasses import dataclass
from typing import Any, Optional

from adafruit_ticks import ticks_ms, ticks_diff

from protocol import (
    CALL_ACTUATOR,
    CALL_EVENT,
    CALL_UTILITY,
    DataType,
    Level,
    OP_ATTACH_INTERRUPT,
    OP_DATA_CONSTRAIN,
    OP_DATA_CONVERT,
    OP_DATA_MAP,
    OP_DATA_TO_CHAR,
    OP_DATA_TO_CODE,
    OP_DETACH_INTERRUPT,
    OP_GET_ALL_ANGLES,
    OP_GET_ALL_COORDINATES,
    OP_READ_ANALOG_PIN,
    OP_READ_DIGITAL_PIN,
    OP_READ_TOUCH_PIN,
    OP_SERIAL_AVAILABLE,
    OP_SERIAL_BEGIN,
    OP_SERIAL_PRINT,
    OP_SERIAL_READ_BYTE,
    OP_SET_ALL_JOINTS,
    OP_SET_COORDINATES,
    OP_SET_DAC_OUTPUT,
    OP_SET_DIGITAL_OUTPUT,
    OP_SET_GRIPPER,
    OP_SET_GRIPPER_STATUS,
    OP_SET_GRIPPER_STATUS_DEFAULT,
    OP_SET_JOINT,
    OP_SET_PIN_MODE,
    OP_SET_PWM_OUTPUT,
    OP_SET_SC_SERVO,
    OP_SET_SERVO_OUTPUT,
)
from utilities.data_utils import constrain, convert, map_value, to_char, to_code, to_number
from utilities.errors import ArgumentError, TransportError, UnknownCommandError
from utilities.logger import BlockLogger

TAG = "DISP"

LEVEL_MENU = "level"
JOINT_COUNT = 6
COORDINATE_AXES = ("X", "Y", "Z", "RX", "RY", "RZ")


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one block execution.

    ``ok`` is False only for transport failures, in which case ``error``
    holds the ``TransportError``. Argument violations are raised instead.
    """

    opcode: str
    ok: bool = True
    value: Any = None
    error: Optional[BaseException] = None


class CommandDispatcher:
    """
    Translates block executions into peripheral calls.

    Every execution resolves the opcode against the catalog, normalises the
    arguments in descriptor order and hands them to the handler for that
    opcode. Actuator handlers resolve to completion only, sensor handlers
    return the peripheral's value untouched, utility handlers compute
    locally and the event handler registers an interrupt body.

    The dispatcher keeps no state between executions and never assumes it
    is the only caller of the peripheral.
    """

    def __init__(self, catalog, peripheral, interrupts):
        self.catalog = catalog
        self.peripheral = peripheral
        self.interrupts = interrupts

        self._handlers = {
            # Pins
            OP_SET_PIN_MODE: self._set_pin_mode,
            OP_SET_DIGITAL_OUTPUT: self._set_digital_output,
            OP_SET_PWM_OUTPUT: self._set_pwm_output,
            OP_SET_DAC_OUTPUT: self._set_dac_output,
            OP_SET_SERVO_OUTPUT: self._set_servo_output,
            OP_SET_SC_SERVO: self._set_sc_servo,
            OP_READ_DIGITAL_PIN: self._read_digital_pin,
            OP_READ_ANALOG_PIN: self._read_analog_pin,
            OP_READ_TOUCH_PIN: self._read_touch_pin,
            OP_ATTACH_INTERRUPT: self._attach_interrupt,
            OP_DETACH_INTERRUPT: self._detach_interrupt,
            # Serial
            OP_SERIAL_BEGIN: self._serial_begin,
            OP_SERIAL_PRINT: self._serial_print,
            OP_SERIAL_AVAILABLE: self._serial_available,
            OP_SERIAL_READ_BYTE: self._serial_read_byte,
            # Data
            OP_DATA_MAP: self._data_map,
            OP_DATA_CONSTRAIN: self._data_constrain,
            OP_DATA_CONVERT: self._data_convert,
            OP_DATA_TO_CHAR: self._data_to_char,
            OP_DATA_TO_CODE: self._data_to_code,
            # Robot arm
            OP_SET_JOINT: self._set_joint,
            OP_SET_ALL_JOINTS: self._set_all_joints,
            OP_SET_GRIPPER: self._set_gripper,
            OP_SET_GRIPPER_STATUS: self._set_gripper_status,
            OP_SET_GRIPPER_STATUS_DEFAULT: self._set_gripper_status_default,
            OP_SET_COORDINATES: self._set_coordinates,
            OP_GET_ALL_ANGLES: self._get_all_angles,
            OP_GET_ALL_COORDINATES: self._get_all_coordinates,
        }

        missing = [op for op in catalog.opcodes if op not in self._handlers]
        if missing:
            BlockLogger.warning(TAG, f"Blocks without a handler: {', '.join(missing)}")

    @property
    def opcodes(self):
        return tuple(op for op in self.catalog.opcodes if op in self._handlers)

    async def execute(self, opcode, args=None, body=None):
        """Run one block.

        Parameters:
            opcode (str): Block opcode.
            args (dict|None): Argument values by name; missing ones take the
                descriptor default.
            body (callable|None): Stack to run on each interrupt, for the
                attach block only. May return an awaitable.

        Returns:
            CommandResult

        Raises:
            UnknownCommandError: The opcode is not in the catalog.
            ArgumentError: An argument broke its contract.
        """
        descriptor = self.catalog.descriptor(opcode)
        handler = self._handlers.get(opcode)
        if handler is None:
            raise UnknownCommandError(f"No handler for block opcode: {opcode}")

        values = self.normalize_arguments(descriptor, args)
        if descriptor.call_class == CALL_EVENT and not callable(body):
            raise ArgumentError(f"{opcode} needs a callable body", "body", body)

        start = ticks_ms()
        try:
            if descriptor.call_class == CALL_EVENT:
                value = await handler(values, body)
            else:
                value = await handler(values)
        except (ArgumentError, UnknownCommandError):
            raise
        except TransportError as e:
            BlockLogger.error(TAG, f"{opcode} failed: {e}")
            return CommandResult(opcode, ok=False, error=e)
        except Exception as e:
            if descriptor.call_class == CALL_UTILITY:
                raise
            error = TransportError(f"{opcode} failed: {e}", command=opcode)
            error.__cause__ = e
            BlockLogger.exception(TAG, f"{opcode} failed in the peripheral", e)
            return CommandResult(opcode, ok=False, error=error)

        elapsed = ticks_diff(ticks_ms(), start)
        if descriptor.call_class in (CALL_ACTUATOR, CALL_EVENT):
            BlockLogger.debug(TAG, f"{opcode} handed off in {elapsed}ms")
            return CommandResult(opcode, ok=True)
        BlockLogger.debug(TAG, f"{opcode} -> {value!r} in {elapsed}ms")
        return CommandResult(opcode, ok=True, value=value)

    #region --- Argument Normalisation ---
    def normalize_arguments(self, descriptor, args=None):
        """Return the block's arguments as a dict in descriptor order.

        Raises:
            ArgumentError: On a value outside its menu or bounds, or of the
                wrong type.
        """
        args = args or {}
        values = {}
        for spec in descriptor.arguments:
            raw = args.get(spec.name)
            if raw is None:
                raw = spec.default
            values[spec.name] = self._normalize_argument(descriptor, spec, raw)
        return values

    def _normalize_argument(self, descriptor, spec, raw):
        menu = self.catalog.menu_for(descriptor, spec)
        if menu is not None:
            if menu.name == LEVEL_MENU:
                return _normalize_level(raw, spec.name)
            found = menu.lookup(raw)
            if found is None and isinstance(raw, (int, float)) and not isinstance(raw, bool):
                found = menu.lookup(to_number(raw, spec.name))
            if found is None:
                allowed = ", ".join(str(v) for v in menu.values)
                raise ArgumentError(
                    f"{descriptor.opcode}: {spec.name} must be one of [{allowed}], got {raw!r}",
                    spec.name, raw,
                )
            return found

        if spec.is_numeric:
            number = to_number(raw, spec.name)
            bounds = spec.bounds
            if bounds is not None and not bounds[0] <= number <= bounds[1]:
                raise ArgumentError(
                    f"{descriptor.opcode}: {spec.name} must be within {bounds[0]}-{bounds[1]}, got {raw!r}",
                    spec.name, raw,
                )
            return number

        return convert(raw, DataType.STRING)
    #endregion

    #region --- Pin Handlers ---
    async def _set_pin_mode(self, a):
        await self.peripheral.set_pin_mode(a["PIN"], a["MODE"])

    async def _set_digital_output(self, a):
        await self.peripheral.set_digital_output(a["PIN"], a["LEVEL"])

    async def _set_pwm_output(self, a):
        await self.peripheral.set_pwm_output(a["PIN"], a["OUT"], channel=a["CH"])

    async def _set_dac_output(self, a):
        await self.peripheral.set_dac_output(a["PIN"], a["OUT"])

    async def _set_servo_output(self, a):
        await self.peripheral.set_servo_output(a["PIN"], a["OUT"], channel=a["CH"])

    async def _set_sc_servo(self, a):
        await self.peripheral.set_sc_servo(a["STEERINGID"], a["SPEED"], a["POSITION"])

    async def _read_digital_pin(self, a):
        return await self.peripheral.read_digital_pin(a["PIN"])

    async def _read_analog_pin(self, a):
        return await self.peripheral.read_analog_pin(a["PIN"])

    async def _read_touch_pin(self, a):
        return await self.peripheral.read_touch_pin(a["PIN"])

    async def _attach_interrupt(self, a, body):
        await self.interrupts.attach(a["PIN"], a["MODE"], body)

    async def _detach_interrupt(self, a):
        await self.interrupts.detach(a["PIN"])
    #endregion

    #region --- Serial Handlers ---
    async def _serial_begin(self, a):
        await self.peripheral.serial_begin(a["NO"], int(a["VALUE"]))

    async def _serial_print(self, a):
        await self.peripheral.serial_print(a["NO"], a["VALUE"], a["EOL"])

    async def _serial_available(self, a):
        return await self.peripheral.serial_available(a["NO"])

    async def _serial_read_byte(self, a):
        return await self.peripheral.serial_read_byte(a["NO"])
    #endregion

    #region --- Data Handlers ---
    async def _data_map(self, a):
        return map_value(a["DATA"], a["ARG0"], a["ARG1"], a["ARG2"], a["ARG3"])

    async def _data_constrain(self, a):
        return constrain(a["DATA"], a["ARG0"], a["ARG1"])

    async def _data_convert(self, a):
        return convert(a["DATA"], a["TYPE"])

    async def _data_to_char(self, a):
        return to_char(a["DATA"])

    async def _data_to_code(self, a):
        return to_code(a["DATA"])
    #endregion

    #region --- Robot Handlers ---
    async def _set_joint(self, a):
        await self.peripheral.set_joint_angle(int(a["JOINT"]), a["ANGLE"], a["SPEED"])

    async def _set_all_joints(self, a):
        angles = tuple(a[f"ANGLE{i}"] for i in range(1, JOINT_COUNT + 1))
        await self.peripheral.set_all_joint_angles(angles, a["SPEED"])

    async def _set_gripper(self, a):
        await self.peripheral.set_gripper_angle(a["ANGLE"], a["SPEED"])

    async def _set_gripper_status(self, a):
        await self.peripheral.set_gripper_status(a["STATUS"], a["SPEED"])

    async def _set_gripper_status_default(self, a):
        await self.peripheral.set_gripper_status(a["STATUS"], None)

    async def _set_coordinates(self, a):
        coordinates = tuple(a[axis] for axis in COORDINATE_AXES)
        await self.peripheral.set_coordinates(coordinates, a["SPEED"], a["MODE"])

    async def _get_all_angles(self, a):
        angles = await self.peripheral.get_all_angles()
        BlockLogger.debug(TAG, f"Joint angles: {angles}")

    async def _get_all_coordinates(self, a):
        coordinates = await self.peripheral.get_all_coordinates()
        BlockLogger.debug(TAG, f"Coordinates: {coordinates}")
    #endregion


def _normalize_level(raw, name):
    """Accept HIGH/LOW in any case, booleans and numbers (non-zero is HIGH)."""
    if isinstance(raw, bool):
        return Level.HIGH if raw else Level.LOW
    if isinstance(raw, str):
        text = raw.strip().upper()
        if text in (Level.HIGH, Level.LOW):
            return text
        if text in ("TRUE", "FALSE"):
            return Level.HIGH if text == "TRUE" else Level.LOW
    try:
        number = to_number(raw, name)
    except ArgumentError:
        raise ArgumentError(f"{name} must be HIGH, LOW or a number, got {raw!r}", name, raw) from None
    return Level.HIGH if number != 0 else Level.LOW
