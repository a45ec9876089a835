"""Block protocol definitions.

This module defines the block opcodes, block types, call classes, argument
types and menu values shared by the catalog and the dispatcher. Keeping them
in one place lets the catalog stay declarative while the dispatcher asks
"is this a sensor block?" without knowing individual opcode names.
"""

# --- Block Opcodes (Avoid Magic Strings in Logic) ---
# Pin category
OP_SET_PIN_MODE = "setPinMode"
OP_SET_DIGITAL_OUTPUT = "setDigitalOutput"
OP_SET_PWM_OUTPUT = "esp32SetPwmOutput"
OP_SET_DAC_OUTPUT = "esp32SetDACOutput"
OP_READ_DIGITAL_PIN = "readDigitalPin"
OP_READ_ANALOG_PIN = "readAnalogPin"
OP_READ_TOUCH_PIN = "esp32ReadTouchPin"
OP_SET_SERVO_OUTPUT = "esp32SetServoOutput"
OP_SET_SC_SERVO = "esp32SetSCServo"
OP_ATTACH_INTERRUPT = "esp32AttachInterrupt"
OP_DETACH_INTERRUPT = "esp32DetachInterrupt"

# Serial category
OP_SERIAL_BEGIN = "multiSerialBegin"
OP_SERIAL_PRINT = "multiSerialPrint"
OP_SERIAL_AVAILABLE = "multiSerialAvailable"
OP_SERIAL_READ_BYTE = "multiSerialReadAByte"

# Data category
OP_DATA_MAP = "dataMap"
OP_DATA_CONSTRAIN = "dataConstrain"
OP_DATA_CONVERT = "dataConvert"
OP_DATA_TO_CHAR = "dataConvertASCIICharacter"
OP_DATA_TO_CODE = "dataConvertASCIINumber"

# Robot category
OP_SET_JOINT = "steeringGearConfig"
OP_SET_ALL_JOINTS = "setServoPosAll"
OP_SET_GRIPPER = "setGripper"
OP_SET_GRIPPER_STATUS = "setGripperStatus"
OP_SET_GRIPPER_STATUS_DEFAULT = "setGripperStatusDefault"
OP_SET_COORDINATES = "setAllCoordinates"
OP_GET_ALL_ANGLES = "getAllAngle"
OP_GET_ALL_COORDINATES = "getAllCoordinates"

# --- Block Types (how the editor draws a block) ---
BLOCK_COMMAND = "command"
BLOCK_REPORTER = "reporter"
BLOCK_BOOLEAN = "boolean"
BLOCK_CONDITIONAL = "conditional"

# Separator marker inside a category's block list
SEPARATOR = "---"

# --- Call Classes (how the dispatcher runs a block) ---
CALL_ACTUATOR = "actuator"
CALL_SENSOR = "sensor"
CALL_UTILITY = "utility"
CALL_EVENT = "event"

# --- Response Arity ---
RESPONSE_NONE = "none"
RESPONSE_BOOLEAN = "boolean"
RESPONSE_NUMBER = "number"
RESPONSE_STRING = "string"

# --- Argument Types ---
ARG_STRING = "string"
ARG_NUMBER = "number"
ARG_UINT8 = "uint8"
ARG_HALF_ANGLE = "half_angle"
ARG_OTO100 = "oto100"
ARG_OTO500 = "oto500"

# Closed numeric interval per constrained argument type
ARGUMENT_BOUNDS = {
    ARG_UINT8: (0, 255),
    ARG_HALF_ANGLE: (0, 180),
    ARG_OTO100: (0, 100),
    ARG_OTO500: (0, 500),
}

NUMERIC_ARGUMENT_TYPES = {ARG_NUMBER, ARG_UINT8, ARG_HALF_ANGLE, ARG_OTO100, ARG_OTO500}


# --- Menu Values ---
class Mode:
    INPUT = "INPUT"
    OUTPUT = "OUTPUT"
    INPUT_PULLUP = "INPUT_PULLUP"
    INPUT_PULLDOWN = "INPUT_PULLDOWN"


class Level:
    HIGH = "HIGH"
    LOW = "LOW"


class InterruptMode:
    RISING = "RISING"
    FALLING = "FALLING"
    CHANGE = "CHANGE"
    LOW_LEVEL = "LOW"
    HIGH_LEVEL = "HIGH"


class Eol:
    WRAP = "warp"
    NO_WRAP = "noWarp"


class DataType:
    INTEGER = "INTEGER"
    DECIMAL = "DECIMAL"
    STRING = "STRING"


class GripperStatus:
    OPEN = "1"
    CLOSE = "0"


class CoordinatesMode:
    ANGULAR = "0"
    LINEAR = "1"


BAUDRATES = ("4800", "9600", "19200", "38400", "57600", "76800", "115200")

ROBOT_JOINTS = ("1", "2", "3", "4", "5", "6")


# --- Command Groups (The Source of Truth for Dispatch) ---
ACTUATOR_COMMANDS = {
    OP_SET_PIN_MODE,
    OP_SET_DIGITAL_OUTPUT,
    OP_SET_PWM_OUTPUT,
    OP_SET_DAC_OUTPUT,
    OP_SET_SERVO_OUTPUT,
    OP_SET_SC_SERVO,
    OP_DETACH_INTERRUPT,
    OP_SERIAL_BEGIN,
    OP_SERIAL_PRINT,
    OP_SET_JOINT,
    OP_SET_ALL_JOINTS,
    OP_SET_GRIPPER,
    OP_SET_GRIPPER_STATUS,
    OP_SET_GRIPPER_STATUS_DEFAULT,
    OP_SET_COORDINATES,
    OP_GET_ALL_ANGLES,
    OP_GET_ALL_COORDINATES,
}

SENSOR_COMMANDS = {
    OP_READ_DIGITAL_PIN,
    OP_READ_ANALOG_PIN,
    OP_READ_TOUCH_PIN,
    OP_SERIAL_AVAILABLE,
    OP_SERIAL_READ_BYTE,
}

UTILITY_COMMANDS = {
    OP_DATA_MAP,
    OP_DATA_CONSTRAIN,
    OP_DATA_CONVERT,
    OP_DATA_TO_CHAR,
    OP_DATA_TO_CODE,
}

EVENT_COMMANDS = {OP_ATTACH_INTERRUPT}


def call_class_of(opcode):
    """Return the call class an opcode belongs to, or None if unknown."""
    if opcode in ACTUATOR_COMMANDS:
        return CALL_ACTUATOR
    if opcode in SENSOR_COMMANDS:
        return CALL_SENSOR
    if opcode in UTILITY_COMMANDS:
        return CALL_UTILITY
    if opcode in EVENT_COMMANDS:
        return CALL_EVENT
    return None
