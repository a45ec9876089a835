"""Board-link command definitions.

These are the logical commands the board link exchanges with the board.
How a transport frames them on the wire is its own business; the link only
deals in command names and payload tuples.
"""

# --- Link Control ---
CMD_ACK = "ACK"
CMD_ERROR = "ERROR"
CMD_INTERRUPT = "INTERRUPT"

# --- Pin Commands ---
CMD_PIN_MODE = "PIN_MODE"
CMD_DIGITAL_OUT = "DIGITAL_OUT"
CMD_PWM_OUT = "PWM_OUT"
CMD_DAC_OUT = "DAC_OUT"
CMD_SERVO_OUT = "SERVO_OUT"
CMD_SC_SERVO = "SC_SERVO"
CMD_DIGITAL_IN = "DIGITAL_IN"
CMD_ANALOG_IN = "ANALOG_IN"
CMD_TOUCH_IN = "TOUCH_IN"
CMD_ATTACH_INT = "ATTACH_INT"
CMD_DETACH_INT = "DETACH_INT"

# --- Serial Commands ---
CMD_SERIAL_BEGIN = "SERIAL_BEGIN"
CMD_SERIAL_PRINT = "SERIAL_PRINT"
CMD_SERIAL_AVAILABLE = "SERIAL_AVAILABLE"
CMD_SERIAL_READ = "SERIAL_READ"

# --- Robot Commands ---
CMD_JOINT_ANGLE = "JOINT_ANGLE"
CMD_ALL_JOINTS = "ALL_JOINTS"
CMD_GRIPPER_ANGLE = "GRIPPER_ANGLE"
CMD_GRIPPER_STATUS = "GRIPPER_STATUS"
CMD_COORDINATES = "COORDINATES"
CMD_GET_ANGLES = "GET_ANGLES"
CMD_GET_COORDINATES = "GET_COORDINATES"

# --- Command Groups ---
# Commands the board answers with a reply carrying the value
REQUEST_COMMANDS = {
    CMD_DIGITAL_IN,
    CMD_ANALOG_IN,
    CMD_TOUCH_IN,
    CMD_SERIAL_AVAILABLE,
    CMD_SERIAL_READ,
    CMD_GET_ANGLES,
    CMD_GET_COORDINATES,
}

# Commands that are fire-and-forget from the link's point of view
ACTUATOR_COMMANDS = {
    CMD_PIN_MODE,
    CMD_DIGITAL_OUT,
    CMD_PWM_OUT,
    CMD_DAC_OUT,
    CMD_SERVO_OUT,
    CMD_SC_SERVO,
    CMD_ATTACH_INT,
    CMD_DETACH_INT,
    CMD_SERIAL_BEGIN,
    CMD_SERIAL_PRINT,
    CMD_JOINT_ANGLE,
    CMD_ALL_JOINTS,
    CMD_GRIPPER_ANGLE,
    CMD_GRIPPER_STATUS,
    CMD_COORDINATES,
}
