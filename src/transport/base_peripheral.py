"""Peripheral command surface consumed by the dispatcher."""


class BasePeripheral:
    """Abstract command surface of one board family.

    The dispatcher only ever talks to this interface. Actuator methods
    complete once the command has been handed off; read methods resolve to
    the value the board reports. Per-variant details such as pin sets or
    upload parameters are data on the board profile, never overrides here.

    Pin, channel and mode arguments arrive already validated and normalised
    to the menu values of the catalog (strings for pins, channels and modes).
    """

    #region --- Pin Outputs ---
    async def set_pin_mode(self, pin, mode):
        raise NotImplementedError("Subclass must implement set_pin_mode()")

    async def set_digital_output(self, pin, level):
        raise NotImplementedError("Subclass must implement set_digital_output()")

    async def set_pwm_output(self, pin, value, channel=None):
        raise NotImplementedError("Subclass must implement set_pwm_output()")

    async def set_dac_output(self, pin, value):
        raise NotImplementedError("Subclass must implement set_dac_output()")

    async def set_servo_output(self, pin, value, channel=None):
        raise NotImplementedError("Subclass must implement set_servo_output()")

    async def set_sc_servo(self, servo_id, speed, position):
        raise NotImplementedError("Subclass must implement set_sc_servo()")
    #endregion

    #region --- Pin Inputs ---
    async def read_digital_pin(self, pin):
        """Return the pin level as a bool."""
        raise NotImplementedError("Subclass must implement read_digital_pin()")

    async def read_analog_pin(self, pin):
        raise NotImplementedError("Subclass must implement read_analog_pin()")

    async def read_touch_pin(self, pin):
        raise NotImplementedError("Subclass must implement read_touch_pin()")
    #endregion

    #region --- Interrupts ---
    async def attach_interrupt(self, pin, mode, callback):
        """Arm the board-side interrupt on pin.

        Parameters:
            pin (str): Pin identifier.
            mode (str): One of RISING, FALLING, CHANGE, LOW, HIGH.
            callback (callable): Called with the pin whenever the board
                reports the interrupt. May be called from any thread.
        """
        raise NotImplementedError("Subclass must implement attach_interrupt()")

    async def detach_interrupt(self, pin):
        raise NotImplementedError("Subclass must implement detach_interrupt()")
    #endregion

    #region --- Serial ---
    async def serial_begin(self, channel, baudrate):
        raise NotImplementedError("Subclass must implement serial_begin()")

    async def serial_print(self, channel, value, eol):
        raise NotImplementedError("Subclass must implement serial_print()")

    async def serial_available(self, channel):
        raise NotImplementedError("Subclass must implement serial_available()")

    async def serial_read_byte(self, channel):
        raise NotImplementedError("Subclass must implement serial_read_byte()")
    #endregion

    #region --- Robot Arm ---
    async def set_joint_angle(self, joint, angle, speed):
        raise NotImplementedError("Subclass must implement set_joint_angle()")

    async def set_all_joint_angles(self, angles, speed):
        """Move all six joints; angles is a 6-tuple ordered joint 1 to 6."""
        raise NotImplementedError("Subclass must implement set_all_joint_angles()")

    async def set_gripper_angle(self, angle, speed):
        raise NotImplementedError("Subclass must implement set_gripper_angle()")

    async def set_gripper_status(self, status, speed=None):
        """Open ("1") or close ("0") the gripper. speed=None keeps the firmware default."""
        raise NotImplementedError("Subclass must implement set_gripper_status()")

    async def set_coordinates(self, coordinates, speed, mode):
        """Move to (x, y, z, rx, ry, rz) in angular ("0") or linear ("1") mode."""
        raise NotImplementedError("Subclass must implement set_coordinates()")

    async def get_all_angles(self):
        raise NotImplementedError("Subclass must implement get_all_angles()")

    async def get_all_coordinates(self):
        raise NotImplementedError("Subclass must implement get_all_coordinates()")
    #endregion
