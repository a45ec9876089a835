# File: src/catalog/menus.py
"""Menu builders.

Pin menus are derived from the board's capability sets, so the output menu
can never offer a flash-reserved or input-only pin.
"""

from protocol import (
    BAUDRATES,
    ROBOT_JOINTS,
    CoordinatesMode,
    DataType,
    Eol,
    GripperStatus,
    InterruptMode,
    Level,
    Mode,
)

from .descriptors import Menu, MenuItem


def _menu(name, items, accept_reporters=False):
    return Menu(name=name, items=tuple(items), accept_reporters=accept_reporters)


def _values_menu(name, values, accept_reporters=False):
    """Menu whose labels are the values themselves."""
    return _menu(name, (MenuItem(str(v), v) for v in values), accept_reporters)


def _pin_menu(name, board, pins):
    return _menu(name, (MenuItem(board.pin_label(p), p) for p in pins))


def pins_menu(board):
    return _pin_menu("pins", board, board.read_pins)


def out_pins_menu(board):
    return _pin_menu("outPins", board, board.output_pins)


def analog_pins_menu(board):
    return _pin_menu("analogPins", board, board.analog_pins)


def dac_pins_menu(board):
    return _pin_menu("dacPins", board, board.dac_pins)


def touch_pins_menu(board):
    return _pin_menu("touchPins", board, board.touch_pins)


def ledc_channels_menu(board):
    items = (
        MenuItem(f"CH{ch} ({board.ledc_timers[ch]})", str(ch))
        for ch in board.ledc_channels
    )
    return _menu("ledcChannels", items)


def serial_no_menu(board):
    return _values_menu("serialNo", board.serial_ports)


def mode_menu():
    return _menu("mode", (
        MenuItem("input", Mode.INPUT),
        MenuItem("output", Mode.OUTPUT),
        MenuItem("input-pullup", Mode.INPUT_PULLUP),
        MenuItem("input-pulldown", Mode.INPUT_PULLDOWN),
    ))


def level_menu():
    # Level also takes a reporter (e.g. a comparison) in place of HIGH/LOW
    return _menu("level", (
        MenuItem("high", Level.HIGH),
        MenuItem("low", Level.LOW),
    ), accept_reporters=True)


def interrupt_mode_menu():
    return _menu("interruptMode", (
        MenuItem("rising edge", InterruptMode.RISING),
        MenuItem("falling edge", InterruptMode.FALLING),
        MenuItem("change edge", InterruptMode.CHANGE),
        MenuItem("low level", InterruptMode.LOW_LEVEL),
        MenuItem("high level", InterruptMode.HIGH_LEVEL),
    ))


def baudrate_menu():
    return _values_menu("baudrate", BAUDRATES)


def eol_menu():
    return _menu("eol", (
        MenuItem("warp", Eol.WRAP),
        MenuItem("no-warp", Eol.NO_WRAP),
    ))


def data_type_menu():
    return _menu("dataType", (
        MenuItem("integer", DataType.INTEGER),
        MenuItem("decimal", DataType.DECIMAL),
        MenuItem("string", DataType.STRING),
    ))


def joint_menu():
    return _values_menu("joint", ROBOT_JOINTS)


def gripper_status_menu():
    return _menu("gripperStatus", (
        MenuItem("open", GripperStatus.OPEN),
        MenuItem("close", GripperStatus.CLOSE),
    ))


def coordinates_mode_menu():
    return _menu("coordinatesMode", (
        MenuItem("angular", CoordinatesMode.ANGULAR),
        MenuItem("linear", CoordinatesMode.LINEAR),
    ))
