"""Block Manifest - Central registry for every block a board offers.

This manifest declares, per category, the blocks, their argument schemas and
defaults, and the menus they reference. The dispatcher resolves opcodes
against the built catalog instead of keeping its own copy of the schemas.

Building is pure: the same board always yields an equal catalog, and the
result is frozen. ``get_catalog`` builds once per board and keeps it.
"""

from dataclasses import dataclass
from types import MappingProxyType

from protocol import (
    ARG_HALF_ANGLE,
    ARG_NUMBER,
    ARG_OTO100,
    ARG_OTO500,
    ARG_STRING,
    ARG_UINT8,
    BLOCK_BOOLEAN,
    BLOCK_COMMAND,
    BLOCK_CONDITIONAL,
    BLOCK_REPORTER,
    RESPONSE_NUMBER,
    RESPONSE_STRING,
    SEPARATOR,
    CoordinatesMode,
    DataType,
    Eol,
    GripperStatus,
    InterruptMode,
    Level,
    Mode,
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
from utilities.errors import UnknownCommandError
from utilities.logger import BlockLogger

from . import menus
from .descriptors import Category, arg, block

# Colours per category: (primary, secondary, tertiary)
PIN_COLORS = ("#4C97FF", "#3373CC", "#3373CC")
SERIAL_COLORS = ("#9966FF", "#774DCB", "#774DCB")
DATA_COLORS = ("#CF63CF", "#C94FC9", "#BD42BD")
ROBOT_COLORS = ("#CF63CF", "#C94FC9", "#BD42BD")


def _pin_category(board):
    default_pin = "2"
    default_dac = board.dac_pins[0]
    blocks = (
        block(OP_SET_PIN_MODE, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_pin, "outPins"),
              arg("MODE", ARG_STRING, Mode.INPUT, "mode"),
              text="set pin [PIN] mode [MODE]"),
        block(OP_SET_DIGITAL_OUTPUT, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_pin, "outPins"),
              arg("LEVEL", ARG_STRING, Level.HIGH, "level"),
              text="set digital pin [PIN] out [LEVEL]"),
        block(OP_SET_PWM_OUTPUT, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_pin, "outPins"),
              arg("OUT", ARG_UINT8, 255),
              arg("CH", ARG_STRING, "0", "ledcChannels"),
              text="set pwm pin [PIN] use channel [CH] out [OUT]"),
        block(OP_SET_DAC_OUTPUT, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_dac, "dacPins"),
              arg("OUT", ARG_UINT8, 0),
              text="set dac pin [PIN] out [OUT]"),
        SEPARATOR,
        block(OP_READ_DIGITAL_PIN, BLOCK_BOOLEAN,
              arg("PIN", ARG_STRING, default_pin, "pins"),
              text="read digital pin [PIN]"),
        block(OP_READ_ANALOG_PIN, BLOCK_REPORTER,
              arg("PIN", ARG_STRING, default_pin, "analogPins"),
              text="read analog pin [PIN]"),
        block(OP_READ_TOUCH_PIN, BLOCK_REPORTER,
              arg("PIN", ARG_STRING, default_pin, "touchPins"),
              text="read touch pin [PIN]"),
        SEPARATOR,
        block(OP_SET_SERVO_OUTPUT, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_pin, "outPins"),
              arg("OUT", ARG_HALF_ANGLE, 90),
              arg("CH", ARG_STRING, "0", "ledcChannels"),
              text="set servo pin [PIN] use channel [CH] out [OUT]"),
        SEPARATOR,
        block(OP_SET_SC_SERVO, BLOCK_COMMAND,
              arg("STEERINGID", ARG_NUMBER, 0),
              arg("SPEED", ARG_OTO100, 1),
              arg("POSITION", ARG_NUMBER, 4095),
              text="set bus servo [STEERINGID] speed [SPEED] position [POSITION]"),
        SEPARATOR,
        block(OP_ATTACH_INTERRUPT, BLOCK_CONDITIONAL,
              arg("PIN", ARG_STRING, default_pin, "pins"),
              arg("MODE", ARG_STRING, InterruptMode.RISING, "interruptMode"),
              text="attach interrupt pin [PIN] mode [MODE] executes"),
        block(OP_DETACH_INTERRUPT, BLOCK_COMMAND,
              arg("PIN", ARG_STRING, default_pin, "pins"),
              text="detach interrupt pin [PIN]"),
    )
    return Category(
        id="pin",
        name="Pins",
        colors=PIN_COLORS,
        blocks=blocks,
        menus=(
            menus.pins_menu(board),
            menus.out_pins_menu(board),
            menus.mode_menu(),
            menus.analog_pins_menu(board),
            menus.level_menu(),
            menus.ledc_channels_menu(board),
            menus.dac_pins_menu(board),
            menus.touch_pins_menu(board),
            menus.interrupt_mode_menu(),
        ),
    )


def _serial_category(board):
    default_port = board.serial_ports[0]
    blocks = (
        block(OP_SERIAL_BEGIN, BLOCK_COMMAND,
              arg("NO", ARG_NUMBER, default_port, "serialNo"),
              arg("VALUE", ARG_STRING, "115200", "baudrate"),
              text="serial [NO] begin baudrate [VALUE]"),
        block(OP_SERIAL_PRINT, BLOCK_COMMAND,
              arg("NO", ARG_NUMBER, default_port, "serialNo"),
              arg("VALUE", ARG_STRING, "Hello OpenBlock"),
              arg("EOL", ARG_STRING, Eol.WRAP, "eol"),
              text="serial [NO] print [VALUE] [EOL]"),
        block(OP_SERIAL_AVAILABLE, BLOCK_REPORTER,
              arg("NO", ARG_NUMBER, default_port, "serialNo"),
              text="serial [NO] available data length"),
        block(OP_SERIAL_READ_BYTE, BLOCK_REPORTER,
              arg("NO", ARG_NUMBER, default_port, "serialNo"),
              text="serial [NO] read a byte"),
    )
    return Category(
        id="serial",
        name="Serial",
        colors=SERIAL_COLORS,
        blocks=blocks,
        menus=(
            menus.baudrate_menu(),
            menus.serial_no_menu(board),
            menus.eol_menu(),
        ),
    )


def _data_category(board):
    blocks = (
        block(OP_DATA_MAP, BLOCK_REPORTER,
              arg("DATA", ARG_NUMBER, 50),
              arg("ARG0", ARG_NUMBER, 1),
              arg("ARG1", ARG_NUMBER, 100),
              arg("ARG2", ARG_NUMBER, 1),
              arg("ARG3", ARG_NUMBER, 1000),
              text="map [DATA] from ([ARG0], [ARG1]) to ([ARG2], [ARG3])"),
        block(OP_DATA_CONSTRAIN, BLOCK_REPORTER,
              arg("DATA", ARG_NUMBER, 50),
              arg("ARG0", ARG_NUMBER, 1),
              arg("ARG1", ARG_NUMBER, 100),
              text="constrain [DATA] between ([ARG0], [ARG1])"),
        SEPARATOR,
        block(OP_DATA_CONVERT, BLOCK_REPORTER,
              arg("DATA", ARG_STRING, "123"),
              arg("TYPE", ARG_STRING, DataType.INTEGER, "dataType"),
              text="convert [DATA] to [TYPE]",
              # Number for the INTEGER and DECIMAL targets, text only for STRING
              response=RESPONSE_NUMBER),
        block(OP_DATA_TO_CHAR, BLOCK_REPORTER,
              arg("DATA", ARG_NUMBER, 97),
              text="convert [DATA] to ASCII character",
              response=RESPONSE_STRING),
        block(OP_DATA_TO_CODE, BLOCK_REPORTER,
              arg("DATA", ARG_STRING, "a"),
              text="convert [DATA] to ASCII number"),
    )
    return Category(
        id="data",
        name="Data",
        colors=DATA_COLORS,
        blocks=blocks,
        menus=(menus.data_type_menu(),),
    )


def _robot_category(board):
    joint_angles = tuple(arg(f"ANGLE{i}", ARG_HALF_ANGLE, 0) for i in range(1, 7))
    coordinates = tuple(arg(axis, ARG_NUMBER, 0) for axis in ("X", "Y", "Z", "RX", "RY", "RZ"))
    blocks = (
        block(OP_SET_JOINT, BLOCK_COMMAND,
              arg("JOINT", ARG_STRING, "1", "joint"),
              arg("ANGLE", ARG_HALF_ANGLE, 0),
              arg("SPEED", ARG_OTO500, 0),
              text="set joint [JOINT] angle [ANGLE] speed [SPEED]"),
        block(OP_SET_ALL_JOINTS, BLOCK_COMMAND,
              *joint_angles,
              arg("SPEED", ARG_OTO500, 0),
              text=("set full joint,joint 1 [ANGLE1] joint 2 [ANGLE2] joint 3 [ANGLE3] "
                    "joint 4 [ANGLE4] joint 5 [ANGLE5] joint 6 [ANGLE6] speed [SPEED]")),
        block(OP_SET_GRIPPER, BLOCK_COMMAND,
              arg("ANGLE", ARG_OTO100, 0),
              arg("SPEED", ARG_OTO500, 0),
              text="set gripper angle [ANGLE] speed [SPEED]"),
        block(OP_SET_GRIPPER_STATUS, BLOCK_COMMAND,
              arg("STATUS", ARG_STRING, GripperStatus.OPEN, "gripperStatus"),
              arg("SPEED", ARG_OTO100, 0),
              text="set gripper status [STATUS] speed [SPEED]"),
        block(OP_SET_GRIPPER_STATUS_DEFAULT, BLOCK_COMMAND,
              arg("STATUS", ARG_STRING, GripperStatus.OPEN, "gripperStatus"),
              text="set gripper status [STATUS]"),
        block(OP_SET_COORDINATES, BLOCK_COMMAND,
              *coordinates,
              arg("SPEED", ARG_OTO500, 0),
              arg("MODE", ARG_STRING, CoordinatesMode.ANGULAR, "coordinatesMode"),
              text="set coordinate x[X] y[Y] z[Z] rx[RX] ry[RY] rz[RZ] speed[SPEED] mode[MODE]"),
        block(OP_GET_ALL_ANGLES, BLOCK_COMMAND, text="get all angle"),
        block(OP_GET_ALL_COORDINATES, BLOCK_COMMAND, text="get all coordinates"),
    )
    return Category(
        id="robot",
        name="ROBOT",
        colors=ROBOT_COLORS,
        blocks=blocks,
        menus=(
            menus.joint_menu(),
            menus.gripper_status_menu(),
            menus.coordinates_mode_menu(),
        ),
    )


# Category order as shown in the editor
CATEGORY_BUILDERS = (
    _pin_category,
    _serial_category,
    _data_category,
    _robot_category,
)


@dataclass(frozen=True)
class Catalog:
    """The ordered categories of one board plus lookup indexes."""

    board_id: str
    categories: tuple
    _descriptors: MappingProxyType
    _menus: MappingProxyType
    _owners: MappingProxyType

    @property
    def opcodes(self):
        return tuple(self._descriptors)

    def descriptor(self, opcode):
        """Return the descriptor for ``opcode``.

        Raises:
            UnknownCommandError: If the board has no such block.
        """
        try:
            return self._descriptors[opcode]
        except KeyError:
            raise UnknownCommandError(f"Unknown block opcode: {opcode}") from None

    def __contains__(self, opcode):
        return opcode in self._descriptors

    def category(self, category_id):
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def category_of(self, opcode):
        return self._owners.get(opcode)

    def menu(self, name):
        return self._menus.get(name)

    def menu_for(self, descriptor, arg_spec):
        """Menu an argument refers to, resolved in the block's own category."""
        if arg_spec.menu is None:
            return None
        owner = self._owners.get(descriptor.opcode)
        if owner is not None:
            menu = owner.menu(arg_spec.menu)
            if menu is not None:
                return menu
        return self._menus.get(arg_spec.menu)


def build_catalog(board):
    """Build the frozen catalog for ``board``."""
    categories = tuple(builder(board) for builder in CATEGORY_BUILDERS)

    descriptors = {}
    menus_by_name = {}
    owners = {}
    for category in categories:
        for descriptor in category.descriptors:
            descriptors[descriptor.opcode] = descriptor
            owners[descriptor.opcode] = category
        for menu in category.menus:
            menus_by_name.setdefault(menu.name, menu)

    BlockLogger.debug(
        "CTLG",
        f"Built catalog for {board.device_id}: {len(categories)} categories, "
        f"{len(descriptors)} blocks, {len(menus_by_name)} menus",
    )
    return Catalog(
        board_id=board.device_id,
        categories=categories,
        _descriptors=MappingProxyType(descriptors),
        _menus=MappingProxyType(menus_by_name),
        _owners=MappingProxyType(owners),
    )


_CATALOGS = {}


def get_catalog(board):
    """Return the catalog for ``board``, building it on first use."""
    catalog = _CATALOGS.get(board.device_id)
    if catalog is None:
        catalog = build_catalog(board)
        _CATALOGS[board.device_id] = catalog
        BlockLogger.info("CTLG", f"Catalog ready for {board.name} ({len(catalog.opcodes)} blocks)")
    return catalog
