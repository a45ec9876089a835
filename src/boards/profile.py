# File: src/boards/profile.py
"""Board variant profile record and registry."""

from dataclasses import dataclass
from types import MappingProxyType

from utilities.errors import BoardNotFoundError


@dataclass(frozen=True)
class BoardProfile:
    """Static description of one board variant.

    Pin identifiers are opaque strings (``"2"``, ``"34"``). Capability sets
    are stored as ordered tuples so that menus built from them are stable.

    Attributes:
        device_id: Extension id the editor knows the board by.
        name: Human-readable name.
        pnp_ids: USB identities of the serial bridges the board ships with.
        serial_config: Serial link parameters (baud rate, data and stop bits).
        upload: Upload toolchain options, ``fqbn`` keyed by host platform.
        gpio: Every GPIO the chip exposes, in board order.
        flash_pins: Pins wired to the internal flash, never offered.
        input_only_pins: Pins without output drivers.
        analog_pins: ADC-capable pins.
        dac_pins: DAC-capable pins.
        touch_pins: Capacitive touch pins.
        ledc_timers: Timer label for each LEDC channel, indexed by channel.
        serial_ports: Hardware UART numbers offered to blocks.
    """

    device_id: str
    name: str
    pnp_ids: tuple
    serial_config: MappingProxyType
    upload: MappingProxyType
    gpio: tuple
    flash_pins: frozenset
    input_only_pins: frozenset
    analog_pins: tuple
    dac_pins: tuple
    touch_pins: tuple
    ledc_timers: tuple
    serial_ports: tuple
    pin_prefix: str = "IO"

    @property
    def read_pins(self):
        """Pins safe to read: every GPIO except the flash interface."""
        return tuple(p for p in self.gpio if p not in self.flash_pins)

    @property
    def output_pins(self):
        """Pins safe to drive: readable pins that also have an output driver."""
        return tuple(p for p in self.read_pins if p not in self.input_only_pins)

    @property
    def ledc_channels(self):
        return tuple(range(len(self.ledc_timers)))

    def pin_label(self, pin):
        return f"{self.pin_prefix}{pin}"

    def matches_device(self, pnp_id):
        """True if a USB identity string belongs to one of this board's bridges."""
        if not pnp_id:
            return False
        wanted = pnp_id.upper()
        return any(known.upper() in wanted for known in self.pnp_ids)

    def fqbn_for(self, platform):
        """Return the upload target identifier for a host platform.

        Unknown platforms fall back to the linux entry.
        """
        fqbn = self.upload["fqbn"]
        return fqbn.get(platform, fqbn["linux"])


BOARDS = {}


def register_board(board):
    BOARDS[board.device_id] = board
    return board


def get_board(device_id):
    """Get a board by its device id. Raises BoardNotFoundError if not found."""
    if device_id not in BOARDS:
        raise BoardNotFoundError(
            f"Unknown board: {device_id}. Known boards: {', '.join(sorted(BOARDS))}"
        )
    return BOARDS[device_id]


def list_boards():
    """Return all registered boards."""
    return list(BOARDS.values())


def find_board_for_device(pnp_id):
    """Return the first board whose serial bridge matches ``pnp_id``, or None."""
    for board in BOARDS.values():
        if board.matches_device(pnp_id):
            return board
    return None
