# File: src/boards/esp32.py
"""Hardware profile for the ESP32 DevKit family."""

from types import MappingProxyType

from .profile import BoardProfile, register_board

# USB-serial bridges found on ESP32 dev boards
PNPID_LIST = (
    # CH340
    "USB\\VID_1A86&PID_7523",
    # CH9102
    "USB\\VID_1A86&PID_55D4",
    # CP2102
    "USB\\VID_10C4&PID_EA60",
)

SERIAL_CONFIG = MappingProxyType({
    "baudRate": 57600,
    "dataBits": 8,
    "stopBits": 1,
})

UPLOAD_OPTIONS = MappingProxyType({
    "type": "arduino",
    "fqbn": MappingProxyType({
        "darwin": "esp32:esp32:esp32:UploadSpeed=460800",
        "linux": "esp32:esp32:esp32:UploadSpeed=460800",
        "win32": "esp32:esp32:esp32:UploadSpeed=921600",
    }),
})

GPIO = (
    "0", "1", "2", "3", "4", "5",
    "6", "7", "8", "9", "10", "11",
    "12", "13", "14", "15", "16", "17", "18", "19",
    "21", "22", "23", "25", "26", "27",
    "32", "33", "34", "35", "36", "39",
)

# GPIO6-11 drive the SPI flash
FLASH_PINS = frozenset({"6", "7", "8", "9", "10", "11"})

INPUT_ONLY_PINS = frozenset({"34", "35", "36", "39"})

ANALOG_PINS = (
    "0", "2", "4", "12", "13", "14", "15",
    "25", "26", "27", "32", "33", "34", "35", "36", "39",
)

DAC_PINS = ("25", "26")

TOUCH_PINS = ("0", "2", "4", "12", "13", "14", "15", "27", "32", "33")

# LEDC channel -> timer. Channel pairs share a timer, and with it the
# frequency and resolution.
LEDC_TIMERS = (
    "LT0", "LT0", "LT1", "LT1", "LT2", "LT2", "LT3", "LT3",
    "HT0", "HT0", "HT1", "HT1", "HT2", "HT2", "HT3", "HT3",
)

# UART1 defaults to GPIO9/10 which belong to the flash
SERIAL_PORTS = ("0", "2")

ESP32 = register_board(BoardProfile(
    device_id="arduinoEsp32",
    name="Arduino ESP32",
    pnp_ids=PNPID_LIST,
    serial_config=SERIAL_CONFIG,
    upload=UPLOAD_OPTIONS,
    gpio=GPIO,
    flash_pins=FLASH_PINS,
    input_only_pins=INPUT_ONLY_PINS,
    analog_pins=ANALOG_PINS,
    dac_pins=DAC_PINS,
    touch_pins=TOUCH_PINS,
    ledc_timers=LEDC_TIMERS,
    serial_ports=SERIAL_PORTS,
))
