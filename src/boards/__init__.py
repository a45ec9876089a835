"""
boards package

Board variant profiles supplied as data. Importing the package registers
every known variant.
"""

from .profile import BoardProfile, get_board, list_boards, find_board_for_device, register_board
from .esp32 import ESP32

__all__ = [
    "BoardProfile",
    "ESP32",
    "get_board",
    "list_boards",
    "find_board_for_device",
    "register_board",
]
