# File: src/utilities/__init__.py
"""Utility modules for the block runtime."""

from .config import DEFAULT_CONFIG, apply_logging, load_config, resolve_platform
from .data_utils import constrain, convert, map_value, to_char, to_code, to_number
from .errors import (
    ArgumentError,
    BlockError,
    BoardNotFoundError,
    ConversionError,
    TransportError,
    UnknownCommandError,
)
from .logger import BlockLogger, LogLevel

__all__ = [
    'DEFAULT_CONFIG',
    'apply_logging',
    'load_config',
    'resolve_platform',
    'constrain',
    'convert',
    'map_value',
    'to_char',
    'to_code',
    'to_number',
    'ArgumentError',
    'BlockError',
    'BoardNotFoundError',
    'ConversionError',
    'TransportError',
    'UnknownCommandError',
    'BlockLogger',
    'LogLevel',
    ]
