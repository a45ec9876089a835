# File: src/utilities/config.py
"""Runtime configuration loading."""

import json
import os
import sys

from .logger import BlockLogger, LogLevel

DEFAULT_CONFIG = {
    "board": "arduinoEsp32",      # Board variant id
    "platform": None,             # Upload platform, None means the running host
    "log_level": "INFO",          # DEBUG | INFO | NOTE | WARNING | ERROR
    "console_colors": True,       # ANSI colours on console log lines
    "log_to_file": False,         # Append log lines to log_file_path
    "log_file_path": "blocks.log",
}


def load_config(path="config.json"):
    """Load configuration from a JSON file if it exists, otherwise return defaults.

    Keys present in the file override the defaults, unknown keys are kept so
    callers can carry their own settings alongside.
    """
    merged = DEFAULT_CONFIG.copy()
    if not path or not os.path.exists(path):
        BlockLogger.warning("CONF", f"No {path} found. Using default configuration.")
        return merged

    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except (OSError, ValueError) as e:
        BlockLogger.error("CONF", f"Error loading {path}: {e}")
        BlockLogger.warning("CONF", "Using default configuration.")
        return merged

    if not isinstance(config_data, dict):
        BlockLogger.error("CONF", f"{path} must hold a JSON object, got {type(config_data).__name__}")
        return merged

    merged.update(config_data)
    BlockLogger.info("CONF", f"Configuration loaded from {path}")
    return merged


def resolve_platform(config):
    """Return the upload platform key (darwin, linux or win32)."""
    return config.get("platform") or sys.platform


def apply_logging(config):
    """Push the logging section of a config dict into BlockLogger."""
    BlockLogger.set_level(LogLevel.from_name(config.get("log_level"), LogLevel.INFO))
    BlockLogger.USE_COLORS = bool(config.get("console_colors", True))
    BlockLogger.enable_file_logging(
        bool(config.get("log_to_file", False)),
        config.get("log_file_path"),
    )
