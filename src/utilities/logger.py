"""
Logging utilities for the block runtime.
"""

import traceback

from adafruit_ticks import ticks_ms, ticks_diff


class LogLevel:
    """
    Log levels for categorizing log messages.
    """
    DEBUG = 0
    INFO = 1
    NOTE = 2
    WARNING = 3
    ERROR = 4

    NAMES = {
        "DEBUG": DEBUG,
        "INFO": INFO,
        "NOTE": NOTE,
        "WARNING": WARNING,
        "ERROR": ERROR,
    }

    @classmethod
    def from_name(cls, name, default=INFO):
        """Resolve a level from a config string like "debug" or "WARNING"."""
        if isinstance(name, int):
            return name
        if not name:
            return default
        return cls.NAMES.get(str(name).upper(), default)


class BlockLogger:
    """Class-level logger shared by the catalog, dispatcher and board link."""

    # Global Configuration
    LEVEL = LogLevel.INFO
    SOURCE = "BLKS"
    PRINT_TO_CONSOLE = True
    USE_COLORS = True
    WRITE_TO_FILE = False
    LOG_FILE_PATH = "blocks.log"

    COLORS = {
        LogLevel.DEBUG: "\033[90m",    # Gray
        LogLevel.INFO: "\033[94m",     # Blue
        LogLevel.NOTE: "\033[96m",     # Cyan
        LogLevel.WARNING: "\033[93m",  # Yellow
        LogLevel.ERROR: "\033[91m",    # Red
        "RESET": "\033[0m"
    }

    LEVEL_TAGS = {
        LogLevel.DEBUG: "DBUG",
        LogLevel.INFO: "INFO",
        LogLevel.NOTE: "NOTE",
        LogLevel.WARNING: "WARN",
        LogLevel.ERROR: "!ERR"
    }

    _start_ms = ticks_ms()

    @classmethod
    def set_level(cls, level):
        cls.LEVEL = LogLevel.from_name(level, cls.LEVEL)

    @classmethod
    def enable_file_logging(cls, enable=True, path=None):
        cls.WRITE_TO_FILE = enable
        if path:
            cls.LOG_FILE_PATH = path

    @classmethod
    def _get_timestamp(cls):
        """Returns fixed-width seconds since the logger was loaded."""
        elapsed = ticks_diff(ticks_ms(), cls._start_ms)
        return f"{elapsed / 1000:>8.3f}"

    @classmethod
    def format(cls, level, module_tag, message, source_tag=None):
        if source_tag is None:
            source_tag = cls.SOURCE
        lvl_tag = cls.LEVEL_TAGS[level]
        # Format: [   1.234][INFO][BLKS][DISP] setPinMode handed off
        return f"[{cls._get_timestamp()}][{lvl_tag:<4}][{source_tag:<4}][{module_tag:<4}] {message}"

    @classmethod
    def _log(cls, level, module_tag, message, source_tag=None):
        """Core routing method."""
        if level < cls.LEVEL:
            return

        formatted_msg = cls.format(level, module_tag, message, source_tag)

        if cls.PRINT_TO_CONSOLE:
            if cls.USE_COLORS:
                print(f"{cls.COLORS[level]}{formatted_msg}{cls.COLORS['RESET']}")
            else:
                print(formatted_msg)

        if cls.WRITE_TO_FILE:
            try:
                with open(cls.LOG_FILE_PATH, "a", encoding="utf-8") as f:
                    f.write(formatted_msg + "\n")
            except OSError as e:
                if cls.PRINT_TO_CONSOLE:
                    print(f"Logger OS Error: {e}")

    # Convenience Wrappers
    @classmethod
    def debug(cls, tag, msg, src=None):
        cls._log(LogLevel.DEBUG, tag, msg, source_tag=src)

    @classmethod
    def info(cls, tag, msg, src=None):
        cls._log(LogLevel.INFO, tag, msg, source_tag=src)

    @classmethod
    def note(cls, tag, msg, src=None):
        cls._log(LogLevel.NOTE, tag, msg, source_tag=src)

    @classmethod
    def warning(cls, tag, msg, src=None):
        cls._log(LogLevel.WARNING, tag, msg, source_tag=src)

    @classmethod
    def error(cls, tag, msg, src=None):
        cls._log(LogLevel.ERROR, tag, msg, source_tag=src)

    @classmethod
    def exception(cls, tag, msg, exc, src=None):
        """Log an error followed by the formatted traceback of ``exc``."""
        cls._log(LogLevel.ERROR, tag, f"{msg}: {exc!r}", source_tag=src)
        if cls.LEVEL <= LogLevel.DEBUG:
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__):
                for part in line.rstrip().splitlines():
                    cls._log(LogLevel.DEBUG, tag, part, source_tag=src)
