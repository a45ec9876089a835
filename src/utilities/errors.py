# File: src/utilities/errors.py
"""Exception types shared by the catalog, dispatcher and board link."""


class BlockError(Exception):
    """Base class for every error raised by the block runtime."""
    pass


class ArgumentError(BlockError, ValueError):
    """A block argument broke its contract (range, menu, arity or type)."""

    def __init__(self, message, argument=None, value=None):
        super().__init__(message)
        self.argument = argument
        self.value = value


class ConversionError(ArgumentError):
    """Raised by the data conversion blocks on unparsable input."""
    pass


class UnknownCommandError(BlockError, KeyError):
    """The opcode is not part of the catalog."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class TransportError(BlockError):
    """The peripheral failed to deliver a command or answer a request."""

    def __init__(self, message, command=None):
        super().__init__(message)
        self.command = command


class BoardNotFoundError(BlockError, LookupError):
    """Raised when a board id is not a known variant."""
    pass
