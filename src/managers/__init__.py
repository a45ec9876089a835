"""Top-level package for manager classes."""

from .dispatcher import CommandDispatcher, CommandResult
from .interrupt_manager import InterruptEvent, InterruptManager, InterruptState

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "InterruptEvent",
    "InterruptManager",
    "InterruptState",
]
