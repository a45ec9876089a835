"""Transport layer for the block runtime.

This module provides an abstraction layer that decouples the physical
transport from the board command surface. The dispatcher works with a
BasePeripheral, BoardLink implements that surface with Message objects,
and Transport implementations handle the actual serialization and
physical transmission.
"""

from .message import Message
from .base_transport import BaseTransport
from .base_peripheral import BasePeripheral
from .board_link import BoardLink

__all__ = ['Message', 'BaseTransport', 'BasePeripheral', 'BoardLink']
