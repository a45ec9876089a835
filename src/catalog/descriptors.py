# File: src/catalog/descriptors.py
"""Immutable records that make up the block catalog.

Every record is a frozen dataclass holding tuples, so a catalog built at
load time can be shared between execution contexts without copying.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from protocol import (
    ARGUMENT_BOUNDS,
    BLOCK_BOOLEAN,
    BLOCK_COMMAND,
    BLOCK_CONDITIONAL,
    BLOCK_REPORTER,
    NUMERIC_ARGUMENT_TYPES,
    RESPONSE_BOOLEAN,
    RESPONSE_NONE,
    RESPONSE_NUMBER,
    SEPARATOR,
    call_class_of,
)


@dataclass(frozen=True)
class MenuItem:
    """One selectable option: the label shown and the value passed on."""

    text: str
    value: Any


@dataclass(frozen=True)
class Menu:
    """A named, ordered list of options.

    Attributes:
        name: Key descriptors use to reference the menu.
        items: Ordered ``MenuItem`` tuple.
        accept_reporters: The editor may drop a computed value in place of a
            listed option.
    """

    name: str
    items: tuple
    accept_reporters: bool = False

    @property
    def values(self):
        return tuple(item.value for item in self.items)

    def __contains__(self, value):
        wanted = str(value)
        return any(str(v) == wanted for v in self.values)

    def lookup(self, value):
        """Return the menu's own value matching ``value`` by string, or None."""
        wanted = str(value)
        for v in self.values:
            if str(v) == wanted:
                return v
        return None


@dataclass(frozen=True)
class ArgSpec:
    """Schema for one block argument."""

    name: str
    type: str
    default: Any = None
    menu: Optional[str] = None

    @property
    def bounds(self):
        """Closed ``(low, high)`` interval, or None when unbounded."""
        return ARGUMENT_BOUNDS.get(self.type)

    @property
    def is_numeric(self):
        return self.type in NUMERIC_ARGUMENT_TYPES


_RESPONSES = {
    BLOCK_COMMAND: RESPONSE_NONE,
    BLOCK_CONDITIONAL: RESPONSE_NONE,
    BLOCK_BOOLEAN: RESPONSE_BOOLEAN,
    BLOCK_REPORTER: RESPONSE_NUMBER,
}


@dataclass(frozen=True)
class BlockDescriptor:
    """Declarative schema for one user-facing operation."""

    opcode: str
    block_type: str
    arguments: tuple = ()
    text: str = ""
    response: Optional[str] = None
    call_class: Optional[str] = None

    def __post_init__(self):
        # Derived fields are filled once, the instance is frozen afterwards
        if self.response is None:
            object.__setattr__(self, "response", _RESPONSES[self.block_type])
        if self.call_class is None:
            object.__setattr__(self, "call_class", call_class_of(self.opcode))

    @property
    def argument_names(self):
        return tuple(arg.name for arg in self.arguments)

    def argument(self, name):
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


@dataclass(frozen=True)
class Category:
    """A group of blocks sharing colours and a menu set."""

    id: str
    name: str
    colors: tuple
    blocks: tuple
    menus: tuple = field(default=())

    @property
    def descriptors(self):
        """Blocks without the separators."""
        return tuple(b for b in self.blocks if b != SEPARATOR)

    def menu(self, name):
        for menu in self.menus:
            if menu.name == name:
                return menu
        return None


def block(opcode, block_type, *arguments, text="", response=None):
    """Shorthand used by the manifest to declare a descriptor."""
    return BlockDescriptor(
        opcode=opcode,
        block_type=block_type,
        arguments=tuple(arguments),
        text=text,
        response=response,
    )


def arg(name, arg_type, default=None, menu=None):
    return ArgSpec(name=name, type=arg_type, default=default, menu=menu)
