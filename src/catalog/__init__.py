"""Top-level package for the block catalog."""

from .descriptors import ArgSpec, BlockDescriptor, Category, Menu, MenuItem
from .manifest import Catalog, build_catalog, get_catalog

__all__ = [
    "ArgSpec",
    "BlockDescriptor",
    "Catalog",
    "Category",
    "Menu",
    "MenuItem",
    "build_catalog",
    "get_catalog",
]
