"""Storage tree exports."""

from .storage_models import (
    DISPLAY_SEPARATOR,
    STORAGE_SEPARATOR,
    StorageDeclaration,
    StorageNode,
    StorageTree,
)
from .tree_builder import build_tree

__all__ = [
    "DISPLAY_SEPARATOR",
    "STORAGE_SEPARATOR",
    "StorageDeclaration",
    "StorageNode",
    "StorageTree",
    "build_tree",
]
