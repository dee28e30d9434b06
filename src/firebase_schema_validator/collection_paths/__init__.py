"""Collection path exports."""

from .collection_models import (
    COLLECTION_SEPARATOR,
    CollectionDeclaration,
    CollectionResolution,
    ResolvedCollection,
    RootCollection,
    SubCollection,
)
from .path_resolver import CollectionPathModel

__all__ = [
    "COLLECTION_SEPARATOR",
    "CollectionDeclaration",
    "CollectionPathModel",
    "CollectionResolution",
    "ResolvedCollection",
    "RootCollection",
    "SubCollection",
]
