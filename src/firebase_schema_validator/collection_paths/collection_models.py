"""Collection path entities."""

from __future__ import annotations

from dataclasses import dataclass

from firebase_schema_validator.diagnostics.issue_models import ValidationIssue

COLLECTION_SEPARATOR = "/"


@dataclass(frozen=True)
class RootCollection:
    """Top-level document store collection."""

    entity_name: str
    path: str

    @property
    def full_path(self) -> str:
        return self.path


@dataclass(frozen=True)
class SubCollection:
    """Collection nested under the collection at `parent_path`."""

    entity_name: str
    parent_path: str
    path: str

    @property
    def full_path(self) -> str:
        return f"{self.parent_path}{COLLECTION_SEPARATOR}{self.path}"


CollectionDeclaration = RootCollection | SubCollection


@dataclass(frozen=True)
class ResolvedCollection:
    """Collection attached to the path forest."""

    full_path: str
    declaration: CollectionDeclaration
    parent_full_path: str | None
    depth: int

    @property
    def is_root(self) -> bool:
        return self.parent_full_path is None


@dataclass(frozen=True)
class CollectionResolution:
    """Outcome of resolving every registered collection."""

    resolved: tuple[ResolvedCollection, ...]
    issues: tuple[ValidationIssue, ...]

    def full_paths(self) -> frozenset[str]:
        """Return the set of resolved full paths."""
        return frozenset(collection.full_path for collection in self.resolved)
