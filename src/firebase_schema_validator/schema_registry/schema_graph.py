"""Schema graph entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from firebase_schema_validator.auth_domains.auth_models import AuthDomainDeclaration, AuthKind
from firebase_schema_validator.collection_paths.collection_models import (
    ResolvedCollection,
    RootCollection,
    SubCollection,
)
from firebase_schema_validator.database_targets.database_models import DatabaseDeclaration
from firebase_schema_validator.diagnostics.issue_models import ValidationIssue
from firebase_schema_validator.field_directives.directive_models import EntityDeclaration
from firebase_schema_validator.storage_tree.storage_models import StorageDeclaration, StorageTree

Declaration = (
    EntityDeclaration
    | StorageDeclaration
    | RootCollection
    | SubCollection
    | AuthDomainDeclaration
    | DatabaseDeclaration
)


class RegistryState(str, Enum):
    """Lifecycle of a schema registry."""

    EMPTY = "empty"
    COLLECTING = "collecting"
    RESOLVING = "resolving"
    VALIDATED = "validated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SchemaGraph:  # pylint: disable=too-many-instance-attributes
    """Fully resolved, conflict-free schema handed to code generators."""

    collections: tuple[ResolvedCollection, ...]
    storage: Mapping[str | None, StorageTree]
    auth_domains: Mapping[AuthKind, AuthDomainDeclaration]
    entities: Mapping[str, EntityDeclaration]
    databases: Mapping[str, DatabaseDeclaration]
    declarations: tuple[Declaration, ...]
    warnings: tuple[ValidationIssue, ...] = ()

    def collection_paths(self) -> tuple[str, ...]:
        """Return resolved full paths in declaration order."""
        return tuple(collection.full_path for collection in self.collections)

    def collection(self, full_path: str) -> ResolvedCollection | None:
        """Return the resolved collection at `full_path`, if any."""
        for candidate in self.collections:
            if candidate.full_path == full_path:
                return candidate
        return None

    def children_of(self, full_path: str) -> tuple[ResolvedCollection, ...]:
        """Return the direct sub-collections of `full_path`."""
        return tuple(
            collection
            for collection in self.collections
            if collection.parent_full_path == full_path
        )

    def storage_paths(self) -> dict[str | None, tuple[str, ...]]:
        """Return every storage node path grouped by bucket."""
        return {bucket: tree.paths() for bucket, tree in self.storage.items()}


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of one validation pass."""

    state: RegistryState
    issues: tuple[ValidationIssue, ...]
    graph: SchemaGraph | None = None

    @property
    def is_valid(self) -> bool:
        return self.state == RegistryState.VALIDATED

    @property
    def errors(self) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.issues if issue.is_error)

    @property
    def warnings(self) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.issues if not issue.is_error)
