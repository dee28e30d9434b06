"""Schema registry and cross-entity validation service."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from firebase_schema_validator.auth_domains.auth_models import AuthDomainDeclaration
from firebase_schema_validator.auth_domains.auth_validation import AuthDomainModel
from firebase_schema_validator.collection_paths.collection_models import (
    CollectionResolution,
    RootCollection,
    SubCollection,
)
from firebase_schema_validator.collection_paths.path_resolver import CollectionPathModel
from firebase_schema_validator.configuration.runtime_settings import ValidationSettings
from firebase_schema_validator.database_targets.database_models import (
    DatabaseDeclaration,
    validate_databases,
)
from firebase_schema_validator.diagnostics.issue_models import ErrorKind, ValidationIssue
from firebase_schema_validator.field_directives.directive_models import EntityDeclaration
from firebase_schema_validator.field_directives.entity_validation import validate_entities
from firebase_schema_validator.storage_tree.storage_models import (
    StorageDeclaration,
    StorageNode,
    StorageTree,
)
from firebase_schema_validator.storage_tree.tree_builder import build_tree

from .schema_graph import Declaration, RegistryState, SchemaGraph, ValidationReport

_LOGGER = logging.getLogger(__name__)


class RegistryStateError(RuntimeError):
    """Raised when the registry is used out of lifecycle order."""


class SchemaRejectedError(RegistryStateError):
    """Raised when the graph of a rejected validation pass is requested."""


@dataclass
class _CollectedDeclarations:
    """Declarations received while collecting, grouped by kind."""

    ordered: list[Declaration] = field(default_factory=list)
    collections: list[RootCollection | SubCollection] = field(default_factory=list)
    storage: list[StorageDeclaration] = field(default_factory=list)
    auth: list[AuthDomainDeclaration] = field(default_factory=list)
    entities: list[EntityDeclaration] = field(default_factory=list)
    databases: list[DatabaseDeclaration] = field(default_factory=list)


class SchemaRegistry:
    """Collects declarations, resolves them and exposes the validated graph.

    Lifecycle: EMPTY -> COLLECTING -> RESOLVING -> VALIDATED | REJECTED.
    Declaring again after a pass requires `reset()`, which drops the whole
    graph.
    """

    def __init__(self, settings: ValidationSettings | None = None) -> None:
        self._settings = settings or ValidationSettings()
        self._state = RegistryState.EMPTY
        self._collected = _CollectedDeclarations()
        self._report: ValidationReport | None = None

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def settings(self) -> ValidationSettings:
        return self._settings

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        return tuple(self._collected.ordered)

    def declare(self, declaration: Declaration) -> None:
        """Accept one declaration of any kind while collecting."""
        if self._state not in (RegistryState.EMPTY, RegistryState.COLLECTING):
            raise RegistryStateError(
                f"Cannot declare while {self._state.value}; call reset() first."
            )
        group = self._group_for(declaration)
        group.append(declaration)
        self._collected.ordered.append(declaration)
        if self._state == RegistryState.EMPTY:
            _LOGGER.debug("registry state %s -> %s", self._state.value, "collecting")
            self._state = RegistryState.COLLECTING

    def declare_all(self, declarations: Iterable[Declaration]) -> None:
        """Accept declarations in any order."""
        for declaration in declarations:
            self.declare(declaration)

    def validate(self) -> ValidationReport:
        """Resolve and validate everything declared, collecting every issue."""
        if self._state not in (RegistryState.EMPTY, RegistryState.COLLECTING):
            raise RegistryStateError(
                f"Cannot validate while {self._state.value}; call reset() first."
            )
        _LOGGER.debug("registry state %s -> resolving", self._state.value)
        self._state = RegistryState.RESOLVING

        resolution = self._resolve_collections()
        storage_trees, storage_issues = self._build_storage()
        auth_model = AuthDomainModel(resolution.full_paths())
        for declaration in self._collected.auth:
            auth_model.register(declaration)
        entity_issues = validate_entities(self._collected.entities)
        database_issues = validate_databases(self._collected.databases)

        issues = (
            resolution.issues
            + storage_issues
            + auth_model.issues
            + tuple(entity_issues)
            + tuple(database_issues)
        )
        rejecting = [
            issue for issue in issues if issue.is_error or self._settings.warnings_as_errors
        ]
        if rejecting:
            self._state = RegistryState.REJECTED
            self._report = ValidationReport(state=self._state, issues=issues)
        else:
            self._state = RegistryState.VALIDATED
            graph = SchemaGraph(
                collections=resolution.resolved,
                storage=MappingProxyType(storage_trees),
                auth_domains=MappingProxyType(dict(auth_model.domains)),
                entities=MappingProxyType(
                    {entity.entity_name: entity for entity in self._collected.entities}
                ),
                databases=MappingProxyType(
                    {database.name: database for database in self._collected.databases}
                ),
                declarations=tuple(self._collected.ordered),
                warnings=issues,
            )
            self._report = ValidationReport(state=self._state, issues=issues, graph=graph)
        _LOGGER.debug(
            "registry state resolving -> %s with %d issue(s)", self._state.value, len(issues)
        )
        return self._report

    @property
    def graph(self) -> SchemaGraph:
        """Return the validated graph."""
        if self._state == RegistryState.REJECTED:
            raise SchemaRejectedError("Schema was rejected; inspect issues instead.")
        if self._state != RegistryState.VALIDATED or self._report is None:
            raise RegistryStateError(f"No validated schema while {self._state.value}.")
        assert self._report.graph is not None
        return self._report.graph

    @property
    def issues(self) -> tuple[ValidationIssue, ...]:
        """Return the ordered issues of the last pass."""
        if self._report is None:
            raise RegistryStateError(f"No validation pass has run while {self._state.value}.")
        return self._report.issues

    def reset(self) -> None:
        """Discard every declaration and the graph built from them."""
        _LOGGER.debug("registry state %s -> empty (reset)", self._state.value)
        self._state = RegistryState.EMPTY
        self._collected = _CollectedDeclarations()
        self._report = None

    def _group_for(self, declaration: Declaration) -> list:
        if isinstance(declaration, RootCollection | SubCollection):
            return self._collected.collections
        if isinstance(declaration, StorageDeclaration):
            return self._collected.storage
        if isinstance(declaration, AuthDomainDeclaration):
            return self._collected.auth
        if isinstance(declaration, EntityDeclaration):
            return self._collected.entities
        if isinstance(declaration, DatabaseDeclaration):
            return self._collected.databases
        raise TypeError(f"Unsupported declaration type: {type(declaration).__name__}")

    def _resolve_collections(self) -> CollectionResolution:
        model = CollectionPathModel()
        for declaration in self._collected.collections:
            model.register(declaration)
        return model.resolve()

    def _build_storage(
        self,
    ) -> tuple[dict[str | None, StorageTree], tuple[ValidationIssue, ...]]:
        roots_by_bucket: dict[str | None, list[StorageNode]] = {}
        conflicts_by_bucket: dict[str | None, list[ValidationIssue]] = {}
        owners_by_bucket: dict[str | None, dict[str, str]] = {}
        for declaration in self._collected.storage:
            tree = build_tree(
                declaration.roots,
                entity_name=declaration.entity_name,
                collect_all=self._settings.collect_all_storage_conflicts,
            )
            declaration_conflicts = list(tree.conflicts) + _shared_root_conflicts(
                declaration, owners_by_bucket.setdefault(declaration.bucket, {})
            )
            # First-conflict mode reports at most one conflict per declaration.
            if not self._settings.collect_all_storage_conflicts:
                declaration_conflicts = declaration_conflicts[:1]
            conflicts_by_bucket.setdefault(declaration.bucket, []).extend(declaration_conflicts)
            roots_by_bucket.setdefault(declaration.bucket, []).extend(tree.roots)

        trees = {
            bucket: StorageTree(roots=tuple(roots), conflicts=tuple(conflicts_by_bucket[bucket]))
            for bucket, roots in roots_by_bucket.items()
        }
        issues = tuple(issue for conflicts in conflicts_by_bucket.values() for issue in conflicts)
        return trees, issues


def _shared_root_conflicts(
    declaration: StorageDeclaration, owners: dict[str, str]
) -> list[ValidationIssue]:
    """Report roots already declared by another entity in the same bucket."""
    issues: list[ValidationIssue] = []
    local_names: set[str] = set()
    for root in declaration.roots:
        if root.name in local_names or not isinstance(root.name, str) or not root.name.strip():
            continue
        local_names.add(root.name)
        owner = owners.get(root.name)
        if owner is None:
            owners[root.name] = declaration.entity_name
            continue
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.CONFLICT,
                entity_name=declaration.entity_name,
                path=root.name,
                message=(
                    f"Storage conflict at '{root.name}': root already declared by '{owner}'."
                ),
                reference=owner,
            )
        )
    return issues


def validate_declarations(
    declarations: Iterable[Declaration], settings: ValidationSettings | None = None
) -> ValidationReport:
    """Run one full validation pass over `declarations` with a fresh registry."""
    registry = SchemaRegistry(settings)
    registry.declare_all(declarations)
    return registry.validate()
