"""Collection path registration and resolution service."""

from __future__ import annotations

import logging
from collections import deque

from firebase_schema_validator.diagnostics.issue_models import ErrorKind, ValidationIssue

from .collection_models import (
    COLLECTION_SEPARATOR,
    CollectionDeclaration,
    CollectionResolution,
    ResolvedCollection,
    RootCollection,
    SubCollection,
)

_LOGGER = logging.getLogger(__name__)


class CollectionPathModel:
    """Registry of collection declarations keyed by full path.

    Declarations may arrive in any order; parents are linked by `resolve()`.
    """

    def __init__(self) -> None:
        self._by_full_path: dict[str, CollectionDeclaration] = {}
        self._registration_issues: list[ValidationIssue] = []

    def __len__(self) -> int:
        return len(self._by_full_path)

    def register(self, declaration: CollectionDeclaration) -> list[ValidationIssue]:
        """Register one declaration and return the problems it introduces."""
        issues = _segment_issues(declaration)
        if not issues:
            full_path = declaration.full_path
            if full_path in self._by_full_path:
                issues.append(
                    ValidationIssue(
                        error_kind=ErrorKind.CONFLICT,
                        entity_name=declaration.entity_name,
                        path=full_path,
                        message=(
                            f"Collection '{declaration.path}' is declared more than once "
                            f"under the same parent (first by "
                            f"'{self._by_full_path[full_path].entity_name}')."
                        ),
                        reference=self._by_full_path[full_path].entity_name,
                    )
                )
            else:
                self._by_full_path[full_path] = declaration
        self._registration_issues.extend(issues)
        return issues

    def resolve(self) -> CollectionResolution:
        """Attach sub-collections to their parents until nothing more resolves.

        Sub-collections whose parent never resolves, including members of a
        parent cycle, are reported once each in declaration order.
        """
        children_by_parent: dict[str, list[SubCollection]] = {}
        pending: dict[str, SubCollection] = {}
        resolved: dict[str, ResolvedCollection] = {}
        queue: deque[ResolvedCollection] = deque()

        for full_path, declaration in self._by_full_path.items():
            if isinstance(declaration, RootCollection):
                root = ResolvedCollection(
                    full_path=full_path,
                    declaration=declaration,
                    parent_full_path=None,
                    depth=0,
                )
                resolved[full_path] = root
                queue.append(root)
            else:
                pending[full_path] = declaration
                children_by_parent.setdefault(declaration.parent_path, []).append(declaration)

        while queue:
            parent = queue.popleft()
            for child in children_by_parent.pop(parent.full_path, []):
                attached = ResolvedCollection(
                    full_path=child.full_path,
                    declaration=child,
                    parent_full_path=parent.full_path,
                    depth=parent.depth + 1,
                )
                resolved[child.full_path] = attached
                del pending[child.full_path]
                queue.append(attached)

        unresolved = [
            _unresolved_parent_issue(
                declaration, parent_declared=declaration.parent_path in pending
            )
            for declaration in pending.values()
        ]
        _LOGGER.debug(
            "resolved %d collection(s), %d unresolved", len(resolved), len(unresolved)
        )
        ordered = tuple(
            resolved[full_path] for full_path in self._by_full_path if full_path in resolved
        )
        return CollectionResolution(
            resolved=ordered,
            issues=tuple(self._registration_issues + unresolved),
        )


def _segment_issues(declaration: CollectionDeclaration) -> list[ValidationIssue]:
    segments = [("path", declaration.path)]
    if isinstance(declaration, SubCollection):
        segments.append(("parent path", declaration.parent_path))
    issues: list[ValidationIssue] = []
    for label, value in segments:
        if not isinstance(value, str) or not value.strip():
            reason = f"collection {label} must not be empty"
        elif label == "path" and COLLECTION_SEPARATOR in value:
            reason = f"collection path must not contain '{COLLECTION_SEPARATOR}'"
        else:
            continue
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.INVALID_DECLARATION,
                entity_name=declaration.entity_name,
                path=str(declaration.path),
                message=f"Invalid collection declaration: {reason}.",
            )
        )
    return issues


def _unresolved_parent_issue(
    declaration: SubCollection, *, parent_declared: bool
) -> ValidationIssue:
    if parent_declared:
        detail = f"parent '{declaration.parent_path}' never resolves (cyclic or broken chain)"
    else:
        detail = f"parent '{declaration.parent_path}' is not declared"
    return ValidationIssue(
        error_kind=ErrorKind.UNRESOLVED_PARENT,
        entity_name=declaration.entity_name,
        path=declaration.path,
        message=f"Sub-collection '{declaration.path}' cannot be attached: {detail}.",
        reference=declaration.parent_path,
    )
