"""Storage tree building and validation service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from firebase_schema_validator.diagnostics.issue_models import ErrorKind, ValidationIssue

from .storage_models import DISPLAY_SEPARATOR, STORAGE_SEPARATOR, StorageNode, StorageTree


@dataclass
class _WalkState:
    """Mutable collector for one tree walk."""

    entity_name: str
    collect_all: bool
    conflicts: list[ValidationIssue]

    @property
    def should_stop(self) -> bool:
        return bool(self.conflicts) and not self.collect_all


def build_tree(
    roots: Sequence[StorageNode], *, entity_name: str = "", collect_all: bool = False
) -> StorageTree:
    """Validate a storage forest depth-first, pre-order, left to right.

    Each node is checked for a non-empty name, absence of the separator and
    uniqueness among its siblings before its children are visited. Without
    `collect_all` the walk stops at the first conflict.
    """
    state = _WalkState(entity_name=entity_name, collect_all=collect_all, conflicts=[])
    _walk_siblings(roots, parent_path="", state=state)
    return StorageTree(roots=tuple(roots), conflicts=tuple(state.conflicts))


def _walk_siblings(nodes: Sequence[StorageNode], *, parent_path: str, state: _WalkState) -> None:
    seen_names: set[str] = set()
    for node in nodes:
        path = node.name if not parent_path else f"{parent_path}{DISPLAY_SEPARATOR}{node.name}"
        reason = _node_conflict_reason(node, seen_names)
        if reason is not None:
            state.conflicts.append(_conflict(path, reason, state.entity_name))
            if state.should_stop:
                return
        seen_names.add(node.name)
        _walk_siblings(node.children, parent_path=path, state=state)
        if state.should_stop:
            return


def _node_conflict_reason(node: StorageNode, seen_names: set[str]) -> str | None:
    if not isinstance(node.name, str) or not node.name.strip():
        return "storage node name must not be empty"
    if STORAGE_SEPARATOR in node.name:
        return f"storage node name must not contain '{STORAGE_SEPARATOR}'"
    if node.name in seen_names:
        return f"duplicate sibling name '{node.name}'"
    return None


def _conflict(path: str, reason: str, entity_name: str) -> ValidationIssue:
    return ValidationIssue(
        error_kind=ErrorKind.CONFLICT,
        entity_name=entity_name,
        path=path,
        message=f"Storage conflict at '{path}': {reason}.",
    )
