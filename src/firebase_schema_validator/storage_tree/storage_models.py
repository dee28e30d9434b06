"""Storage tree entities."""

from __future__ import annotations

from dataclasses import dataclass

from firebase_schema_validator.diagnostics.issue_models import ValidationIssue

STORAGE_SEPARATOR = "/"
DISPLAY_SEPARATOR = "."


@dataclass(frozen=True)
class StorageNode:
    """Named folder in a hierarchical blob store."""

    name: str
    children: tuple[StorageNode, ...] = ()


@dataclass(frozen=True)
class StorageDeclaration:
    """Forest of storage roots declared by one entity.

    Declarations that share a `bucket` are validated as one forest.
    """

    entity_name: str
    roots: tuple[StorageNode, ...]
    bucket: str | None = None


@dataclass(frozen=True)
class StorageTree:
    """Validated storage forest and the conflicts found while building it."""

    roots: tuple[StorageNode, ...]
    conflicts: tuple[ValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        """Return True when no conflicts were found."""
        return not self.conflicts

    def paths(self) -> tuple[str, ...]:
        """Return every node path in pre-order, slash separated."""
        collected: list[str] = []
        stack = [(node, node.name) for node in reversed(self.roots)]
        while stack:
            node, path = stack.pop()
            collected.append(path)
            stack.extend(
                (child, f"{path}{STORAGE_SEPARATOR}{child.name}")
                for child in reversed(node.children)
            )
        return tuple(collected)
