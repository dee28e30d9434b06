"""Key-path database entities and validation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from firebase_schema_validator.diagnostics.issue_models import ErrorKind, ValidationIssue


@dataclass(frozen=True)
class DatabaseDeclaration:
    """Key-path database node an entity is stored under.

    `database_url` is opaque; an empty value means the default database.
    """

    entity_name: str
    name: str
    database_url: str = ""


def validate_databases(declarations: Sequence[DatabaseDeclaration]) -> list[ValidationIssue]:
    """Report empty and duplicate database names."""
    issues: list[ValidationIssue] = []
    owners: dict[str, str] = {}
    for declaration in declarations:
        if not isinstance(declaration.name, str) or not declaration.name.strip():
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.INVALID_DECLARATION,
                    entity_name=declaration.entity_name,
                    path=declaration.entity_name,
                    message="Database name must not be empty.",
                )
            )
            continue
        owner = owners.get(declaration.name)
        if owner is not None:
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.CONFLICT,
                    entity_name=declaration.entity_name,
                    path=declaration.name,
                    message=f"Database name '{declaration.name}' is already used by '{owner}'.",
                    reference=owner,
                )
            )
            continue
        owners[declaration.name] = declaration.entity_name
    return issues
