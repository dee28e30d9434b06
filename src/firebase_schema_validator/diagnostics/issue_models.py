"""Validation diagnostics entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of problems reported by a validation pass."""

    INVALID_LITERAL = "InvalidLiteralError"
    CONFLICT = "ConflictError"
    UNRESOLVED_PARENT = "UnresolvedParentError"
    UNKNOWN_COLLECTION = "UnknownCollectionError"
    DUPLICATE_AUTH_DOMAIN = "DuplicateAuthDomainError"
    DIRECTIVE_CONFLICT = "DirectiveConflict"
    UNKNOWN_FIELD = "UnknownFieldError"
    INVALID_DECLARATION = "InvalidDeclarationError"


class Severity(str, Enum):
    """Issue severity; only errors reject a schema by default."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found while validating declarations.

    `entity_name` names the declaring entity and is only used for reporting.
    `reference` carries the name the issue points at when there is one, e.g.
    the missing parent of an unresolved sub-collection.
    """

    error_kind: ErrorKind
    entity_name: str
    path: str
    message: str
    severity: Severity = Severity.ERROR
    reference: str | None = None

    @property
    def is_error(self) -> bool:
        """Return True when the issue is error-level."""
        return self.severity == Severity.ERROR

    def as_record(self) -> dict[str, str | None]:
        """Return a plain mapping suitable for JSON reporting."""
        return {
            "error_kind": self.error_kind.value,
            "entity_name": self.entity_name,
            "path": self.path,
            "message": self.message,
            "severity": self.severity.value,
            "reference": self.reference,
        }
