"""Literal value entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class InvalidLiteralError(ValueError):
    """Raised when a literal cannot be built from the supplied input."""


class LiteralKind(str, Enum):
    """Kinds of literal a generator can embed verbatim."""

    STRING = "string"
    DOUBLE = "double"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    ENUMERATION = "enumeration"
    OBJECT = "object"


@runtime_checkable
class Literalizable(Protocol):
    """Object able to render itself as a literal expression."""

    def to_literal(self) -> str:
        ...


@dataclass(frozen=True)
class LiteralValue:
    """Kind-tagged literal expression, frozen at construction time."""

    kind: LiteralKind
    expression: str

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LiteralKind):
            raise InvalidLiteralError(f"Unsupported literal kind: {self.kind!r}")
        if not isinstance(self.expression, str):
            raise InvalidLiteralError("Literal expression must be a string.")
        if self.kind != LiteralKind.NULL and not self.expression.strip():
            raise InvalidLiteralError(
                f"Literal expression must not be empty for kind '{self.kind.value}'."
            )
