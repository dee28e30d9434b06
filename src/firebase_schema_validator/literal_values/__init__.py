"""Literal value exports."""

from .literal_factories import (
    literal_from_mapping,
    literal_to_mapping,
    of_boolean,
    of_double,
    of_enumeration,
    of_integer,
    of_null,
    of_object,
    of_raw,
    of_string,
)
from .literal_models import InvalidLiteralError, Literalizable, LiteralKind, LiteralValue

__all__ = [
    "InvalidLiteralError",
    "Literalizable",
    "LiteralKind",
    "LiteralValue",
    "literal_from_mapping",
    "literal_to_mapping",
    "of_boolean",
    "of_double",
    "of_enumeration",
    "of_integer",
    "of_null",
    "of_object",
    "of_raw",
    "of_string",
]
