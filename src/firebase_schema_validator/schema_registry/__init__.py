"""Schema registry exports."""

from .schema_graph import Declaration, RegistryState, SchemaGraph, ValidationReport
from .schema_registry import (
    RegistryStateError,
    SchemaRegistry,
    SchemaRejectedError,
    validate_declarations,
)

__all__ = [
    "Declaration",
    "RegistryState",
    "RegistryStateError",
    "SchemaGraph",
    "SchemaRegistry",
    "SchemaRejectedError",
    "ValidationReport",
    "validate_declarations",
]
