"""Key-path database exports."""

from .database_models import DatabaseDeclaration, validate_databases

__all__ = [
    "DatabaseDeclaration",
    "validate_databases",
]
