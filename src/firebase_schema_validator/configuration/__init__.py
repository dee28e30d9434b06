"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_DECLARATIONS_FILENAME,
    build_declarations_scaffold,
    write_declarations_scaffold,
)
from .loader import ConfigurationError, override_settings, parse_validation_settings
from .runtime_settings import ConflictCollection, ValidationSettings

__all__ = [
    "ConflictCollection",
    "ValidationSettings",
    "ConfigurationError",
    "override_settings",
    "parse_validation_settings",
    "DEFAULT_DECLARATIONS_FILENAME",
    "build_declarations_scaffold",
    "write_declarations_scaffold",
]
