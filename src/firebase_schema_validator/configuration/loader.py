"""Validation settings loader."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .runtime_settings import ConflictCollection, ValidationSettings

_KNOWN_KEYS = frozenset({"storage_conflicts", "warnings_as_errors"})


class ConfigurationError(Exception):
    """Raised when the settings section is invalid."""


def parse_validation_settings(value: Any) -> ValidationSettings:
    """Normalize the optional `settings` section of a declarations file."""
    if value is None:
        return ValidationSettings()
    if not isinstance(value, Mapping):
        raise ConfigurationError("Configuration section 'settings' must be a mapping.")

    unknown = sorted(str(key) for key in value if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}")

    storage_conflicts = _parse_conflict_collection(
        value.get("storage_conflicts", ConflictCollection.ALL.value)
    )
    warnings_as_errors = _require_bool(
        value.get("warnings_as_errors", False), "settings.warnings_as_errors"
    )
    return ValidationSettings(
        storage_conflicts=storage_conflicts,
        warnings_as_errors=warnings_as_errors,
    )


def override_settings(
    settings: ValidationSettings,
    *,
    first_conflict_only: bool = False,
    warnings_as_errors: bool = False,
) -> ValidationSettings:
    """Apply command line flags on top of file settings; flags only tighten."""
    return ValidationSettings(
        storage_conflicts=(
            ConflictCollection.FIRST if first_conflict_only else settings.storage_conflicts
        ),
        warnings_as_errors=settings.warnings_as_errors or warnings_as_errors,
    )


def _parse_conflict_collection(value: Any) -> ConflictCollection:
    if not isinstance(value, str):
        raise ConfigurationError("settings.storage_conflicts must be a string.")
    try:
        return ConflictCollection(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(option.value for option in ConflictCollection)
        raise ConfigurationError(
            f"settings.storage_conflicts must be one of: {choices}."
        ) from exc


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
