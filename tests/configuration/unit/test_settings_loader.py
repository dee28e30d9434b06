"""Validation settings loader tests."""

from __future__ import annotations

import pytest
from firebase_schema_validator.configuration import (
    ConfigurationError,
    ConflictCollection,
    ValidationSettings,
    override_settings,
    parse_validation_settings,
)


def test_missing_section_uses_defaults() -> None:
    settings = parse_validation_settings(None)

    assert settings == ValidationSettings()
    assert settings.collect_all_storage_conflicts is True
    assert settings.warnings_as_errors is False


def test_parses_explicit_values_case_insensitively() -> None:
    settings = parse_validation_settings(
        {"storage_conflicts": " FIRST ", "warnings_as_errors": True}
    )

    assert settings.storage_conflicts == ConflictCollection.FIRST
    assert settings.collect_all_storage_conflicts is False
    assert settings.warnings_as_errors is True


@pytest.mark.parametrize(
    ("section", "message"),
    [
        ("all", "must be a mapping"),
        ({"storage_conflicts": 1}, "must be a string"),
        ({"storage_conflicts": "most"}, "must be one of: all, first"),
        ({"warnings_as_errors": "yes"}, "must be a boolean"),
        ({"collect": "all"}, "Unknown settings: collect"),
    ],
)
def test_invalid_settings_are_rejected(section: object, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        parse_validation_settings(section)


def test_command_line_flags_only_tighten_settings() -> None:
    strict = ValidationSettings(
        storage_conflicts=ConflictCollection.FIRST, warnings_as_errors=True
    )

    assert override_settings(strict) == strict
    assert override_settings(
        ValidationSettings(), first_conflict_only=True, warnings_as_errors=True
    ) == strict
