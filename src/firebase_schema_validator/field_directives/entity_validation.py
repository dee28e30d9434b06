"""Entity-level directive validation service."""

from __future__ import annotations

from collections.abc import Sequence

from firebase_schema_validator.diagnostics.issue_models import (
    ErrorKind,
    Severity,
    ValidationIssue,
)

from .directive_models import EntityDeclaration


def validate_entity(entity: EntityDeclaration) -> list[ValidationIssue]:
    """Return every directive problem found in one entity declaration."""
    issues: list[ValidationIssue] = []
    issues.extend(_check_field_names(entity))
    issues.extend(_check_document_identifiers(entity))
    issues.extend(_check_resolved_keys(entity))
    issues.extend(_check_geo_index(entity))
    return issues


def validate_entities(entities: Sequence[EntityDeclaration]) -> list[ValidationIssue]:
    """Validate all entities and report duplicate entity names."""
    issues: list[ValidationIssue] = []
    seen_names: set[str] = set()
    for entity in entities:
        if entity.entity_name in seen_names:
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.CONFLICT,
                    entity_name=entity.entity_name,
                    path=entity.entity_name,
                    message=f"Entity '{entity.entity_name}' is declared more than once.",
                )
            )
            continue
        seen_names.add(entity.entity_name)
        issues.extend(validate_entity(entity))
    return issues


def _check_field_names(entity: EntityDeclaration) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            error_kind=ErrorKind.INVALID_DECLARATION,
            entity_name=entity.entity_name,
            path=entity.entity_name,
            message="Field names must be non-empty strings.",
        )
        for name in entity.fields
        if not isinstance(name, str) or not name.strip()
    ]


def _check_document_identifiers(entity: EntityDeclaration) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    identifier_fields = entity.document_identifier_fields()
    for name in identifier_fields:
        if entity.fields[name].include_in_write:
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.DIRECTIVE_CONFLICT,
                    entity_name=entity.entity_name,
                    path=f"{entity.entity_name}.{name}",
                    message=(
                        f"Field '{name}' is the document identifier and is also included "
                        "in writes; it will not be serialized into the payload."
                    ),
                    severity=Severity.WARNING,
                )
            )
    if len(identifier_fields) > 1:
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.DIRECTIVE_CONFLICT,
                entity_name=entity.entity_name,
                path=entity.entity_name,
                message=(
                    "Only one field may be the document identifier, found: "
                    + ", ".join(identifier_fields)
                ),
            )
        )
    return issues


def _check_resolved_keys(entity: EntityDeclaration) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    owners: dict[str, str] = {}
    for name, directive in entity.fields.items():
        if not directive.is_written:
            continue
        key = directive.resolved_key(name)
        owner = owners.get(key)
        if owner is None:
            owners[key] = name
            continue
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.CONFLICT,
                entity_name=entity.entity_name,
                path=f"{entity.entity_name}.{name}",
                message=f"Fields '{owner}' and '{name}' both persist under key '{key}'.",
                reference=owner,
            )
        )
    return issues


def _check_geo_index(entity: EntityDeclaration) -> list[ValidationIssue]:
    if entity.geo is None:
        return []
    issues: list[ValidationIssue] = []
    for role, name in (
        ("location", entity.geo.location_field),
        ("geohash", entity.geo.geohash_field),
    ):
        if name in entity.fields:
            continue
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.UNKNOWN_FIELD,
                entity_name=entity.entity_name,
                path=f"{entity.entity_name}.{name}",
                message=f"Geo {role} field '{name}' is not a declared field.",
                reference=name,
            )
        )
    if entity.geo.location_field == entity.geo.geohash_field:
        issues.append(
            ValidationIssue(
                error_kind=ErrorKind.DIRECTIVE_CONFLICT,
                entity_name=entity.entity_name,
                path=f"{entity.entity_name}.{entity.geo.location_field}",
                message="Geo location and geohash must be different fields.",
            )
        )
    return issues
