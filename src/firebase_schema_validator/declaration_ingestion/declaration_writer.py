"""Declarations file writer."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from firebase_schema_validator.auth_domains.auth_models import AuthDomainDeclaration
from firebase_schema_validator.collection_paths.collection_models import (
    RootCollection,
    SubCollection,
)
from firebase_schema_validator.configuration.runtime_settings import ValidationSettings
from firebase_schema_validator.database_targets.database_models import DatabaseDeclaration
from firebase_schema_validator.field_directives.directive_models import (
    EntityDeclaration,
    FieldDirective,
)
from firebase_schema_validator.literal_values.literal_factories import literal_to_mapping
from firebase_schema_validator.schema_registry.schema_graph import Declaration
from firebase_schema_validator.storage_tree.storage_models import (
    StorageDeclaration,
    StorageNode,
)

_DEFAULT_DIRECTIVE = FieldDirective()


def dump_declarations(declarations: Sequence[Declaration]) -> list[dict[str, Any]]:
    """Return declarations in the raw form accepted by the reader."""
    return [dump_declaration(declaration) for declaration in declarations]


def dump_declaration(declaration: Declaration) -> dict[str, Any]:
    """Return one declaration as a raw entry."""
    if isinstance(declaration, RootCollection):
        return {"kind": "collection", "entity": declaration.entity_name, "path": declaration.path}
    if isinstance(declaration, SubCollection):
        return {
            "kind": "subcollection",
            "entity": declaration.entity_name,
            "parent": declaration.parent_path,
            "path": declaration.path,
        }
    if isinstance(declaration, EntityDeclaration):
        entry: dict[str, Any] = {
            "kind": "entity",
            "entity": declaration.entity_name,
            "fields": {
                name: _dump_directive(directive) for name, directive in declaration.fields.items()
            },
        }
        if declaration.geo is not None:
            entry["geo"] = {
                "location_field": declaration.geo.location_field,
                "geohash_field": declaration.geo.geohash_field,
            }
        return entry
    if isinstance(declaration, StorageDeclaration):
        entry = {
            "kind": "storage",
            "entity": declaration.entity_name,
            "roots": [_dump_storage_node(node) for node in declaration.roots],
        }
        if declaration.bucket is not None:
            entry["bucket"] = declaration.bucket
        return entry
    if isinstance(declaration, AuthDomainDeclaration):
        return {
            "kind": "auth",
            "entity": declaration.entity_name,
            "auth_kind": declaration.kind.value,
            "collection": declaration.bound_collection,
            "region": declaration.region,
            "modules": [module.value for module in declaration.ordered_modules()],
        }
    if isinstance(declaration, DatabaseDeclaration):
        return {
            "kind": "database",
            "entity": declaration.entity_name,
            "name": declaration.name,
            "database_url": declaration.database_url,
        }
    raise TypeError(f"Unsupported declaration type: {type(declaration).__name__}")


def dump_document(
    declarations: Sequence[Declaration], settings: ValidationSettings | None = None
) -> dict[str, Any]:
    """Return a full declarations document."""
    resolved_settings = settings or ValidationSettings()
    return {
        "settings": {
            "storage_conflicts": resolved_settings.storage_conflicts.value,
            "warnings_as_errors": resolved_settings.warnings_as_errors,
        },
        "declarations": dump_declarations(declarations),
    }


def write_declarations(
    output_path: Path | str,
    declarations: Sequence[Declaration],
    settings: ValidationSettings | None = None,
) -> Path:
    """Write declarations as YAML and return the resolved destination."""
    destination = Path(output_path)
    text = yaml.safe_dump(
        dump_document(declarations, settings),
        sort_keys=False,
        allow_unicode=True,
    )
    destination.write_text(text, encoding="utf-8")
    return destination.resolve()


def _dump_directive(directive: FieldDirective) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    if directive.storage_key:
        raw["storage_key"] = directive.storage_key
    for flag in ("document_identifier", "include_in_read", "include_in_write", "include_in_copy"):
        value = getattr(directive, flag)
        if value != getattr(_DEFAULT_DIRECTIVE, flag):
            raw[flag] = value
    if directive.default_on_missing is not None:
        raw["default"] = literal_to_mapping(directive.default_on_missing)
    return raw


def _dump_storage_node(node: StorageNode) -> dict[str, Any]:
    raw: dict[str, Any] = {"name": node.name}
    if node.children:
        raw["children"] = [_dump_storage_node(child) for child in node.children]
    return raw
