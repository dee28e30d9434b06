"""Declarations file reader."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from firebase_schema_validator.auth_domains.auth_models import (
    AuthDomainDeclaration,
    AuthKind,
    AuthModule,
)
from firebase_schema_validator.collection_paths.collection_models import (
    RootCollection,
    SubCollection,
)
from firebase_schema_validator.configuration.loader import (
    ConfigurationError,
    parse_validation_settings,
)
from firebase_schema_validator.configuration.runtime_settings import ValidationSettings
from firebase_schema_validator.database_targets.database_models import DatabaseDeclaration
from firebase_schema_validator.field_directives.directive_models import (
    EntityDeclaration,
    FieldDirective,
    GeoIndex,
)
from firebase_schema_validator.literal_values.literal_factories import literal_from_mapping
from firebase_schema_validator.literal_values.literal_models import InvalidLiteralError
from firebase_schema_validator.schema_registry.schema_graph import Declaration
from firebase_schema_validator.storage_tree.storage_models import (
    StorageDeclaration,
    StorageNode,
)

_DIRECTIVE_FLAGS = (
    "document_identifier",
    "include_in_read",
    "include_in_write",
    "include_in_copy",
)
_DIRECTIVE_KEYS = frozenset(_DIRECTIVE_FLAGS + ("storage_key", "default"))


class DeclarationFormatError(Exception):
    """Raised when a declarations file or entry is malformed."""


@dataclass(frozen=True)
class DeclarationDocument:
    """Parsed declarations file."""

    path: Path | None
    settings: ValidationSettings
    declarations: tuple[Declaration, ...]


def read_declarations(declarations_path: Path | str) -> DeclarationDocument:
    """Load a YAML or JSON declarations file."""
    path = Path(declarations_path)
    if not path.exists():
        raise DeclarationFormatError(f"Declarations file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DeclarationFormatError(f"Failed to parse declarations file: {exc}") from exc
    return parse_declaration_document(parsed, path=path)


def parse_declaration_document(parsed: Any, *, path: Path | None = None) -> DeclarationDocument:
    """Normalize an already-parsed declarations document."""
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise DeclarationFormatError("Declarations root must be a mapping.")

    try:
        settings = parse_validation_settings(parsed.get("settings"))
    except ConfigurationError as exc:
        raise DeclarationFormatError(str(exc)) from exc

    entries = parsed.get("declarations", [])
    if entries is None:
        entries = []
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise DeclarationFormatError("'declarations' must be a list.")
    return DeclarationDocument(
        path=path,
        settings=settings,
        declarations=parse_declarations(entries),
    )


def parse_declarations(entries: Sequence[Any]) -> tuple[Declaration, ...]:
    """Convert raw declaration entries into typed declarations."""
    return tuple(parse_declaration(entry, index=index) for index, entry in enumerate(entries))


def parse_declaration(entry: Any, *, index: int = 0) -> Declaration:
    """Convert one raw entry tagged with `kind` and `entity`."""
    location = f"declarations[{index}]"
    if not isinstance(entry, Mapping):
        raise DeclarationFormatError(f"{location} must be a mapping.")
    entity_name = _require_string(entry.get("entity"), f"{location}.entity")
    kind = _require_string(entry.get("kind"), f"{location}.kind").strip().lower()
    location = f"{location} ({entity_name})"

    parser = _PARSERS.get(kind)
    if parser is None:
        choices = ", ".join(sorted(_PARSERS))
        raise DeclarationFormatError(
            f"{location}: unknown kind '{kind}', expected one of {choices}."
        )
    try:
        return parser(entry, entity_name, location)
    except InvalidLiteralError as exc:
        raise DeclarationFormatError(f"{location}: {exc}") from exc


def _parse_collection(entry: Mapping[str, Any], entity_name: str, location: str) -> RootCollection:
    return RootCollection(
        entity_name=entity_name,
        path=_require_string(entry.get("path"), f"{location}.path", allow_empty=True),
    )


def _parse_subcollection(
    entry: Mapping[str, Any], entity_name: str, location: str
) -> SubCollection:
    return SubCollection(
        entity_name=entity_name,
        parent_path=_require_string(entry.get("parent"), f"{location}.parent", allow_empty=True),
        path=_require_string(entry.get("path"), f"{location}.path", allow_empty=True),
    )


def _parse_entity(entry: Mapping[str, Any], entity_name: str, location: str) -> EntityDeclaration:
    raw_fields = entry.get("fields") or {}
    if not isinstance(raw_fields, Mapping):
        raise DeclarationFormatError(f"{location}.fields must be a mapping.")
    fields = {
        str(name): _parse_directive(raw, f"{location}.fields.{name}")
        for name, raw in raw_fields.items()
    }
    geo = entry.get("geo")
    return EntityDeclaration(
        entity_name=entity_name,
        fields=MappingProxyType(fields),
        geo=_parse_geo(geo, f"{location}.geo") if geo is not None else None,
    )


def _parse_directive(raw: Any, location: str) -> FieldDirective:
    if raw is None:
        return FieldDirective()
    if not isinstance(raw, Mapping):
        raise DeclarationFormatError(f"{location} must be a mapping.")
    unknown = sorted(str(key) for key in raw if key not in _DIRECTIVE_KEYS)
    if unknown:
        raise DeclarationFormatError(
            f"{location}: unknown directive option(s) {', '.join(unknown)}."
        )

    flags = {
        flag: _require_bool(raw[flag], f"{location}.{flag}")
        for flag in _DIRECTIVE_FLAGS
        if flag in raw
    }
    storage_key = raw.get("storage_key")
    if storage_key is not None:
        storage_key = _require_string(storage_key, f"{location}.storage_key")
    default = raw.get("default")
    if default is not None and not isinstance(default, Mapping):
        raise DeclarationFormatError(f"{location}.default must be a mapping.")
    return FieldDirective(
        storage_key=storage_key,
        default_on_missing=literal_from_mapping(default) if default is not None else None,
        **flags,
    )


def _parse_geo(raw: Any, location: str) -> GeoIndex:
    if not isinstance(raw, Mapping):
        raise DeclarationFormatError(f"{location} must be a mapping.")
    return GeoIndex(
        location_field=_require_string(raw.get("location_field"), f"{location}.location_field"),
        geohash_field=_require_string(raw.get("geohash_field"), f"{location}.geohash_field"),
    )


def _parse_storage(
    entry: Mapping[str, Any], entity_name: str, location: str
) -> StorageDeclaration:
    bucket = entry.get("bucket")
    if bucket is not None:
        bucket = _require_string(bucket, f"{location}.bucket")
    return StorageDeclaration(
        entity_name=entity_name,
        roots=_parse_storage_nodes(entry.get("roots"), f"{location}.roots"),
        bucket=bucket,
    )


def _parse_storage_nodes(raw: Any, location: str) -> tuple[StorageNode, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise DeclarationFormatError(f"{location} must be a list.")
    nodes: list[StorageNode] = []
    for position, item in enumerate(raw):
        item_location = f"{location}[{position}]"
        if isinstance(item, str):
            nodes.append(StorageNode(name=item))
            continue
        if not isinstance(item, Mapping):
            raise DeclarationFormatError(f"{item_location} must be a name or a mapping.")
        nodes.append(
            StorageNode(
                name=_require_string(item.get("name"), f"{item_location}.name", allow_empty=True),
                children=_parse_storage_nodes(item.get("children"), f"{item_location}.children"),
            )
        )
    return tuple(nodes)


def _parse_auth(
    entry: Mapping[str, Any], entity_name: str, location: str
) -> AuthDomainDeclaration:
    raw_kind = _require_string(entry.get("auth_kind"), f"{location}.auth_kind").strip()
    try:
        kind = AuthKind(raw_kind)
    except ValueError as exc:
        choices = ", ".join(option.value for option in AuthKind)
        raise DeclarationFormatError(
            f"{location}.auth_kind must be one of: {choices}."
        ) from exc

    raw_modules = entry.get("modules") or []
    if not isinstance(raw_modules, Sequence) or isinstance(raw_modules, str):
        raise DeclarationFormatError(f"{location}.modules must be a list.")
    modules: set[AuthModule] = set()
    for raw_module in raw_modules:
        try:
            modules.add(AuthModule(raw_module))
        except ValueError as exc:
            choices = ", ".join(option.value for option in AuthModule)
            raise DeclarationFormatError(
                f"{location}.modules entries must be one of: {choices}."
            ) from exc

    return AuthDomainDeclaration(
        entity_name=entity_name,
        kind=kind,
        bound_collection=_require_string(
            entry.get("collection"), f"{location}.collection", allow_empty=True
        ),
        region=_require_string(entry.get("region"), f"{location}.region", allow_empty=True),
        enabled_modules=frozenset(modules),
    )


def _parse_database(
    entry: Mapping[str, Any], entity_name: str, location: str
) -> DatabaseDeclaration:
    database_url = entry.get("database_url")
    return DatabaseDeclaration(
        entity_name=entity_name,
        name=_require_string(entry.get("name"), f"{location}.name", allow_empty=True),
        database_url=(
            _require_string(database_url, f"{location}.database_url", allow_empty=True)
            if database_url is not None
            else ""
        ),
    )


_PARSERS = {
    "auth": _parse_auth,
    "collection": _parse_collection,
    "database": _parse_database,
    "entity": _parse_entity,
    "storage": _parse_storage,
    "subcollection": _parse_subcollection,
}


def _require_string(value: Any, field_name: str, *, allow_empty: bool = False) -> str:
    if value is None and allow_empty:
        return ""
    if not isinstance(value, str):
        raise DeclarationFormatError(f"{field_name} must be a string.")
    if not value.strip() and not allow_empty:
        raise DeclarationFormatError(f"{field_name} must not be empty.")
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise DeclarationFormatError(f"{field_name} must be a boolean.")
    return value
