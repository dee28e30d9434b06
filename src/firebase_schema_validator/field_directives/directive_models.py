"""Field directive entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from firebase_schema_validator.literal_values.literal_models import LiteralValue

# Derived storage keys are `DERIVED_KEY_PREFIX + field name`. Persisted data is
# keyed by this, so the value must never change.
DERIVED_KEY_PREFIX = ""


@dataclass(frozen=True)
class FieldDirective:  # pylint: disable=too-many-instance-attributes
    """Serialization directive attached to one declared field."""

    storage_key: str | None = None
    document_identifier: bool = False
    include_in_read: bool = True
    default_on_missing: LiteralValue | None = None
    include_in_write: bool = True
    include_in_copy: bool = True

    def resolved_key(self, field_name: str) -> str:
        """Return the key the field is persisted under."""
        if self.storage_key:
            return self.storage_key
        return f"{DERIVED_KEY_PREFIX}{field_name}"

    @property
    def is_written(self) -> bool:
        """Return True when the field ends up in the serialized payload."""
        return self.include_in_write and not self.document_identifier


@dataclass(frozen=True)
class GeoIndex:
    """Fields carrying the coordinates and geohash of a geo-indexed entity."""

    location_field: str
    geohash_field: str


@dataclass(frozen=True)
class EntityDeclaration:
    """Data model entity with one directive per declared field."""

    entity_name: str
    fields: Mapping[str, FieldDirective] = field(default_factory=dict)
    geo: GeoIndex | None = None

    def document_identifier_fields(self) -> tuple[str, ...]:
        """Return the names of fields flagged as document identifier."""
        return tuple(
            name for name, directive in self.fields.items() if directive.document_identifier
        )
