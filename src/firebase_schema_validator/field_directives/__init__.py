"""Field directive exports."""

from .directive_models import DERIVED_KEY_PREFIX, EntityDeclaration, FieldDirective, GeoIndex
from .entity_validation import validate_entities, validate_entity

__all__ = [
    "DERIVED_KEY_PREFIX",
    "EntityDeclaration",
    "FieldDirective",
    "GeoIndex",
    "validate_entities",
    "validate_entity",
]
