"""JSON Schema validation of entity descriptors and API documents."""

from schemascope.validation.cache import SchemaCache, directory_loader
from schemascope.validation.validator import (
    entity_schema_cache,
    format_validation_errors,
    validate_entity,
    validate_spec,
)

__all__ = [
    "SchemaCache",
    "directory_loader",
    "entity_schema_cache",
    "format_validation_errors",
    "validate_entity",
    "validate_spec",
]
