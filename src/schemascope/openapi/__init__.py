"""OpenAPI/Swagger document loading and schema resolution."""

from schemascope.openapi.loader import detect_version, parse_spec, read_spec_file
from schemascope.openapi.resolver import SchemaResolver, build_example, resolve_schema
from schemascope.openapi.spec import (
    get_domain_models,
    get_referenced_schemas,
    get_schemas,
    group_by_tags,
)

__all__ = [
    "SchemaResolver",
    "build_example",
    "detect_version",
    "get_domain_models",
    "get_referenced_schemas",
    "get_schemas",
    "group_by_tags",
    "parse_spec",
    "read_spec_file",
    "resolve_schema",
]
