"""Helpers that normalize access to Swagger 2.0 and OpenAPI 3.x documents."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from schemascope.core.types import Endpoint

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head", "trace")

# Schema names that look like request/response wrappers rather than domain models
WRAPPER_PATTERNS = [
    re.compile(r"Request$", re.IGNORECASE),
    re.compile(r"Response$", re.IGNORECASE),
    re.compile(r"Input$", re.IGNORECASE),
    re.compile(r"Output$", re.IGNORECASE),
    re.compile(r"Payload$", re.IGNORECASE),
    re.compile(r"Body$", re.IGNORECASE),
    re.compile(r"Dto$", re.IGNORECASE),
    re.compile(r"^Create[A-Z]"),
    re.compile(r"^Update[A-Z]"),
    re.compile(r"^Delete[A-Z]"),
    re.compile(r"^Get[A-Z]"),
    re.compile(r"^List[A-Z]"),
    re.compile(r"^Search[A-Z]"),
]


def is_swagger_document(document: Mapping[str, Any]) -> bool:
    """Check whether a document is Swagger 2.0 (as opposed to OpenAPI 3.x)."""
    return str(document.get("swagger", "")).startswith("2")


def get_schemas(document: Mapping[str, Any], is_swagger: bool) -> dict[str, Any]:
    """Get the schema definitions map.

    Swagger 2.0 keeps them under ``definitions``, OpenAPI 3.x under
    ``components.schemas``.
    """
    if is_swagger:
        return dict(document.get("definitions") or {})
    components = document.get("components") or {}
    return dict(components.get("schemas") or {})


def get_paths(document: Mapping[str, Any]) -> dict[str, Any]:
    return dict(document.get("paths") or {})


def get_webhooks(document: Mapping[str, Any], is_swagger: bool) -> dict[str, Any]:
    """Get webhooks (OpenAPI 3.1+ only; Swagger 2.0 has none)."""
    if is_swagger:
        return {}
    return dict(document.get("webhooks") or {})


def is_request_response_wrapper(name: str) -> bool:
    return any(pattern.search(name) for pattern in WRAPPER_PATTERNS)


def get_domain_models(schemas: Mapping[str, Any]) -> dict[str, Any]:
    """Filter out request/response wrapper schemas."""
    return {
        name: schema
        for name, schema in schemas.items()
        if not is_request_response_wrapper(name)
    }


def collect_refs(schema: Any, refs: set[str] | None = None) -> set[str]:
    """Collect the names of all schemas referenced from a schema.

    Args:
        schema: Schema object to walk
        refs: Accumulator for referenced schema names

    Returns:
        The accumulator with every referenced name added
    """
    if refs is None:
        refs = set()
    if not isinstance(schema, Mapping):
        return refs

    ref = schema.get("$ref")
    if isinstance(ref, str):
        refs.add(ref.rsplit("/", 1)[-1])

    if "items" in schema:
        collect_refs(schema["items"], refs)

    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        for prop in properties.values():
            collect_refs(prop, refs)

    for key in ("allOf", "anyOf", "oneOf"):
        for branch in schema.get(key) or []:
            collect_refs(branch, refs)

    if isinstance(schema.get("additionalProperties"), Mapping):
        collect_refs(schema["additionalProperties"], refs)

    return refs


def get_referenced_schemas(schemas: Mapping[str, Any]) -> dict[str, Any]:
    """Return only the schemas referenced by some other schema."""
    referenced: set[str] = set()
    for schema in schemas.values():
        collect_refs(schema, referenced)
    return {name: schema for name, schema in schemas.items() if name in referenced}


def group_by_tags(paths: Mapping[str, Any]) -> dict[str, list[Endpoint]]:
    """Group API operations by tag.

    Path-level keys that are not HTTP methods (``parameters``, ``servers``,
    ...) are ignored. Untagged operations land under ``default``.

    Args:
        paths: The ``paths`` object of an API document

    Returns:
        Mapping of tag name to its endpoints, in document order
    """
    grouped: dict[str, list[Endpoint]] = {}

    for path, methods in paths.items():
        if not isinstance(methods, Mapping):
            continue
        for method, config in methods.items():
            if method.lower() not in HTTP_METHODS or not isinstance(config, Mapping):
                continue

            endpoint = Endpoint(
                path=path,
                method=method.upper(),
                summary=config.get("summary"),
                description=config.get("description"),
                operation_id=config.get("operationId"),
                deprecated=bool(config.get("deprecated", False)),
            )
            for tag in config.get("tags") or ["default"]:
                grouped.setdefault(tag, []).append(endpoint)

    return grouped
