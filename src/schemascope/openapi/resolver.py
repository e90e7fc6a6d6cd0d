"""Schema reference resolution for OpenAPI 3.x and Swagger 2.0 documents.

Resolution inlines ``$ref`` targets, merges ``allOf`` branches and resolves
``anyOf``/``oneOf`` alternatives in place. It never raises: references that
cannot be followed degrade to sentinel schemas carrying a description of why
resolution stopped, so callers always receive a renderable tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schemascope.openapi.spec import get_schemas, is_swagger_document

EXAMPLE_MAX_DEPTH = 3

# Representative literals for string formats
STRING_FORMAT_EXAMPLES = {
    "date-time": "2024-01-01T00:00:00Z",
    "date": "2024-01-01",
    "email": "user@example.com",
    "uuid": "123e4567-e89b-12d3-a456-426614174000",
}


def circular_reference(ref: str) -> dict[str, Any]:
    """Sentinel substituted where a reference closes a cycle."""
    return {"type": "object", "description": f"Circular reference to {ref}"}


def unresolved_reference(ref: str) -> dict[str, Any]:
    """Sentinel substituted where a reference target does not exist."""
    return {"type": "object", "description": f"Unresolved reference: {ref}"}


def resolve_ref(ref: Any, document: Mapping[str, Any], is_swagger: bool) -> Any:
    """Look a reference up by its final path segment.

    Args:
        ref: Reference string (e.g., "#/definitions/Pet" or "#/components/schemas/Pet")
        document: Host API document
        is_swagger: Whether the document is Swagger 2.0

    Returns:
        The referenced schema or None if not found
    """
    if not ref or not isinstance(ref, str):
        return None
    schema_name = ref.rsplit("/", 1)[-1]
    if is_swagger:
        schemas = document.get("definitions")
    else:
        schemas = (document.get("components") or {}).get("schemas")
    return (schemas or {}).get(schema_name)


def resolve_schema(
    schema: Any,
    document: Mapping[str, Any],
    is_swagger: bool = False,
    visited: frozenset[str] | None = None,
) -> Any:
    """Recursively resolve a schema, handling $ref, allOf, anyOf and oneOf.

    ``visited`` holds the references already followed on the current path.
    It is extended by value for each recursive call, so sibling branches that
    reach the same definition independently are not mistaken for cycles.

    Args:
        schema: Schema fragment to resolve
        document: Host API document holding the reachable definitions
        is_swagger: Look definitions up under ``definitions`` instead of
            ``components.schemas``
        visited: References followed so far on this path

    Returns:
        The fully resolved schema. Non-mapping input is returned unchanged.
    """
    if not isinstance(schema, Mapping):
        return schema
    visited = visited or frozenset()

    ref = schema.get("$ref")
    if ref and not isinstance(ref, str):
        return unresolved_reference(str(ref))
    if ref:
        if ref in visited:
            return circular_reference(ref)
        target = resolve_ref(ref, document, is_swagger)
        if target is None:
            return unresolved_reference(ref)
        return resolve_schema(target, document, is_swagger, visited | {ref})

    all_of = schema.get("allOf")
    if isinstance(all_of, list):
        return _merge_all_of(all_of, document, is_swagger, visited)

    result = dict(schema)

    for key in ("anyOf", "oneOf"):
        if isinstance(schema.get(key), list):
            result[key] = [resolve_schema(s, document, is_swagger, visited) for s in schema[key]]

    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        result["properties"] = {
            name: resolve_schema(prop, document, is_swagger, visited)
            for name, prop in properties.items()
        }

    if schema.get("items"):
        result["items"] = resolve_schema(schema["items"], document, is_swagger, visited)

    additional = schema.get("additionalProperties")
    if isinstance(additional, Mapping):
        result["additionalProperties"] = resolve_schema(additional, document, is_swagger, visited)

    return result


def _merge_all_of(
    branches: list[Any],
    document: Mapping[str, Any],
    is_swagger: bool,
    visited: frozenset[str],
) -> dict[str, Any]:
    merged: dict[str, Any] = {"type": "object", "properties": {}, "required": []}

    for branch in branches:
        resolved = resolve_schema(branch, document, is_swagger, visited)
        if not isinstance(resolved, Mapping):
            continue

        if isinstance(resolved.get("properties"), Mapping):
            merged["properties"] = {**merged["properties"], **resolved["properties"]}
        if isinstance(resolved.get("required"), list):
            merged["required"] = merged["required"] + resolved["required"]

        for key, value in resolved.items():
            if key not in ("properties", "required", "allOf"):
                merged[key] = value

    # Later duplicates are dropped, first-seen order kept
    merged["required"] = list(dict.fromkeys(merged["required"]))
    return merged


def build_example(schema: Any, depth: int = 0) -> Any:
    """Build a representative example value from a resolved schema.

    Args:
        schema: A resolved schema
        depth: Current nesting depth; anything nested deeper than
            EXAMPLE_MAX_DEPTH becomes None

    Returns:
        Example data matching the schema
    """
    if not isinstance(schema, Mapping) or not schema or depth > EXAMPLE_MAX_DEPTH:
        return None

    if "example" in schema:
        return schema["example"]

    enum = schema.get("enum")
    if isinstance(enum, list) and enum:
        return enum[0]

    schema_type = schema.get("type")
    if schema_type == "string":
        return STRING_FORMAT_EXAMPLES.get(schema.get("format"), "string")
    if schema_type in ("number", "integer"):
        return schema.get("minimum") or 0
    if schema_type == "boolean":
        return True
    if schema_type == "array":
        if schema.get("items"):
            return [build_example(schema["items"], depth + 1)]
        return []
    if schema_type == "object":
        properties = schema.get("properties")
        if isinstance(properties, Mapping):
            return {name: build_example(prop, depth + 1) for name, prop in properties.items()}
        return {}
    return None


class SchemaResolver:
    """Resolves schemas against one host API document.

    Example:
        resolver = SchemaResolver(document)
        pet = resolver.resolve_named("Pet")
        sample = resolver.example(pet)
    """

    def __init__(self, document: Mapping[str, Any], is_swagger: bool | None = None) -> None:
        """Initialize the resolver.

        Args:
            document: Host API document
            is_swagger: Swagger 2.0 lookup mode; detected from the document when None
        """
        self._document = document
        self.is_swagger = is_swagger_document(document) if is_swagger is None else is_swagger

    @property
    def schemas(self) -> dict[str, Any]:
        """Raw schema definitions of the host document."""
        return get_schemas(self._document, self.is_swagger)

    def resolve(self, schema: Any) -> Any:
        """Resolve a schema fragment against the bound document."""
        return resolve_schema(schema, self._document, self.is_swagger)

    def resolve_named(self, name: str) -> Any:
        """Resolve a definition by name, as if referenced from outside."""
        prefix = "#/definitions/" if self.is_swagger else "#/components/schemas/"
        return self.resolve({"$ref": f"{prefix}{name}"})

    def example(self, schema: Any) -> Any:
        """Build an example value for a schema, resolving it first."""
        return build_example(self.resolve(schema))
