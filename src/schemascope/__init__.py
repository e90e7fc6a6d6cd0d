"""SchemaScope - Entity and API Schema Resolution Engine.

Turns heterogeneous entity descriptor documents into a normalized entity graph
(inferred foreign keys, deduplicated relations, cardinalities, grid layout)
and inlines OpenAPI/Swagger schema references into fully expanded trees.

Example:
    from schemascope import SourceDocument, parse_entities, project_graph

    result = parse_entities([
        SourceDocument("User.json", {"name": "User", "columns": {"id": "int"}}),
        SourceDocument("Order.entity.js", order_module_source),
    ])
    for failure in result.failures:
        print(f"{failure.document}: {failure.reason}")

    graph = project_graph(result.entities, result.relations)

    # Resolve an API schema with every $ref inlined
    from schemascope import SchemaResolver

    resolver = SchemaResolver(api_document)
    pet = resolver.resolve_named("Pet")
    example = resolver.example(pet)
"""

from schemascope.core.types import (
    Cardinality,
    Column,
    EdgeData,
    Endpoint,
    Entity,
    EntityGraph,
    GraphEdge,
    GraphNode,
    GridLayout,
    Index,
    NodeData,
    ParseFailure,
    ParseResult,
    Position,
    Relation,
    RelationSpec,
    RelationType,
    SpecValidationReport,
    SpecVersion,
    ValidationIssue,
    ValidationReport,
)
from schemascope.entities import (
    SourceDocument,
    analyze_relations,
    extract_entity_schema,
    parse_entities,
    parse_entity_descriptor,
    project_graph,
)
from schemascope.exceptions import (
    DocumentParseError,
    SchemaScopeError,
    SpecFormatError,
    UnsupportedSpecVersionError,
    ValidatorSchemaNotFoundError,
)
from schemascope.openapi import (
    SchemaResolver,
    build_example,
    detect_version,
    parse_spec,
    read_spec_file,
    resolve_schema,
)
from schemascope.validation import (
    SchemaCache,
    format_validation_errors,
    validate_entity,
    validate_spec,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "SourceDocument",
    "parse_entities",
    "parse_entity_descriptor",
    "extract_entity_schema",
    "analyze_relations",
    "project_graph",
    # Schema resolution
    "SchemaResolver",
    "resolve_schema",
    "build_example",
    "parse_spec",
    "read_spec_file",
    "detect_version",
    # Validation
    "SchemaCache",
    "validate_entity",
    "validate_spec",
    "format_validation_errors",
    # Types
    "Cardinality",
    "Column",
    "EdgeData",
    "Endpoint",
    "Entity",
    "EntityGraph",
    "GraphEdge",
    "GraphNode",
    "GridLayout",
    "Index",
    "NodeData",
    "ParseFailure",
    "ParseResult",
    "Position",
    "Relation",
    "RelationSpec",
    "RelationType",
    "SpecValidationReport",
    "SpecVersion",
    "ValidationIssue",
    "ValidationReport",
    # Exceptions
    "SchemaScopeError",
    "DocumentParseError",
    "SpecFormatError",
    "UnsupportedSpecVersionError",
    "ValidatorSchemaNotFoundError",
]
