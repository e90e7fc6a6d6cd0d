"""Entity descriptor parsing, relation analysis and graph projection."""

from schemascope.entities.graph import project_graph
from schemascope.entities.parser import (
    SourceDocument,
    extract_entity_schema,
    parse_entities,
    parse_entity_descriptor,
)
from schemascope.entities.relations import analyze_relations

__all__ = [
    "SourceDocument",
    "analyze_relations",
    "extract_entity_schema",
    "parse_entities",
    "parse_entity_descriptor",
    "project_graph",
]
