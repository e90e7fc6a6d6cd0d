"""Core types for SchemaScope."""

from schemascope.core.types import (
    Cardinality,
    Column,
    Entity,
    EntityGraph,
    GridLayout,
    Index,
    ParseFailure,
    ParseResult,
    Relation,
    RelationSpec,
    RelationType,
)

__all__ = [
    "Cardinality",
    "Column",
    "Entity",
    "EntityGraph",
    "GridLayout",
    "Index",
    "ParseFailure",
    "ParseResult",
    "Relation",
    "RelationSpec",
    "RelationType",
]
