"""Core types and records for SchemaScope.

All types are immutable pydantic models designed to be JSON-serializable for
rendering collaborators. Dumping with ``by_alias=True`` produces the camelCase
keys used by entity descriptors (``fromEntity``, ``primaryKey``, ...).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_RECORD_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    use_enum_values=True,
)


class RelationType(StrEnum):
    """Relation types materialized by the engine (owning side only)."""

    MANY_TO_ONE = "many-to-one"  # e.g., Order -> User
    ONE_TO_ONE = "one-to-one"  # e.g., User -> Profile
    MANY_TO_MANY = "many-to-many"  # e.g., Product <-> Category

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid relation type values."""
        return [t.value for t in cls]


class Cardinality(StrEnum):
    """Cardinality labels used for diagram edges."""

    ONE_TO_ONE = "1:1"
    ONE_TO_MANY = "1:n"
    MANY_TO_MANY = "n:n"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid cardinality values."""
        return [c.value for c in cls]


# === Entity graph records ===


class Column(BaseModel):
    """A normalized column of an entity."""

    name: str
    type: str = Field(..., description="Type string with length/precision suffix")
    nullable: bool = True
    unique: bool = False
    primary_key: bool = False
    auto_increment: bool = False
    default: Any = None
    generated: bool = Field(
        default=False, description="True when synthesized from relation metadata"
    )

    model_config = _RECORD_CONFIG


class Index(BaseModel):
    """A descriptive index definition."""

    name: str | None = None
    columns: list[str] = Field(default_factory=list)
    unique: bool = False
    kind: str = "BTREE"

    model_config = _RECORD_CONFIG


class RelationSpec(BaseModel):
    """A relation as declared by one descriptor, before analysis."""

    type: RelationType = RelationType.MANY_TO_ONE
    from_entity: str
    from_column: str
    to_entity: str | None = None
    to_column: str = "id"
    on_delete: str | None = None
    on_update: str | None = None
    cascade: bool | list[str] | None = None
    name: str | None = None

    model_config = _RECORD_CONFIG

    @property
    def key(self) -> str:
        """Deterministic identity used for deduplication."""
        return f"{self.from_entity}.{self.from_column}-{self.to_entity}.{self.to_column}"


class Relation(RelationSpec):
    """An analyzed relation with a stable id and cardinality."""

    id: str
    to_entity: str
    cardinality: Cardinality


class Entity(BaseModel):
    """A normalized entity parsed from one descriptor document."""

    name: str
    table_name: str
    columns: list[Column] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)
    relations: list[RelationSpec] = Field(default_factory=list)
    description: str | None = None

    model_config = _RECORD_CONFIG

    def get_column(self, name: str) -> Column | None:
        """Return the column with the given name, if declared."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


class ParseFailure(BaseModel):
    """A document that could not be parsed within a batch."""

    document: str
    reason: str

    model_config = _RECORD_CONFIG


class ParseResult(BaseModel):
    """Result of parsing and analyzing one batch of descriptor documents."""

    entities: dict[str, Entity] = Field(default_factory=dict)
    relations: list[Relation] = Field(default_factory=list)
    failures: list[ParseFailure] = Field(default_factory=list)

    model_config = _RECORD_CONFIG

    @property
    def is_empty(self) -> bool:
        """True when the batch produced no entities."""
        return not self.entities

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)


# === Graph projection ===


class GridLayout(BaseModel):
    """Grid placement settings for projected nodes."""

    columns: int = Field(default=3, ge=1)
    x_spacing: int = 400
    y_spacing: int = 350

    model_config = _RECORD_CONFIG


class Position(BaseModel):
    x: int
    y: int

    model_config = _RECORD_CONFIG


class NodeData(BaseModel):
    """Rendering payload of an entity node."""

    name: str
    table_name: str
    columns: list[Column]
    indexes: list[Index]
    relations: list[Relation]
    description: str | None = None

    model_config = _RECORD_CONFIG


class GraphNode(BaseModel):
    id: str
    type: str = "entityNode"
    position: Position
    data: NodeData

    model_config = _RECORD_CONFIG


class EdgeData(BaseModel):
    from_column: str
    to_column: str
    on_delete: str | None = None
    on_update: str | None = None
    cardinality: Cardinality

    model_config = _RECORD_CONFIG


class GraphEdge(BaseModel):
    """A relation edge attached to per-column ports."""

    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str
    type: str = "smoothstep"
    animated: bool = False
    label: str
    data: EdgeData
    marker_end: dict[str, str] = Field(default_factory=lambda: {"type": "arrowclosed"})

    model_config = _RECORD_CONFIG


class EntityGraph(BaseModel):
    """Positioned nodes and edges ready for layout."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


# === API documents ===


class Endpoint(BaseModel):
    """One operation of an API document, as grouped by tag."""

    path: str
    method: str
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    deprecated: bool = False

    model_config = _RECORD_CONFIG


class SpecVersion(BaseModel):
    """Detected version of an API document."""

    version: str
    schema_version: str
    is_swagger: bool = False

    model_config = _RECORD_CONFIG


# === Validation ===


class ValidationIssue(BaseModel):
    path: str = "root"
    message: str

    model_config = _RECORD_CONFIG


class ValidationReport(BaseModel):
    """Outcome of validating a document against a JSON Schema."""

    valid: bool
    kind: str | None = None
    errors: list[ValidationIssue] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class SpecValidationReport(ValidationReport):
    """Outcome of validating an API document against its meta-schema."""

    version: str | None = None
    schema_version: str | None = None
    is_swagger: bool = False
