"""Tests for core types."""

import pytest
from pydantic import ValidationError

from schemascope.core.types import (
    Cardinality,
    Column,
    Entity,
    GraphEdge,
    GridLayout,
    ParseFailure,
    ParseResult,
    Relation,
    RelationSpec,
    RelationType,
)


class TestRelationType:
    """Tests for RelationType enum."""

    def test_all_types_exist(self):
        """Only owning-side relation types are materialized."""
        assert RelationType.values() == ["many-to-one", "one-to-one", "many-to-many"]

    def test_from_string(self):
        assert RelationType("many-to-one") == RelationType.MANY_TO_ONE
        assert RelationType.ONE_TO_ONE == "one-to-one"


class TestCardinality:
    """Tests for Cardinality enum."""

    def test_labels(self):
        assert Cardinality.values() == ["1:1", "1:n", "n:n"]


class TestColumn:
    """Tests for Column model."""

    def test_defaults(self):
        """A column is nullable and plain unless stated otherwise."""
        column = Column(name="email", type="varchar")
        assert column.nullable is True
        assert column.unique is False
        assert column.primary_key is False
        assert column.auto_increment is False
        assert column.default is None
        assert column.generated is False

    def test_immutable(self):
        """Columns are frozen records."""
        column = Column(name="email", type="varchar")
        with pytest.raises(ValidationError):
            column.name = "other"

    def test_camel_case_dump(self):
        """Dumping by alias uses descriptor-style camelCase keys."""
        column = Column(name="id", type="int", primary_key=True, auto_increment=True)
        data = column.model_dump(by_alias=True)
        assert data["primaryKey"] is True
        assert data["autoIncrement"] is True

    def test_populate_by_alias(self):
        column = Column.model_validate({"name": "id", "type": "int", "primaryKey": True})
        assert column.primary_key is True


class TestRelationSpec:
    """Tests for RelationSpec model."""

    def test_defaults(self):
        spec = RelationSpec(from_entity="Order", from_column="user_id", to_entity="User")
        assert spec.type == "many-to-one"
        assert spec.to_column == "id"
        assert spec.cascade is None

    def test_key(self):
        """The key identifies both endpoints of the relation."""
        spec = RelationSpec(from_entity="Order", from_column="user_id", to_entity="User")
        assert spec.key == "Order.user_id-User.id"

    def test_cascade_list(self):
        spec = RelationSpec(
            from_entity="Order", from_column="user_id", cascade=["insert", "update"]
        )
        assert spec.cascade == ["insert", "update"]
        assert spec.to_entity is None


class TestRelation:
    """Tests for the analyzed Relation model."""

    def test_requires_target(self):
        """Analyzed relations always have a target entity."""
        with pytest.raises(ValidationError):
            Relation(
                id="Order.user_id-None.id",
                from_entity="Order",
                from_column="user_id",
                to_entity=None,
                cardinality=Cardinality.ONE_TO_MANY,
            )

    def test_dump_shape(self):
        relation = Relation(
            id="Order.user_id-User.id",
            from_entity="Order",
            from_column="user_id",
            to_entity="User",
            on_delete="CASCADE",
            cardinality=Cardinality.ONE_TO_MANY,
        )
        data = relation.model_dump(by_alias=True)
        assert data["fromEntity"] == "Order"
        assert data["toEntity"] == "User"
        assert data["onDelete"] == "CASCADE"
        assert data["cardinality"] == "1:n"
        assert data["type"] == "many-to-one"


class TestEntity:
    """Tests for Entity model."""

    def test_get_column(self):
        entity = Entity(
            name="User",
            table_name="users",
            columns=[Column(name="id", type="int"), Column(name="email", type="varchar")],
        )
        assert entity.get_column("email").type == "varchar"
        assert entity.get_column("missing") is None

    def test_empty_collections(self):
        entity = Entity(name="User", table_name="users")
        assert entity.columns == []
        assert entity.indexes == []
        assert entity.relations == []


class TestParseResult:
    """Tests for ParseResult model."""

    def test_empty(self):
        result = ParseResult()
        assert result.is_empty
        assert not result.has_failures

    def test_failures(self):
        result = ParseResult(failures=[ParseFailure(document="a.json", reason="Invalid JSON")])
        assert result.is_empty
        assert result.has_failures


class TestGraphTypes:
    """Tests for graph projection records."""

    def test_grid_layout_defaults(self):
        layout = GridLayout()
        assert (layout.columns, layout.x_spacing, layout.y_spacing) == (3, 400, 350)

    def test_grid_layout_rejects_zero_columns(self):
        with pytest.raises(ValidationError):
            GridLayout(columns=0)

    def test_edge_defaults(self):
        """Edges are smoothstep, not animated, with a closed arrow marker."""
        edge = GraphEdge.model_validate(
            {
                "id": "Order.user_id-User.id",
                "source": "Order",
                "target": "User",
                "sourceHandle": "Order-user_id-source",
                "targetHandle": "User-id-target",
                "label": "1:n",
                "data": {"fromColumn": "user_id", "toColumn": "id", "cardinality": "1:n"},
            }
        )
        data = edge.model_dump(by_alias=True)
        assert data["type"] == "smoothstep"
        assert data["animated"] is False
        assert data["markerEnd"] == {"type": "arrowclosed"}
        assert data["data"]["fromColumn"] == "user_id"
