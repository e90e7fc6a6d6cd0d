"""Projection of an analyzed entity batch onto a positioned node/edge graph."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from schemascope.core.types import (
    EdgeData,
    Entity,
    EntityGraph,
    GraphEdge,
    GraphNode,
    GridLayout,
    NodeData,
    Position,
    Relation,
)


def grid_position(index: int, layout: GridLayout) -> Position:
    return Position(
        x=(index % layout.columns) * layout.x_spacing,
        y=(index // layout.columns) * layout.y_spacing,
    )


def source_handle(entity: str, column: str) -> str:
    """Connection anchor of a column on the relation's source side."""
    return f"{entity}-{column}-source"


def target_handle(entity: str, column: str) -> str:
    """Connection anchor of a column on the relation's target side."""
    return f"{entity}-{column}-target"


def entities_to_nodes(
    entities: Mapping[str, Entity],
    relations: Sequence[Relation] = (),
    layout: GridLayout | None = None,
) -> list[GraphNode]:
    """Create one node per entity, placed on a grid in map order.

    Each node carries the relations where its entity is source or target.
    """
    layout = layout or GridLayout()
    nodes = []
    for index, entity in enumerate(entities.values()):
        entity_relations = [
            r for r in relations if entity.name in (r.from_entity, r.to_entity)
        ]
        nodes.append(
            GraphNode(
                id=entity.name,
                position=grid_position(index, layout),
                data=NodeData(
                    name=entity.name,
                    table_name=entity.table_name,
                    columns=entity.columns,
                    indexes=entity.indexes,
                    relations=entity_relations,
                    description=entity.description,
                ),
            )
        )
    return nodes


def relations_to_edges(relations: Sequence[Relation]) -> list[GraphEdge]:
    """Create one edge per relation, attached to per-column ports."""
    return [
        GraphEdge(
            id=relation.id,
            source=relation.from_entity,
            target=relation.to_entity,
            source_handle=source_handle(relation.from_entity, relation.from_column),
            target_handle=target_handle(relation.to_entity, relation.to_column),
            label=relation.cardinality,
            data=EdgeData(
                from_column=relation.from_column,
                to_column=relation.to_column,
                on_delete=relation.on_delete,
                on_update=relation.on_update,
                cardinality=relation.cardinality,
            ),
        )
        for relation in relations
    ]


def project_graph(
    entities: Mapping[str, Entity],
    relations: Sequence[Relation],
    layout: GridLayout | None = None,
) -> EntityGraph:
    """Project entities and analyzed relations onto a node/edge graph."""
    return EntityGraph(
        nodes=entities_to_nodes(entities, relations, layout),
        edges=relations_to_edges(relations),
    )
