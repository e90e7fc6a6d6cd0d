"""Relation analysis: cross-referencing, cardinality and deduplication."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from schemascope.core.types import Cardinality, Entity, Relation, RelationSpec, RelationType

logger = logging.getLogger(__name__)


def relation_cardinality(relation: RelationSpec, source: Entity) -> Cardinality:
    """Compute the cardinality of a relation.

    The declared type decides for one-to-one and many-to-many. Otherwise the
    relation is 1:n, unless its source column is unique or a primary key,
    which makes it structurally 1:1.
    """
    if relation.type == RelationType.ONE_TO_ONE:
        return Cardinality.ONE_TO_ONE
    if relation.type == RelationType.MANY_TO_MANY:
        return Cardinality.MANY_TO_MANY

    column = source.get_column(relation.from_column)
    if column is not None and (column.unique or column.primary_key):
        return Cardinality.ONE_TO_ONE
    return Cardinality.ONE_TO_MANY


def analyze_relations(
    relations: Iterable[RelationSpec], entities: Mapping[str, Entity]
) -> list[Relation]:
    """Analyze the relations of a parsed batch.

    Relations referencing an entity outside the batch are dropped (partial
    uploads are expected). Survivors get a cardinality and a stable id; for
    each id only the first relation seen is kept, in input order.

    Args:
        relations: Relations collected across all parsed entities
        entities: Entity name -> Entity for the whole batch

    Returns:
        Analyzed relations in first-seen order
    """
    analyzed: list[Relation] = []
    seen: set[str] = set()

    for relation in relations:
        source = entities.get(relation.from_entity)
        if source is None or relation.to_entity not in entities:
            logger.debug(f"Dropping dangling relation {relation.key}")
            continue

        relation_id = relation.key
        if relation_id in seen:
            continue
        seen.add(relation_id)

        analyzed.append(
            Relation(
                **relation.model_dump(),
                id=relation_id,
                cardinality=relation_cardinality(relation, source),
            )
        )

    return analyzed
