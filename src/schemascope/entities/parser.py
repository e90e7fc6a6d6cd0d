"""Entity descriptor parsing.

Descriptors arrive in several shapes: TypeORM ``EntitySchema`` objects (as
JSON or as JS modules), column arrays, column maps, legacy relation arrays and
Sequelize ``attributes`` maps. Each shape has a narrow adapter here; all of
them produce the same canonical ``Entity``/``RelationSpec`` records so that
nothing downstream branches on the source dialect.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from schemascope.core.types import (
    Column,
    Entity,
    Index,
    ParseFailure,
    ParseResult,
    RelationSpec,
    RelationType,
)
from schemascope.entities.relations import analyze_relations
from schemascope.exceptions import DocumentParseError

logger = logging.getLogger(__name__)

SOURCE_SUFFIX_RE = re.compile(r"\.(entity\.)?(js|json)$")
ENTITY_SCHEMA_RE = re.compile(r"new\s+EntitySchema\s*\(\s*(\{[\s\S]*?\})\s*\)")

_JS_STRING_RE = re.compile(r"'(?:[^'\\\n]|\\.)*'|\"(?:[^\"\\\n]|\\.)*\"")
_JS_COMMENT_RE = re.compile(r"//[^\n]*|/\*[\s\S]*?\*/")
_JS_BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)\s*:")
_JS_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


@dataclass(frozen=True)
class SourceDocument:
    """One uploaded descriptor: its file name and raw or parsed content."""

    name: str
    content: str | Mapping[str, Any]


# === JS module extraction ===


def _convert_js_code(code: str) -> str:
    code = _JS_COMMENT_RE.sub("", code)
    code = _JS_BARE_KEY_RE.sub(r'\1"\2":', code)
    return _JS_TRAILING_COMMA_RE.sub(r"\1", code)


def _convert_js_string(literal: str) -> str:
    if literal.startswith('"'):
        return literal
    inner = literal[1:-1].replace("\\'", "'").replace('"', '\\"')
    return f'"{inner}"'


def js_object_to_json(literal: str) -> str:
    """Convert a JS object literal to JSON text.

    Bare keys are quoted, single-quoted strings become double-quoted, and
    comments and trailing commas are removed. String contents are left alone.
    """
    parts: list[str] = []
    pos = 0
    for match in _JS_STRING_RE.finditer(literal):
        parts.append(_convert_js_code(literal[pos : match.start()]))
        parts.append(_convert_js_string(match.group()))
        pos = match.end()
    parts.append(_convert_js_code(literal[pos:]))
    return "".join(parts)


def extract_entity_schema(source: str) -> dict[str, Any] | None:
    """Extract the ``new EntitySchema({...})`` argument from a JS module.

    Args:
        source: JS module text

    Returns:
        The schema object, or None if no literal is found or it is not decodable
    """
    match = ENTITY_SCHEMA_RE.search(source)
    if not match:
        return None
    try:
        schema = json.loads(js_object_to_json(match.group(1)))
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to decode EntitySchema literal: {e}")
        return None
    return schema if isinstance(schema, dict) else None


def load_descriptor(document: SourceDocument) -> Mapping[str, Any]:
    """Turn a source document into a descriptor mapping.

    Raises:
        DocumentParseError: If the content cannot be decoded into an object
    """
    content = document.content
    if isinstance(content, Mapping):
        return content
    if not isinstance(content, str):
        raise DocumentParseError(document.name, "Descriptor must be a JSON object")

    if document.name.endswith(".js"):
        schema = extract_entity_schema(content)
        if schema is None:
            raise DocumentParseError(document.name, "Could not extract EntitySchema")
        return schema

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise DocumentParseError(document.name, f"Invalid JSON: {e}") from e
    if not isinstance(parsed, Mapping):
        raise DocumentParseError(document.name, "Descriptor must be a JSON object")
    return parsed


# === Columns ===


def _type_string(definition: Mapping[str, Any]) -> str:
    type_str = str(definition.get("type") or "unknown")
    if definition.get("length"):
        type_str = f"{type_str}({definition['length']})"
    elif definition.get("precision") and definition.get("scale"):
        type_str = f"{type_str}({definition['precision']},{definition['scale']})"

    # TypeORM uses 'enum', Sequelize uses 'values'
    enum = definition.get("enum", definition.get("values"))
    if isinstance(enum, list):
        type_str = f"enum({','.join(str(v) for v in enum)})"
    return type_str


def normalize_column(name: str, definition: str | Mapping[str, Any]) -> Column:
    """Normalize one column definition to the canonical Column.

    Args:
        name: Column name
        definition: Bare type string, or a TypeORM/Sequelize column object

    Returns:
        The normalized column
    """
    if isinstance(definition, str):
        definition = {"type": definition}

    generated = definition.get("generated")
    auto_increment = generated is True or generated == "increment"

    if "nullable" in definition:
        nullable = definition["nullable"] is not False
    else:
        nullable = definition.get("allowNull") is not False

    return Column(
        name=name,
        type=_type_string(definition),
        nullable=nullable,
        unique=bool(definition.get("unique")),
        primary_key=bool(definition.get("primaryKey") or definition.get("primary")),
        auto_increment=bool(
            auto_increment or definition.get("autoIncrement") or definition.get("auto")
        ),
        default=definition.get("default", definition.get("defaultValue")),
    )


def _column_definitions(
    source: Any, document: str
) -> list[tuple[str, str | Mapping[str, Any]]]:
    if isinstance(source, Mapping):
        definitions = []
        for name, definition in source.items():
            if not isinstance(definition, (str, Mapping)):
                raise DocumentParseError(document, f"Column '{name}' has an invalid definition")
            definitions.append((str(name), definition))
        return definitions

    if isinstance(source, list):
        definitions = []
        for position, definition in enumerate(source):
            if not isinstance(definition, Mapping) or not definition.get("name"):
                raise DocumentParseError(document, f"Column #{position} has no name")
            definitions.append((str(definition["name"]), definition))
        return definitions

    return []


def parse_columns(descriptor: Mapping[str, Any], document: str) -> list[Column]:
    """Parse ``columns`` (array or map), falling back to Sequelize ``attributes``."""
    source = descriptor.get("columns")
    if source is None:
        source = descriptor.get("attributes")

    columns: list[Column] = []
    seen: set[str] = set()
    for name, definition in _column_definitions(source, document):
        if name in seen:
            logger.warning(f"{document}: duplicate column '{name}' ignored")
            continue
        seen.add(name)
        columns.append(normalize_column(name, definition))
    return columns


# === Indexes ===


def parse_indexes(descriptor: Mapping[str, Any]) -> list[Index]:
    """Parse ``indices`` (TypeORM spelling, preferred) or ``indexes``."""
    source = descriptor.get("indices") or descriptor.get("indexes")
    if not isinstance(source, list):
        return []

    indexes = []
    for entry in source:
        if not isinstance(entry, Mapping):
            continue
        # Sequelize spells it 'fields', entries may be {name|attribute: ...}
        columns = entry.get("columns", entry.get("column", entry.get("fields")))
        if columns is None:
            columns = []
        elif not isinstance(columns, list):
            columns = [columns]
        columns = [
            c.get("name") or c.get("attribute") if isinstance(c, Mapping) else c for c in columns
        ]
        indexes.append(
            Index(
                name=entry.get("name"),
                columns=[str(c) for c in columns if c is not None],
                unique=bool(entry.get("unique")),
                kind=entry.get("type") or "BTREE",
            )
        )
    return indexes


# === Relations ===


def _relation_type(declared: Any) -> RelationType:
    if declared == RelationType.MANY_TO_MANY:
        return RelationType.MANY_TO_MANY
    if declared == RelationType.ONE_TO_ONE:
        return RelationType.ONE_TO_ONE
    return RelationType.MANY_TO_ONE


def _owning_join_column(name: str, definition: Mapping[str, Any]) -> tuple[str | None, str]:
    """Determine (join column, referenced column) for an owning relation side."""
    join_table = definition.get("joinTable")
    join_column = definition.get("joinColumn")

    if join_table:
        table_column = join_table.get("joinColumn") if isinstance(join_table, Mapping) else None
        if isinstance(table_column, Mapping) and table_column.get("name"):
            return table_column["name"], table_column.get("referencedColumnName") or "id"
        return None, "id"

    if join_column:
        if isinstance(join_column, Mapping):
            referenced = join_column.get("referencedColumnName")
            return join_column.get("name") or referenced, referenced or "id"
        if join_column is True:
            return f"{name}Id", "id"
        return None, "id"

    if definition.get("type") == RelationType.MANY_TO_ONE:
        return f"{name}_id", "id"
    return None, "id"


def parse_relation_map(
    relations: Mapping[str, Any], entity_name: str, columns: list[Column]
) -> tuple[list[RelationSpec], list[Column]]:
    """Parse the object-map relation dialect (TypeORM ``relations``).

    Only owning sides are materialized; ``one-to-many`` entries are inverse
    sides and are skipped. A join column missing from ``columns`` is
    synthesized as a generated integer column.

    Args:
        relations: Relation name -> relation definition
        entity_name: Owning entity name
        columns: Columns already declared by the descriptor

    Returns:
        Tuple of (relations, synthesized columns)
    """
    parsed: list[RelationSpec] = []
    synthesized: list[Column] = []
    column_names = {c.name for c in columns}

    for relation_name, definition in relations.items():
        if not isinstance(definition, Mapping) or definition.get("type") == "one-to-many":
            continue

        relation_type = _relation_type(definition.get("type"))
        from_column, to_column = _owning_join_column(relation_name, definition)
        if not from_column:
            continue

        if from_column not in column_names:
            synthesized.append(
                Column(
                    name=from_column,
                    type="int",
                    nullable=definition.get("nullable") is not False,
                    unique=relation_type == RelationType.ONE_TO_ONE,
                    generated=True,
                )
            )
            column_names.add(from_column)

        target = definition.get("target")
        parsed.append(
            RelationSpec(
                type=relation_type,
                from_entity=entity_name,
                from_column=from_column,
                to_entity=str(target) if target is not None else None,
                to_column=to_column,
                on_delete=definition.get("onDelete"),
                on_update=definition.get("onUpdate"),
                cascade=definition.get("cascade"),
                name=relation_name,
            )
        )

    return parsed, synthesized


def parse_relation_list(relations: list[Any], entity_name: str) -> list[RelationSpec]:
    """Parse the legacy array relation dialect."""
    parsed = []
    for entry in relations:
        if not isinstance(entry, Mapping):
            continue
        from_column = entry.get("fromColumn") or entry.get("column")
        if not from_column:
            logger.warning(f"{entity_name}: relation without fromColumn skipped")
            continue
        to_entity = entry.get("toEntity") or entry.get("entity")
        parsed.append(
            RelationSpec(
                type=_relation_type(entry.get("type")),
                from_entity=entity_name,
                from_column=from_column,
                to_entity=str(to_entity) if to_entity is not None else None,
                to_column=entry.get("toColumn") or "id",
                on_delete=entry.get("onDelete"),
                on_update=entry.get("onUpdate"),
                cascade=entry.get("cascade"),
                name=entry.get("name") or from_column,
            )
        )
    return parsed


def parse_attribute_references(
    attributes: Mapping[str, Any], entity_name: str
) -> list[RelationSpec]:
    """Turn Sequelize ``references`` on attributes into relations."""
    parsed = []
    for name, definition in attributes.items():
        if not isinstance(definition, Mapping):
            continue
        references = definition.get("references")
        if not isinstance(references, Mapping) or not references.get("model"):
            continue
        parsed.append(
            RelationSpec(
                from_entity=entity_name,
                from_column=name,
                to_entity=str(references["model"]),
                to_column=references.get("key") or "id",
                on_delete=definition.get("onDelete"),
                on_update=definition.get("onUpdate"),
                name=name,
            )
        )
    return parsed


# === Entities ===


def entity_name_for(descriptor: Mapping[str, Any], source_name: str) -> str:
    """Resolve the entity name: name, then tableName, then the file name."""
    name = descriptor.get("name") or descriptor.get("tableName")
    if name:
        return str(name)
    return SOURCE_SUFFIX_RE.sub("", source_name)


def parse_entity_descriptor(descriptor: Mapping[str, Any], source_name: str) -> Entity:
    """Parse one descriptor into a canonical Entity.

    Args:
        descriptor: Parsed descriptor document
        source_name: File name, used when the descriptor carries no name

    Returns:
        The normalized entity

    Raises:
        DocumentParseError: If the descriptor is structurally invalid
    """
    if not isinstance(descriptor, Mapping):
        raise DocumentParseError(source_name, "Descriptor must be an object")

    entity_name = entity_name_for(descriptor, source_name)
    try:
        columns = parse_columns(descriptor, source_name)
        relations: list[RelationSpec] = []

        source = descriptor.get("relations")
        if isinstance(source, Mapping):
            relations, synthesized = parse_relation_map(source, entity_name, columns)
            columns.extend(synthesized)
        elif isinstance(source, list):
            relations = parse_relation_list(source, entity_name)

        attributes = descriptor.get("attributes")
        if descriptor.get("columns") is None and isinstance(attributes, Mapping):
            relations.extend(parse_attribute_references(attributes, entity_name))

        return Entity(
            name=entity_name,
            table_name=str(descriptor.get("tableName") or entity_name),
            columns=columns,
            indexes=parse_indexes(descriptor),
            relations=relations,
            description=descriptor.get("description"),
        )
    except ValidationError as e:
        raise DocumentParseError(source_name, str(e)) from e


def parse_entities(documents: Iterable[SourceDocument]) -> ParseResult:
    """Parse a batch of descriptor documents and analyze their relations.

    Documents are parsed in order into one entity map and one relation list;
    relations are analyzed only once the whole batch is known, since later
    documents may supply entities that earlier relations target. A document
    that fails is recorded in ``failures`` and does not abort the batch.

    Args:
        documents: Uploaded descriptor documents

    Returns:
        ParseResult with entities, analyzed relations and failures
    """
    entities: dict[str, Entity] = {}
    relations: list[RelationSpec] = []
    failures: list[ParseFailure] = []

    for document in documents:
        try:
            descriptor = load_descriptor(document)
            entity = parse_entity_descriptor(descriptor, document.name)
        except DocumentParseError as e:
            logger.warning(e.message)
            failures.append(ParseFailure(document=document.name, reason=e.reason))
            continue

        entities[entity.name] = entity
        relations.extend(entity.relations)

    logger.info(f"Parsed {len(entities)} entities ({len(failures)} failed documents)")
    return ParseResult(
        entities=entities,
        relations=analyze_relations(relations, entities),
        failures=failures,
    )
