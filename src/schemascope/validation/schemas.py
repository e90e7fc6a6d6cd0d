"""Bundled JSON Schemas for entity descriptor dialects."""

from __future__ import annotations

from typing import Any

TYPEORM_ENTITY = "typeorm-entity"
SEQUELIZE_MODEL = "sequelize-model"

_REFERENTIAL_ACTION = {
    "type": "string",
    "enum": ["CASCADE", "SET NULL", "RESTRICT", "NO ACTION", "SET DEFAULT"],
}

_JOIN_COLUMN = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "referencedColumnName": {"type": "string"},
        "foreignKeyConstraintName": {"type": "string"},
    },
}

_NAMED_COLUMNS = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "columns": {"type": "array", "items": {"type": "string"}, "minItems": 1},
    },
}

TYPEORM_ENTITY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "tableName": {"type": "string"},
        "database": {"type": "string"},
        "schema": {"type": "string"},
        "engine": {"type": "string"},
        "columns": {
            "type": "object",
            "patternProperties": {
                "^.*$": {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string"},
                        "primary": {"type": "boolean"},
                        "generated": {
                            "oneOf": [
                                {"type": "boolean"},
                                {"type": "string", "enum": ["increment", "uuid", "rowid"]},
                            ]
                        },
                        "nullable": {"type": "boolean"},
                        "default": {},
                        "unique": {"type": "boolean"},
                        "comment": {"type": "string"},
                        "length": {"type": ["string", "number"]},
                        "width": {"type": "number"},
                        "precision": {"type": "number"},
                        "scale": {"type": "number"},
                        "unsigned": {"type": "boolean"},
                        "enum": {"type": "array", "items": {"type": "string"}},
                        "generatedType": {"type": "string", "enum": ["VIRTUAL", "STORED"]},
                        "array": {"type": "boolean"},
                        "select": {"type": "boolean"},
                        "insert": {"type": "boolean"},
                        "update": {"type": "boolean"},
                        "name": {"type": "string"},
                    },
                }
            },
        },
        "relations": {
            "type": "object",
            "patternProperties": {
                "^.*$": {
                    "type": "object",
                    "required": ["type", "target"],
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": ["one-to-one", "one-to-many", "many-to-one", "many-to-many"],
                        },
                        "target": {"type": "string"},
                        "inverseSide": {"type": "string"},
                        "cascade": {
                            "oneOf": [
                                {"type": "boolean"},
                                {"type": "array", "items": {"type": "string"}},
                            ]
                        },
                        "onDelete": _REFERENTIAL_ACTION,
                        "onUpdate": _REFERENTIAL_ACTION,
                        "nullable": {"type": "boolean"},
                        "eager": {"type": "boolean"},
                        "lazy": {"type": "boolean"},
                        "primary": {"type": "boolean"},
                        "joinColumn": {
                            "oneOf": [
                                {"type": "boolean"},
                                _JOIN_COLUMN,
                                {"type": "array", "items": _JOIN_COLUMN},
                            ]
                        },
                        "inverseJoinColumn": {
                            "oneOf": [_JOIN_COLUMN, {"type": "array", "items": _JOIN_COLUMN}]
                        },
                        "joinTable": {
                            "oneOf": [
                                {"type": "boolean"},
                                {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "joinColumn": _JOIN_COLUMN,
                                        "inverseJoinColumn": _JOIN_COLUMN,
                                    },
                                },
                            ]
                        },
                    },
                }
            },
        },
        "indices": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "columns": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                    "unique": {"type": "boolean"},
                    "spatial": {"type": "boolean"},
                    "fulltext": {"type": "boolean"},
                    "where": {"type": "string"},
                },
            },
        },
        "uniques": {"type": "array", "items": _NAMED_COLUMNS},
        "checks": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"name": {"type": "string"}, "expression": {"type": "string"}},
            },
        },
        "orderBy": {"oneOf": [{"type": "string"}, {"type": "object"}]},
        "synchronize": {"type": "boolean"},
        "withoutRowid": {"type": "boolean"},
    },
}

SEQUELIZE_MODEL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name", "attributes"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "tableName": {"type": "string"},
        "schema": {"type": "string"},
        "timestamps": {"type": "boolean"},
        "paranoid": {"type": "boolean"},
        "underscored": {"type": "boolean"},
        "freezeTableName": {"type": "boolean"},
        "attributes": {
            "type": "object",
            "patternProperties": {
                "^.*$": {
                    "type": "object",
                    "properties": {
                        # String or a DataTypes rendering
                        "type": {},
                        "allowNull": {"type": "boolean"},
                        "defaultValue": {},
                        "unique": {"oneOf": [{"type": "boolean"}, {"type": "string"}]},
                        "primaryKey": {"type": "boolean"},
                        "autoIncrement": {"type": "boolean"},
                        "comment": {"type": "string"},
                        "field": {"type": "string"},
                        "length": {"type": "number"},
                        "precision": {"type": "number"},
                        "scale": {"type": "number"},
                        "values": {"type": "array", "items": {"type": "string"}},
                        "validate": {"type": "object"},
                        "references": {
                            "type": "object",
                            "required": ["model"],
                            "properties": {
                                "model": {"type": "string"},
                                "key": {"type": "string"},
                            },
                        },
                        "onUpdate": _REFERENTIAL_ACTION,
                        "onDelete": _REFERENTIAL_ACTION,
                    },
                }
            },
        },
        "associations": {
            "type": "object",
            "patternProperties": {
                "^.*$": {
                    "type": "object",
                    "required": ["type", "target"],
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": ["hasOne", "hasMany", "belongsTo", "belongsToMany"],
                        },
                        "target": {"type": "string"},
                        "as": {"type": "string"},
                        "foreignKey": {"oneOf": [{"type": "string"}, {"type": "object"}]},
                        "sourceKey": {"type": "string"},
                        "targetKey": {"type": "string"},
                        "through": {"oneOf": [{"type": "string"}, {"type": "object"}]},
                        "onDelete": _REFERENTIAL_ACTION,
                        "onUpdate": _REFERENTIAL_ACTION,
                    },
                }
            },
        },
        "indexes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "fields": {
                        "type": "array",
                        "items": {
                            "oneOf": [
                                {"type": "string"},
                                {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "attribute": {"type": "string"},
                                        "order": {"type": "string", "enum": ["ASC", "DESC"]},
                                    },
                                },
                            ]
                        },
                        "minItems": 1,
                    },
                    "unique": {"type": "boolean"},
                    "using": {"type": "string"},
                    "type": {"type": "string"},
                },
            },
        },
        "validate": {"type": "object"},
        "hooks": {"type": "object"},
        "defaultScope": {"type": "object"},
        "scopes": {"type": "object"},
    },
}

ENTITY_SCHEMAS: dict[str, dict[str, Any]] = {
    TYPEORM_ENTITY: TYPEORM_ENTITY_SCHEMA,
    SEQUELIZE_MODEL: SEQUELIZE_MODEL_SCHEMA,
}
