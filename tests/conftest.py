"""Shared test fixtures for SchemaScope."""

from pathlib import Path
from typing import Any

import pytest

from schemascope import SourceDocument

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ENTITY_FIXTURES = FIXTURES_DIR / "entities"
PETSTORE_PATH = FIXTURES_DIR / "openapi" / "petstore.yaml"

# Descriptors that reference each other and parse cleanly
SHOP_ENTITY_FILES = [
    "User.entity.js",
    "Order.entity.js",
    "OrderItem.entity.js",
    "Product.entity.js",
    "Category.entity.js",
]


@pytest.fixture
def entity_fixtures_dir() -> Path:
    return ENTITY_FIXTURES


@pytest.fixture
def shop_documents() -> list[SourceDocument]:
    """The shop descriptor modules as raw JS source documents."""
    return [
        SourceDocument(name=name, content=(ENTITY_FIXTURES / name).read_text(encoding="utf-8"))
        for name in SHOP_ENTITY_FILES
    ]


@pytest.fixture
def user_descriptor() -> dict[str, Any]:
    return {
        "name": "User",
        "columns": {
            "id": {"type": "int", "primary": True, "generated": True},
            "name": "varchar",
        },
    }


@pytest.fixture
def order_descriptor() -> dict[str, Any]:
    return {
        "name": "Order",
        "columns": {
            "id": {"type": "int", "primary": True, "generated": True},
            "total": {"type": "decimal", "precision": 10, "scale": 2},
        },
        "relations": {"user": {"type": "many-to-one", "target": "User"}},
    }


@pytest.fixture
def petstore_path() -> Path:
    return PETSTORE_PATH


@pytest.fixture
def openapi_document() -> dict[str, Any]:
    """A small OpenAPI 3.x document with allOf, arrays and a reference cycle."""
    return {
        "openapi": "3.0.3",
        "components": {
            "schemas": {
                "Animal": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                    "required": ["name"],
                },
                "Pet": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Animal"},
                        {"properties": {"tag": {"type": "string"}}, "required": ["tag"]},
                    ]
                },
                "Node": {
                    "type": "object",
                    "properties": {
                        "value": {"type": "integer"},
                        "next": {"$ref": "#/components/schemas/Node"},
                    },
                },
                "A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/B"}}},
                "B": {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/A"}}},
            }
        },
    }


@pytest.fixture
def swagger_document() -> dict[str, Any]:
    return {
        "swagger": "2.0",
        "definitions": {
            "Category": {"type": "object", "properties": {"id": {"type": "integer"}}},
            "Pet": {
                "type": "object",
                "properties": {"category": {"$ref": "#/definitions/Category"}},
            },
        },
    }
