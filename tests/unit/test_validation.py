"""Tests for JSON Schema validation of descriptors and API documents."""

import json

import pytest

from schemascope.core.types import ValidationIssue
from schemascope.exceptions import ValidatorSchemaNotFoundError
from schemascope.validation.cache import SchemaCache, directory_loader
from schemascope.validation.schemas import SEQUELIZE_MODEL, TYPEORM_ENTITY
from schemascope.validation.validator import (
    entity_schema_cache,
    format_validation_errors,
    validate_entity,
    validate_spec,
)

OPENAPI_META_SCHEMA = {
    "type": "object",
    "required": ["openapi", "info", "paths"],
    "properties": {"info": {"type": "object", "required": ["title"]}},
}


class TestSchemaCache:
    """Tests for SchemaCache."""

    def test_register_and_get(self):
        cache = SchemaCache()
        cache.register("custom", {"type": "object"})
        assert "custom" in cache
        assert cache.get("custom") == {"type": "object"}
        assert cache.keys() == ["custom"]

    def test_missing_schema(self):
        cache = SchemaCache({"a": {}})
        with pytest.raises(ValidatorSchemaNotFoundError) as exc_info:
            cache.get("b")
        assert exc_info.value.available_keys == ["a"]
        assert "Registered schemas: a" in exc_info.value.message

    def test_validator_is_cached(self):
        cache = SchemaCache({"custom": {"type": "object"}})
        assert cache.validator("custom") is cache.validator("custom")

    def test_register_replaces_validator(self):
        cache = SchemaCache({"custom": {"type": "object"}})
        assert cache.validator("custom").is_valid({})
        cache.register("custom", {"type": "string"})
        assert not cache.validator("custom").is_valid({})

    def test_loader_called_once(self):
        calls = []

        def loader(key):
            calls.append(key)
            return {"type": "object"} if key == "known" else None

        cache = SchemaCache(loader=loader)
        cache.get("known")
        cache.get("known")
        assert calls == ["known"]
        with pytest.raises(ValidatorSchemaNotFoundError):
            cache.get("unknown")

    def test_directory_loader(self, tmp_path):
        (tmp_path / "openapi-3.1.0.json").write_text(json.dumps(OPENAPI_META_SCHEMA))
        load = directory_loader(tmp_path)
        assert load("openapi-3.1.0") == OPENAPI_META_SCHEMA
        assert load("swagger-2.0") is None

    def test_clear(self):
        cache = SchemaCache({"custom": {}})
        cache.validator("custom")
        cache.clear()
        assert "custom" not in cache
        assert cache.keys() == []

    def test_entity_schema_cache(self):
        cache = entity_schema_cache()
        assert TYPEORM_ENTITY in cache
        assert SEQUELIZE_MODEL in cache


class TestValidateEntity:
    """Tests for descriptor dialect detection and validation."""

    def test_valid_typeorm(self):
        report = validate_entity(
            {"name": "User", "columns": {"id": {"type": "int", "primary": True}}}
        )
        assert report.valid
        assert report.kind == "typeorm"
        assert report.errors == []

    def test_invalid_typeorm(self):
        report = validate_entity({"name": "User", "columns": {"id": {"type": 5}}})
        assert not report.valid
        assert report.kind == "typeorm"
        assert report.errors[0].path == "/columns/id/type"

    def test_invalid_relation_type(self):
        report = validate_entity(
            {"name": "Order", "relations": {"user": {"type": "belongs-to", "target": "User"}}}
        )
        assert not report.valid
        assert report.errors[0].path == "/relations/user/type"

    def test_valid_sequelize(self):
        report = validate_entity(
            {"name": "Post", "attributes": {"id": {"type": "INTEGER", "primaryKey": True}}}
        )
        assert report.valid
        assert report.kind == "sequelize"

    def test_ambiguous_name_only(self):
        """A bare named descriptor passes as TypeORM."""
        report = validate_entity({"name": "Empty"})
        assert report.valid
        assert report.kind == "typeorm"

    def test_unknown(self):
        report = validate_entity({})
        assert not report.valid
        assert report.kind == "unknown"
        assert report.errors[0].path == "root"
        assert "'name' is a required property" in report.errors[0].message

    def test_reuses_caller_cache(self):
        cache = entity_schema_cache()
        validate_entity({"name": "User", "columns": {}}, cache)
        assert validate_entity({"name": "User", "columns": {}}, cache).valid


class TestValidateSpec:
    """Tests for API document validation."""

    @pytest.fixture
    def cache(self) -> SchemaCache:
        return SchemaCache({"openapi-3.0.3": OPENAPI_META_SCHEMA})

    def test_valid(self, cache):
        document = {"openapi": "3.0.3", "info": {"title": "Pets"}, "paths": {}}
        report = validate_spec(document, cache)
        assert report.valid
        assert report.kind == "openapi-3.0.3"
        assert report.version == "3.0.3"
        assert report.schema_version == "3.0.3"
        assert report.is_swagger is False

    def test_invalid(self, cache, openapi_document):
        report = validate_spec(openapi_document, cache)
        assert not report.valid
        assert {e.message for e in report.errors} == {
            "'info' is a required property",
            "'paths' is a required property",
        }

    def test_nested_error_path(self, cache):
        document = {"openapi": "3.0.3", "info": {}, "paths": {}}
        report = validate_spec(document, cache)
        assert report.errors[0].path == "/info"

    def test_minor_version_fallback(self, cache):
        document = {"openapi": "3.0.1", "info": {"title": "Pets"}, "paths": {}}
        report = validate_spec(document, cache, available_versions=["3.0.3"])
        assert report.valid
        assert report.version == "3.0.1"
        assert report.schema_version == "3.0.3"

    def test_swagger_key(self, swagger_document):
        cache = SchemaCache({"swagger-2.0": {"type": "object", "required": ["swagger"]}})
        report = validate_spec(swagger_document, cache)
        assert report.valid
        assert report.kind == "swagger-2.0"
        assert report.is_swagger is True

    def test_no_spec(self, cache):
        for document in ({}, None, "openapi: 3.0.3"):
            report = validate_spec(document, cache)
            assert not report.valid
            assert report.errors[0].message == "No spec provided"

    def test_unsupported_version(self, cache):
        report = validate_spec({"openapi": "4.0.0"}, cache)
        assert not report.valid
        assert report.errors[0].message.startswith("Unsupported OpenAPI version: 4.0.0")

    def test_missing_meta_schema(self, openapi_document):
        report = validate_spec(openapi_document, SchemaCache())
        assert not report.valid
        assert report.errors[0].message.startswith(
            "Validation error: Validation schema 'openapi-3.0.3' not found"
        )


class TestFormatValidationErrors:
    """Tests for error formatting."""

    def test_format(self):
        errors = [
            ValidationIssue(path="/info", message="'title' is a required property"),
            ValidationIssue(message="'paths' is a required property"),
        ]
        assert format_validation_errors(errors) == (
            "/info: 'title' is a required property; root: 'paths' is a required property"
        )

    def test_empty(self):
        assert format_validation_errors([]) == "Unknown validation error"
