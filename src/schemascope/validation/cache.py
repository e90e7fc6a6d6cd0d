"""Caller-owned cache of JSON Schema documents and compiled validators."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from schemascope.exceptions import ValidatorSchemaNotFoundError

logger = logging.getLogger(__name__)

SchemaLoader = Callable[[str], "dict[str, Any] | None"]


def directory_loader(directory: str | Path) -> SchemaLoader:
    """Build a loader reading ``<key>.json`` files from a directory.

    Useful for OpenAPI meta-schemas stored as ``openapi-3.1.0.json`` or
    ``swagger-2.0.json``.
    """
    base = Path(directory)

    def load(key: str) -> dict[str, Any] | None:
        path = base / f"{key}.json"
        if not path.is_file():
            return None
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    return load


class SchemaCache:
    """Holds validation schemas keyed by name, loading them lazily.

    The cache is owned by the caller: create one, register or point it at a
    loader, and pass it to the validation functions. Nothing is shared at
    module level.

    Example:
        cache = SchemaCache(loader=directory_loader("meta-schemas"))
        cache.register("custom", {"type": "object"})
        validator = cache.validator("openapi-3.1.0")
    """

    def __init__(
        self,
        schemas: Mapping[str, dict[str, Any]] | None = None,
        loader: SchemaLoader | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            schemas: Schemas to register up front
            loader: Called with a key on a cache miss; returns the schema or None
        """
        self._schemas: dict[str, dict[str, Any]] = dict(schemas or {})
        self._validators: dict[str, Validator] = {}
        self._loader = loader

    def __contains__(self, key: object) -> bool:
        return key in self._schemas

    def keys(self) -> list[str]:
        """List the keys of schemas currently held."""
        return list(self._schemas)

    def register(self, key: str, schema: dict[str, Any]) -> None:
        """Register (or replace) a schema under a key."""
        self._schemas[key] = schema
        self._validators.pop(key, None)

    def get(self, key: str) -> dict[str, Any]:
        """Get a schema, loading it on first use.

        Raises:
            ValidatorSchemaNotFoundError: If the key is not registered and cannot be loaded
        """
        if key in self._schemas:
            return self._schemas[key]

        schema = self._loader(key) if self._loader is not None else None
        if schema is None:
            raise ValidatorSchemaNotFoundError(key, self.keys())

        logger.debug(f"Loaded validation schema '{key}'")
        self._schemas[key] = schema
        return schema

    def validator(self, key: str) -> Validator:
        """Get the compiled validator for a schema (draft chosen by ``$schema``)."""
        if key not in self._validators:
            schema = self.get(key)
            cls = validator_for(schema, default=Draft7Validator)
            self._validators[key] = cls(schema)
        return self._validators[key]

    def clear(self) -> None:
        """Drop everything held, including registered schemas."""
        self._schemas.clear()
        self._validators.clear()
