"""Custom exceptions for SchemaScope.

The parse and resolve pipeline reports problems as data (failure lists and
sentinel schemas). These exceptions are raised by single-document helpers and
loaders, and follow the same principles as the rest of the package:
- Actionable error messages that tell what went wrong AND how to fix it
- A JSON-serializable form for rendering collaborators
"""

from __future__ import annotations

from typing import Any


class SchemaScopeError(Exception):
    """Base exception for all SchemaScope errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class DocumentParseError(SchemaScopeError):
    """A single descriptor document could not be parsed."""

    def __init__(self, document: str, reason: str) -> None:
        message = f"Failed to parse '{document}': {reason}"
        super().__init__(message, {"document": document, "reason": reason})
        self.document = document
        self.reason = reason


class SpecFormatError(SchemaScopeError):
    """API document content is neither valid JSON nor valid YAML."""

    def __init__(self, format_name: str, reason: str) -> None:
        message = f"Failed to parse {format_name.upper()}: {reason}"
        super().__init__(message, {"format": format_name, "reason": reason})
        self.format_name = format_name
        self.reason = reason


class UnsupportedSpecVersionError(SchemaScopeError):
    """API document version is missing, malformed or has no validator."""

    def __init__(
        self, version: str | None, available_versions: list[str] | None = None
    ) -> None:
        available = available_versions or []
        if version is None:
            message = "Invalid OpenAPI spec: missing \"openapi\" field"
        elif available:
            message = (
                f"Unsupported OpenAPI version: {version}. "
                f"Available versions: {', '.join(available)}"
            )
        else:
            message = f"Invalid OpenAPI version format: {version}"

        super().__init__(message, {"version": version, "available_versions": available})
        self.version = version
        self.available_versions = available


class ValidatorSchemaNotFoundError(SchemaScopeError):
    """Requested validation schema is neither registered nor loadable."""

    def __init__(self, key: str, available_keys: list[str] | None = None) -> None:
        available = available_keys or []
        if available:
            message = (
                f"Validation schema '{key}' not found. Registered schemas: {', '.join(available)}"
            )
        else:
            message = (
                f"Validation schema '{key}' not found. "
                "Register it on the cache or provide a loader."
            )
        super().__init__(message, {"key": key, "available_keys": available})
        self.key = key
        self.available_keys = available
