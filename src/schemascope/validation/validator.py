"""Validation of entity descriptors and API documents with jsonschema.

Validation never raises: problems (including a missing validation schema)
come back as a report so callers can surface them as warnings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from jsonschema.exceptions import SchemaError

from schemascope.core.types import (
    SpecValidationReport,
    SpecVersion,
    ValidationIssue,
    ValidationReport,
)
from schemascope.exceptions import SchemaScopeError
from schemascope.openapi.loader import detect_version
from schemascope.validation.cache import SchemaCache
from schemascope.validation.schemas import ENTITY_SCHEMAS, SEQUELIZE_MODEL, TYPEORM_ENTITY


def entity_schema_cache() -> SchemaCache:
    """Create a cache preloaded with the bundled entity dialect schemas."""
    return SchemaCache(ENTITY_SCHEMAS)


def spec_schema_key(version: SpecVersion) -> str:
    """Cache key of the meta-schema for a document version."""
    if version.is_swagger:
        return f"swagger-{version.schema_version}"
    return f"openapi-{version.schema_version}"


def _issue_path(path: Iterable[Any]) -> str:
    parts = [str(p) for p in path]
    return "/" + "/".join(parts) if parts else "root"


def _collect_issues(key: str, data: Any, cache: SchemaCache) -> list[ValidationIssue]:
    try:
        validator = cache.validator(key)
        errors = sorted(
            validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]
        )
    except (SchemaScopeError, SchemaError) as e:
        return [ValidationIssue(message=f"Validation error: {getattr(e, 'message', e)}")]
    return [ValidationIssue(path=_issue_path(e.absolute_path), message=e.message) for e in errors]


def validate_entity(data: Any, cache: SchemaCache | None = None) -> ValidationReport:
    """Detect the descriptor dialect and validate against it.

    TypeORM descriptors carry ``columns`` or ``relations``, Sequelize models
    carry ``attributes``. Ambiguous descriptors are tried as TypeORM first,
    then Sequelize. When neither passes, the TypeORM errors are reported with
    kind ``unknown``.

    Args:
        data: Descriptor to validate
        cache: Schema cache; a fresh one with the bundled schemas if None

    Returns:
        ValidationReport with kind ``typeorm``, ``sequelize`` or ``unknown``
    """
    cache = cache or entity_schema_cache()
    is_mapping = isinstance(data, Mapping)
    has_typeorm = is_mapping and bool(data.get("name")) and bool(
        data.get("columns") or data.get("relations")
    )
    has_sequelize = is_mapping and bool(data.get("name")) and bool(data.get("attributes"))

    if has_typeorm and not has_sequelize:
        issues = _collect_issues(TYPEORM_ENTITY, data, cache)
        return ValidationReport(valid=not issues, kind="typeorm", errors=issues)

    if has_sequelize and not has_typeorm:
        issues = _collect_issues(SEQUELIZE_MODEL, data, cache)
        return ValidationReport(valid=not issues, kind="sequelize", errors=issues)

    typeorm_issues = _collect_issues(TYPEORM_ENTITY, data, cache)
    if not typeorm_issues:
        return ValidationReport(valid=True, kind="typeorm")

    if not _collect_issues(SEQUELIZE_MODEL, data, cache):
        return ValidationReport(valid=True, kind="sequelize")

    return ValidationReport(valid=False, kind="unknown", errors=typeorm_issues)


def validate_spec(
    document: Any,
    cache: SchemaCache,
    available_versions: Sequence[str] | None = None,
) -> SpecValidationReport:
    """Validate an API document against the meta-schema for its version.

    The cache must hold (or be able to load) the meta-schema under
    ``openapi-<version>`` or ``swagger-2.0``.
    """
    if not isinstance(document, Mapping) or not document:
        return SpecValidationReport(
            valid=False, errors=[ValidationIssue(message="No spec provided")]
        )

    try:
        version = detect_version(document, available_versions)
    except SchemaScopeError as e:
        return SpecValidationReport(valid=False, errors=[ValidationIssue(message=e.message)])

    key = spec_schema_key(version)
    issues = _collect_issues(key, document, cache)
    return SpecValidationReport(
        valid=not issues,
        kind=key,
        errors=issues,
        version=version.version,
        schema_version=version.schema_version,
        is_swagger=version.is_swagger,
    )


def format_validation_errors(errors: Sequence[ValidationIssue]) -> str:
    """Format validation issues as one ``path: message; ...`` line."""
    if not errors:
        return "Unknown validation error"
    return "; ".join(f"{e.path or 'root'}: {e.message or 'Invalid value'}" for e in errors)
