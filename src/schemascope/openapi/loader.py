"""Loading API documents from text and detecting their version."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schemascope.core.types import SpecVersion
from schemascope.exceptions import SpecFormatError, UnsupportedSpecVersionError

logger = logging.getLogger(__name__)

# Versions with a validation meta-schema, newest first
AVAILABLE_VERSIONS = ["3.2.0", "3.1.0", "3.0.3"]
SWAGGER_VERSION = "2.0"

_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


def detect_format(content: str) -> str:
    """Detect whether content is JSON or YAML ('json' or 'yaml')."""
    trimmed = content.strip()
    return "json" if trimmed.startswith(("{", "[")) else "yaml"


def parse_spec(content: str) -> Any:
    """Parse an API document from JSON or YAML text.

    Raises:
        SpecFormatError: If the content cannot be parsed in its detected format
    """
    format_name = detect_format(content)
    try:
        if format_name == "json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecFormatError(format_name, str(e)) from e


def read_spec_file(path: str | Path) -> Any:
    """Read and parse an API document from a .json, .yaml or .yml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SpecFormatError: If the extension is not allowed or content is invalid
    """
    file_path = Path(path)
    allowed = (".json", ".yaml", ".yml")
    if file_path.suffix.lower() not in allowed:
        raise SpecFormatError(
            file_path.suffix.lstrip(".") or "unknown",
            f"Invalid file type. Allowed: {', '.join(allowed)}",
        )
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return parse_spec(file_path.read_text(encoding="utf-8"))


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def find_best_match(spec_version: str, available_versions: Sequence[str]) -> str | None:
    """Find the validator version to use for a document version.

    An exact match wins. Otherwise the newest available version with the same
    major version and a minor version not above the requested one is used.
    """
    if spec_version in available_versions:
        return spec_version

    major, minor = _version_key(spec_version)[:2]
    candidates = [
        v
        for v in available_versions
        if _version_key(v)[0] == major and _version_key(v)[1] <= minor
    ]
    if not candidates:
        return None
    return max(candidates, key=_version_key)


def detect_version(
    document: Mapping[str, Any],
    available_versions: Sequence[str] | None = None,
) -> SpecVersion:
    """Detect the version of an API document.

    Args:
        document: Parsed API document
        available_versions: Versions with a validator (defaults to AVAILABLE_VERSIONS)

    Returns:
        SpecVersion with the document version and the validator version to use

    Raises:
        UnsupportedSpecVersionError: If the version is missing, malformed or unsupported
    """
    available = list(available_versions or AVAILABLE_VERSIONS)

    swagger = document.get("swagger")
    if swagger is not None and not document.get("openapi"):
        if str(swagger) != SWAGGER_VERSION:
            raise UnsupportedSpecVersionError(str(swagger), [SWAGGER_VERSION])
        return SpecVersion(
            version=SWAGGER_VERSION, schema_version=SWAGGER_VERSION, is_swagger=True
        )

    spec_version = document.get("openapi")
    if not spec_version:
        raise UnsupportedSpecVersionError(None)

    spec_version = str(spec_version)
    if not _VERSION_RE.match(spec_version):
        raise UnsupportedSpecVersionError(spec_version)

    schema_version = find_best_match(spec_version, available)
    if schema_version is None:
        raise UnsupportedSpecVersionError(spec_version, available)

    logger.debug(f"OpenAPI {spec_version} validated with schema {schema_version}")
    return SpecVersion(version=spec_version, schema_version=schema_version)
