"""Tests for API document loading and version detection."""

import pytest

from schemascope.exceptions import SpecFormatError, UnsupportedSpecVersionError
from schemascope.openapi.loader import (
    AVAILABLE_VERSIONS,
    detect_format,
    detect_version,
    find_best_match,
    parse_spec,
    read_spec_file,
)


class TestParseSpec:
    """Tests for JSON/YAML parsing."""

    def test_detect_format(self):
        assert detect_format('  {"openapi": "3.1.0"}') == "json"
        assert detect_format("openapi: 3.1.0") == "yaml"

    def test_parse_json_and_yaml(self):
        assert parse_spec('{"openapi": "3.1.0"}') == {"openapi": "3.1.0"}
        assert parse_spec("openapi: 3.1.0\ninfo:\n  title: x\n") == {
            "openapi": "3.1.0",
            "info": {"title": "x"},
        }

    def test_invalid_json(self):
        with pytest.raises(SpecFormatError) as exc_info:
            parse_spec('{"openapi": ')
        assert exc_info.value.message.startswith("Failed to parse JSON")

    def test_invalid_yaml(self):
        with pytest.raises(SpecFormatError) as exc_info:
            parse_spec("openapi: [3.1.0\n")
        assert exc_info.value.format_name == "yaml"

    def test_read_spec_file(self, petstore_path):
        document = read_spec_file(petstore_path)
        assert document["openapi"] == "3.1.0"
        assert "Pet" in document["components"]["schemas"]

    def test_read_spec_file_extension(self, tmp_path):
        path = tmp_path / "spec.txt"
        path.write_text("openapi: 3.1.0")
        with pytest.raises(SpecFormatError, match="Invalid file type"):
            read_spec_file(path)

    def test_read_spec_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_spec_file(tmp_path / "missing.yaml")


class TestFindBestMatch:
    """Tests for validator version matching."""

    def test_exact(self):
        assert find_best_match("3.1.0", AVAILABLE_VERSIONS) == "3.1.0"

    def test_same_minor_fallback(self):
        assert find_best_match("3.0.1", AVAILABLE_VERSIONS) == "3.0.3"
        assert find_best_match("3.1.1", AVAILABLE_VERSIONS) == "3.1.0"

    def test_newest_lower_minor(self):
        assert find_best_match("3.5.0", AVAILABLE_VERSIONS) == "3.2.0"

    def test_no_match(self):
        assert find_best_match("4.0.0", AVAILABLE_VERSIONS) is None


class TestDetectVersion:
    """Tests for version detection."""

    def test_swagger(self, swagger_document):
        version = detect_version(swagger_document)
        assert version.is_swagger
        assert version.version == "2.0"
        assert version.schema_version == "2.0"

    def test_openapi(self, openapi_document):
        version = detect_version(openapi_document)
        assert not version.is_swagger
        assert version.version == "3.0.3"
        assert version.schema_version == "3.0.3"

    def test_missing_field(self):
        with pytest.raises(UnsupportedSpecVersionError, match='missing "openapi" field'):
            detect_version({"info": {}})

    def test_invalid_format(self):
        with pytest.raises(UnsupportedSpecVersionError, match="Invalid OpenAPI version format"):
            detect_version({"openapi": "3.1"})

    def test_unsupported(self):
        with pytest.raises(UnsupportedSpecVersionError) as exc_info:
            detect_version({"openapi": "4.0.0"})
        assert exc_info.value.available_versions == AVAILABLE_VERSIONS
        assert "Available versions: 3.2.0, 3.1.0, 3.0.3" in exc_info.value.message

    def test_custom_available_versions(self):
        version = detect_version({"openapi": "3.0.0"}, ["3.0.0"])
        assert version.schema_version == "3.0.0"
