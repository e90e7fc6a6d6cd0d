"""Input reading utilities for CLI commands."""

from pathlib import Path
from typing import Any

from schemascope.core.types import ParseFailure
from schemascope.entities.parser import SourceDocument, load_descriptor
from schemascope.exceptions import DocumentParseError
from schemascope.openapi.loader import read_spec_file


def read_documents(paths: list[Path]) -> tuple[list[SourceDocument], list[ParseFailure]]:
    """Read descriptor files into source documents.

    Unreadable files are reported as failures instead of aborting the batch.

    Args:
        paths: Descriptor files (.json or .js)

    Returns:
        Tuple of (documents, failures)
    """
    documents = []
    failures = []
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            failures.append(ParseFailure(document=path.name, reason=str(e)))
            continue
        documents.append(SourceDocument(name=path.name, content=content))
    return documents, failures


def read_descriptor(path: Path) -> Any:
    """Read and decode a single descriptor file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        DocumentParseError: If the content cannot be decoded
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(path.name, f"Invalid UTF-8: {e}") from e
    return load_descriptor(SourceDocument(name=path.name, content=content))


def read_api_document(path: Path) -> dict[str, Any]:
    """Read an API document (.json/.yaml/.yml).

    Raises:
        FileNotFoundError: If the file doesn't exist
        SpecFormatError: If the content cannot be parsed
        ValueError: If the document is not an object
    """
    document = read_spec_file(path)
    if not isinstance(document, dict):
        raise ValueError(f"API document must be an object: {path}")
    return document
