"""Load API description documents and detect their format."""

import json
from pathlib import Path

import yaml

DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


class LoaderError(Exception):
    """An API description document could not be read or understood."""


def load_document(file_path: Path) -> dict:
    """Read a YAML or JSON document into a dict.

    Raises:
        LoaderError: If the file cannot be read, parsed, or is not a mapping.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Unable to read {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        # Valid JSON that YAML rejects, e.g. tab indentation
        if file_path.suffix.lower() != ".json" and not text.lstrip().startswith("{"):
            raise LoaderError(f"Unable to parse {file_path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as json_error:
            raise LoaderError(f"Unable to parse {file_path}: {json_error}") from json_error

    if not isinstance(data, dict):
        raise LoaderError(f"{file_path} does not contain a document object")
    return data


def detect_document_format(doc: dict) -> str:
    """Return 'swagger', 'openapi', or 'unknown' for a loaded document."""
    if "swagger" in doc:
        return "swagger"
    if "openapi" in doc:
        return "openapi"
    return "unknown"


def detect_format(file_path: Path) -> str:
    """Detect the format of an API description file.

    Returns: 'swagger', 'openapi', or 'unknown'.
    """
    try:
        return detect_document_format(load_document(file_path))
    except LoaderError:
        return "unknown"


def collect_documents(paths: list[Path]) -> list[Path]:
    """Expand directories into the API description files they contain.

    Files given explicitly are kept as-is; directories are searched
    recursively and only files detected as swagger/openapi are kept.
    """
    documents = []
    for path in paths:
        if not path.is_dir():
            documents.append(path)
            continue
        for candidate in sorted(path.rglob("*")):
            if candidate.is_file() and candidate.suffix.lower() in DOCUMENT_SUFFIXES:
                if detect_format(candidate) != "unknown":
                    documents.append(candidate)
    return documents
