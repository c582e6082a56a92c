"""Load raw YAML/JSON API documents into plain mappings."""

import json
from pathlib import Path

import yaml

from api_preview.errors import DocumentError


def load_document(text: str) -> dict:
    """Parse document text, trying YAML first and JSON second.

    Mapping key order follows the source text.
    """
    # YAML is a superset of JSON, so most documents stop here
    try:
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
    except yaml.YAMLError:
        pass

    # JSON text YAML rejects, e.g. tab indentation inside flow mappings
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise DocumentError(f"Document is neither valid YAML nor JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentError(f"Document root must be a mapping, got {type(data).__name__}")
    return data


def load_file(file_path: Path) -> dict:
    """Read and parse an API document from disk."""
    return load_document(file_path.read_text(encoding="utf-8"))
