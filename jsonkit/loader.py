"""Loading JSON/YAML documents from files and text."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .exceptions import DocumentLoadError


class JsonCompatibleLoader(yaml.SafeLoader):
    """SafeLoader that keeps YAML timestamps as plain strings."""


JsonCompatibleLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if tag != 'tag:yaml.org,2002:timestamp'
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_text(content: str, source: str = "<text>") -> Any:
    """
    Parse a JSON or YAML document from text.

    Strict JSON is tried first; anything else goes through the YAML loader.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.load(content, Loader=JsonCompatibleLoader)
    except yaml.YAMLError as e:
        raise DocumentLoadError(
            f"Failed to parse document: {source}",
            path=source,
            reason=str(e)
        )


def load_document(path: str | Path) -> Any:
    """
    Load a JSON or YAML document from a file.

    Args:
        path: Path to a .json/.yaml/.yml file

    Returns:
        The parsed document
    """
    document_path = Path(path)
    if not document_path.exists():
        raise DocumentLoadError(
            f"Document not found: {document_path}",
            path=str(document_path),
            reason="missing"
        )

    try:
        with open(document_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise DocumentLoadError(
            f"Failed to read document: {document_path}",
            path=str(document_path),
            reason=str(e)
        )

    return load_text(content, str(document_path))
