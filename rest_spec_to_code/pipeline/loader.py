"""
Descriptor document loading.

Every ``*.json`` file of the input directory is one document. Their
top-level keys are merged into a single namespace in file name order, so a
key defined in a later file replaces the same key of an earlier one.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import GenerationError, SchemaValidationError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "_comment"


def load_document(path: Path) -> dict[str, Any]:
    """
    Load one descriptor document.

    Args:
        path: JSON file to read

    Returns:
        The top-level object, without comment entries

    Raises:
        SchemaValidationError: If the file is not UTF-8 encoded JSON or not an object
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaValidationError(f"invalid JSON: {e}", path.name) from e
    except UnicodeDecodeError as e:
        raise SchemaValidationError(f"not valid UTF-8: {e}", path.name) from e

    if not isinstance(document, dict):
        raise SchemaValidationError(f"expected a top-level object, got {type(document).__name__}", path.name)
    return {key: value for key, value in document.items() if not key.startswith(COMMENT_PREFIX)}


def load_documents(input_dir: Path) -> dict[str, Any]:
    """Load and merge every JSON document of a directory."""
    paths = sorted(Path(input_dir).glob("*.json"))
    if not paths:
        raise GenerationError(f"No descriptor documents (*.json) found in {input_dir}")

    merged: dict[str, Any] = {}
    for path in paths:
        document = load_document(path)
        for key in document.keys() & merged.keys():
            logger.debug("%s overrides %s", path.name, key)
        merged.update(document)
        logger.debug("Loaded %d entries from %s", len(document), path.name)
    return merged
