"""
Checked accessors over parsed JSON documents.

Descriptors arrive as plain ``json.load`` output. Every read goes through
one of these helpers so that a missing or wrongly typed value surfaces as a
SchemaValidationError carrying the JSON path instead of a KeyError or
TypeError deep inside the interpreters.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import SchemaValidationError

_MISSING = object()


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def expect_mapping(value: Any, path: str) -> Mapping[str, Any]:
    """Return value if it is a JSON object, raise otherwise."""
    if not isinstance(value, Mapping):
        raise SchemaValidationError(f"expected an object, got {_type_name(value)}", path)
    return value


def require_str(node: Mapping[str, Any], key: str, path: str) -> str:
    value = node.get(key, _MISSING)
    if value is _MISSING:
        raise SchemaValidationError(f"missing required field '{key}'", path)
    if not isinstance(value, str):
        raise SchemaValidationError(f"field '{key}' must be a string, got {_type_name(value)}", path)
    return value


def optional_str(node: Mapping[str, Any], key: str, path: str) -> str | None:
    value = node.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaValidationError(f"field '{key}' must be a string, got {_type_name(value)}", path)
    return value


def optional_bool(node: Mapping[str, Any], key: str, path: str, default: bool = False) -> bool:
    value = node.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise SchemaValidationError(f"field '{key}' must be a boolean, got {_type_name(value)}", path)
    return value


def optional_mapping(node: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any] | None:
    value = node.get(key)
    if value is None:
        return None
    return expect_mapping(value, f"{path}.{key}")


def require_list(node: Mapping[str, Any], key: str, path: str) -> list[Any]:
    value = node.get(key, _MISSING)
    if value is _MISSING:
        raise SchemaValidationError(f"missing required field '{key}'", path)
    if not isinstance(value, list):
        raise SchemaValidationError(f"field '{key}' must be an array, got {_type_name(value)}", path)
    return value


def require_str_list(node: Mapping[str, Any], key: str, path: str) -> list[str]:
    values = require_list(node, key, path)
    for index, item in enumerate(values):
        if not isinstance(item, str):
            raise SchemaValidationError(f"expected a string, got {_type_name(item)}", f"{path}.{key}[{index}]")
    return values
