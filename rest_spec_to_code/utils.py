"""
Naming helpers for the REST spec code generator.

All functions here are pure: the same descriptor key always maps to the same
identifier, which keeps the rendered output (and therefore the registry
conflict check) deterministic.
"""

import keyword
import re

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^0-9a-zA-Z_]")

SWIFT_RESERVED_WORDS = {
    "associatedtype",
    "case",
    "class",
    "default",
    "defer",
    "deinit",
    "do",
    "else",
    "enum",
    "extension",
    "fallthrough",
    "false",
    "for",
    "func",
    "guard",
    "if",
    "import",
    "in",
    "init",
    "inout",
    "internal",
    "is",
    "let",
    "nil",
    "operator",
    "private",
    "protocol",
    "public",
    "repeat",
    "return",
    "self",
    "static",
    "struct",
    "subscript",
    "super",
    "switch",
    "true",
    "try",
    "var",
    "where",
    "while",
}


def snake_to_camel_case(text: str) -> str:
    """Convert snake_case to lowerCamelCase.

    The first component is kept as written, every following component is
    capitalized (and the rest of it lowercased).

    Examples:
        "match_all" -> "matchAll"
        "minimum_should_match" -> "minimumShouldMatch"
        "_source" -> "Source"
    """
    components = text.split("_")
    return components[0] + "".join(component.capitalize() for component in components[1:])


def swift_identifier(text: str) -> str:
    """Turn a descriptor key into a Swift identifier."""
    name = snake_to_camel_case(_INVALID_IDENTIFIER_CHARS.sub("_", text))
    if not name:
        return "_"
    if name[0].isdigit():
        return f"_{name}"
    if name in SWIFT_RESERVED_WORDS:
        return f"`{name}`"
    return name


def _python_snake(text: str) -> str:
    name = _INVALID_IDENTIFIER_CHARS.sub("_", text)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name).lower()
    if not name:
        return "_"
    if name[0].isdigit():
        return f"_{name}"
    return name


def python_identifier(text: str) -> str:
    """Turn a descriptor key into a snake_case Python identifier."""
    name = _python_snake(text)
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def python_constant_name(text: str) -> str:
    """Turn an enum option into an UPPER_SNAKE_CASE member name."""
    return _python_snake(text).upper()


def endpoint_base_name(name: str) -> str:
    """Map an endpoint name such as 'indices.put_mapping' to 'indices_put_mapping'."""
    return name.replace(".", "_")
