"""
Descriptor AST module.

Contains the descriptor node definitions and the parsers for body and
endpoint descriptor documents.
"""

from __future__ import annotations

from .nodes import (
    BodyRequirement,
    ChildSlot,
    ElementKind,
    EndpointDescriptor,
    EnumPayload,
    Multiplicity,
    ObjectPayload,
    ParamType,
    TypeDescriptor,
    UrlParam,
    UrlTemplate,
)
from .parser import BodySchemaParser, EndpointParser

__all__ = [
    "TypeDescriptor",
    "ElementKind",
    "Multiplicity",
    "ChildSlot",
    "ObjectPayload",
    "EnumPayload",
    "EndpointDescriptor",
    "UrlTemplate",
    "UrlParam",
    "ParamType",
    "BodyRequirement",
    "BodySchemaParser",
    "EndpointParser",
]
