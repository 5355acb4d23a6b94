"""
Analyzer module.

Contains the body and endpoint schema interpreters and the definitions
they build.
"""

from __future__ import annotations

from .body_interpreter import BodySchemaInterpreter
from .endpoint_interpreter import EndpointSchemaInterpreter
from .ir_nodes import (
    BodyStyle,
    DefinitionKind,
    ElementTree,
    EnumCaseDef,
    FieldDef,
    FieldRole,
    MethodDef,
    MethodGroupDef,
    ParamDef,
    ParamKind,
    SerializationRule,
    TypeDef,
    UrlPart,
)

__all__ = [
    "BodySchemaInterpreter",
    "EndpointSchemaInterpreter",
    "TypeDef",
    "FieldDef",
    "FieldRole",
    "EnumCaseDef",
    "DefinitionKind",
    "SerializationRule",
    "ElementTree",
    "MethodGroupDef",
    "MethodDef",
    "ParamDef",
    "ParamKind",
    "BodyStyle",
    "UrlPart",
]
