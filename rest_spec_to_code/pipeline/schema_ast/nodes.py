"""
Descriptor node definitions.

These nodes represent the parsed descriptor documents before any parameter
resolution or language-specific processing. A type descriptor is a tagged
union: the fields shared by every kind live on TypeDescriptor, the
kind-specific fields live in its payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ElementKind(str, Enum):
    """Kind token of a body descriptor node."""

    OBJECT = "struct"
    ENUM = "enum"
    SCALAR = "simple"
    ARRAY = "array"
    SCALAR_ARRAY = "simple_array"
    PARAMETER = "parameter"

    @property
    def is_list(self) -> bool:
        return self in (ElementKind.ARRAY, ElementKind.SCALAR_ARRAY)


class Multiplicity(Enum):
    """Shape of the children of a descriptor node."""

    NONE = "none"
    EXACTLY_ONE = "exactly_one"
    ONE_OF = "one_of"
    ANY_OF = "any_of"


@dataclass(frozen=True)
class ChildSlot:
    """A child entry of a one_of/any_of list (or a container value)."""

    required: bool
    element: TypeDescriptor


@dataclass(frozen=True)
class ObjectPayload:
    multiplicity: Multiplicity = Multiplicity.NONE
    container_key: str | None = None
    value: ChildSlot | None = None
    children: tuple[ChildSlot, ...] = ()


@dataclass(frozen=True)
class EnumPayload:
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDescriptor:
    """One node of a request body schema."""

    key: str
    kind: ElementKind
    type_name: str | None = None
    parent_type: str | None = None
    payload: ObjectPayload | EnumPayload | None = None

    # Raw fragments, resolved lazily by the body interpreter
    local_parameters: Mapping[str, Any] = field(default_factory=dict)

    source_path: str = ""

    @property
    def multiplicity(self) -> Multiplicity:
        if isinstance(self.payload, ObjectPayload):
            return self.payload.multiplicity
        if self.kind == ElementKind.OBJECT:
            return Multiplicity.NONE
        return Multiplicity.EXACTLY_ONE

    @property
    def children(self) -> tuple[ChildSlot, ...]:
        if isinstance(self.payload, ObjectPayload):
            return self.payload.children
        return ()

    @property
    def container_key(self) -> str | None:
        if isinstance(self.payload, ObjectPayload):
            return self.payload.container_key
        return None

    @property
    def value(self) -> ChildSlot | None:
        if isinstance(self.payload, ObjectPayload):
            return self.payload.value
        return None

    @property
    def options(self) -> tuple[str, ...]:
        if isinstance(self.payload, EnumPayload):
            return self.payload.options
        return ()


class ParamType(str, Enum):
    """Declared type of a URL placeholder."""

    SCALAR = "scalar"
    LIST = "list"


class BodyRequirement(Enum):
    ABSENT = "absent"
    OPTIONAL = "optional"
    REQUIRED = "required"


@dataclass(frozen=True)
class UrlParam:
    name: str
    type: ParamType
    description: str


@dataclass(frozen=True)
class UrlTemplate:
    """One URL path of an endpoint, split into segments."""

    path: str
    segments: tuple[str, ...]
    params: Mapping[str, UrlParam] = field(default_factory=dict)


@dataclass(frozen=True)
class EndpointDescriptor:
    """One REST endpoint, possibly reachable through several URL templates."""

    name: str
    documentation: str
    url_templates: tuple[UrlTemplate, ...]
    allowed_methods: tuple[str, ...]
    body: BodyRequirement = BodyRequirement.ABSENT
    source_path: str = ""

    @property
    def default_method(self) -> str:
        return self.allowed_methods[0]
