"""
IR (Intermediate Representation) node definitions.

These nodes are the generated definitions: every parameter reference is
resolved and every shape decision is made. They are frozen, built once by the
interpreters and only read by the backends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..schema_ast.nodes import BodyRequirement, ElementKind, TypeDescriptor


class DefinitionKind(Enum):
    """Kind of a generated definition."""

    TYPE = "type"  # A value type with fields and a serializer
    ENUM = "enum"  # A raw-value enumeration
    METHOD_GROUP = "method_group"  # Request builders of one endpoint


class SerializationRule(Enum):
    """How a generated type writes itself to a generic document."""

    SINGLE_CHILD = "single_child"  # {key: child.serialize()}
    CONTAINER_MAP = "container_map"  # {key: {<container>: {field: ...}}}
    FIELD_MAP = "field_map"  # {key: {field: ...}}
    CONTAINER_VALUE = "container_value"  # {key: {<container>: <value>}}
    EMPTY = "empty"  # {key: {}}


class FieldRole(Enum):
    CONTAINER = "container"
    VALUE = "value"
    CHILD = "child"
    SLOT = "slot"


@dataclass(frozen=True)
class FieldDef:
    """A field of a generated type."""

    key: str  # JSON key, also the source of the identifier
    type_name: str
    kind: ElementKind = ElementKind.SCALAR
    is_required: bool = True
    role: FieldRole = FieldRole.CHILD

    @property
    def is_list(self) -> bool:
        return self.kind.is_list


@dataclass(frozen=True)
class EnumCaseDef:
    name: str  # Option the case name is derived from
    value: str  # Literal wire value


@dataclass(frozen=True)
class TypeDef:
    """A generated value type or enum."""

    name: str
    key: str
    kind: DefinitionKind = DefinitionKind.TYPE
    parent_type: str | None = None
    fields: tuple[FieldDef, ...] = ()
    cases: tuple[EnumCaseDef, ...] = ()
    serialization: SerializationRule = SerializationRule.EMPTY

    @property
    def constructor_fields(self) -> tuple[FieldDef, ...]:
        # Declaration order, not required-first
        return self.fields

    @property
    def container_field(self) -> FieldDef | None:
        return next((f for f in self.fields if f.role == FieldRole.CONTAINER), None)

    @property
    def value_field(self) -> FieldDef | None:
        return next((f for f in self.fields if f.role == FieldRole.VALUE), None)

    @property
    def child_fields(self) -> tuple[FieldDef, ...]:
        return tuple(f for f in self.fields if f.role == FieldRole.CHILD)


@dataclass(frozen=True)
class ElementTree:
    """Result of interpreting one descriptor node.

    Carries the resolved descriptor, the definition registered for it (object
    and enum kinds only) and the trees of its children.
    """

    descriptor: TypeDescriptor
    definition: TypeDef | None = None
    children: tuple[ElementTree, ...] = ()

    def definitions(self) -> list[TypeDef]:
        """All definitions of this tree, depth-first."""
        result = [self.definition] if self.definition is not None else []
        for child in self.children:
            result.extend(child.definitions())
        return result


class ParamKind(Enum):
    SCALAR = "scalar"
    LIST = "list"
    METHOD = "method"
    BODY = "body"


class BodyStyle(Enum):
    NONE = "none"
    TYPED = "typed"
    GENERIC = "generic"


@dataclass(frozen=True)
class ParamDef:
    name: str
    kind: ParamKind
    description: str = ""
    default: str | None = None
    is_required: bool = True


@dataclass(frozen=True)
class UrlPart:
    """A URL segment: literal text, or a placeholder parameter."""

    text: str
    param: str | None = None
    is_list: bool = False


@dataclass(frozen=True)
class MethodDef:
    """One request builder for one URL template."""

    name: str
    path: str
    params: tuple[ParamDef, ...] = ()
    url_parts: tuple[UrlPart, ...] = ()
    allowed_methods: tuple[str, ...] = ()
    body_requirement: BodyRequirement = BodyRequirement.ABSENT
    body_style: BodyStyle = BodyStyle.NONE
    documentation: str = ""

    @property
    def placeholder_params(self) -> tuple[ParamDef, ...]:
        return tuple(p for p in self.params if p.kind in (ParamKind.SCALAR, ParamKind.LIST))

    @property
    def promotes_get(self) -> bool:
        """Whether GET is sent as POST (a body may be attached)."""
        return self.body_style != BodyStyle.NONE


@dataclass(frozen=True)
class MethodGroupDef:
    """All request builders generated for one endpoint."""

    name: str
    receiver: str
    methods: tuple[MethodDef, ...] = field(default_factory=tuple)
    kind: DefinitionKind = DefinitionKind.METHOD_GROUP
