"""
Body schema interpreter.

Phase 2 of the request pipeline: walk a TypeDescriptor tree depth-first,
resolve parameter references against the lexical parameter scope and build
one TypeDef per object or enum node. Each definition is rendered by the
backend and registered as soon as it is built.
"""

from __future__ import annotations

import logging
from collections import ChainMap
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..config import CodeGeneratorConfig
from ..errors import SchemaValidationError, UnresolvedParameterError
from ..registry import AssemblyRegistry
from ..schema_ast.document import expect_mapping, require_str
from ..schema_ast.nodes import ElementKind, Multiplicity, TypeDescriptor
from ..schema_ast.parser import BodySchemaParser
from .ir_nodes import (
    DefinitionKind,
    ElementTree,
    EnumCaseDef,
    FieldDef,
    FieldRole,
    SerializationRule,
    TypeDef,
)

if TYPE_CHECKING:
    from ..backends.base import CodeBackend

logger = logging.getLogger(__name__)

ParameterScope = Mapping[str, Any]


class BodySchemaInterpreter:
    """Turns body descriptors into registered type definitions."""

    def __init__(
        self,
        registry: AssemblyRegistry,
        backend: CodeBackend,
        config: CodeGeneratorConfig | None = None,
        parser: BodySchemaParser | None = None,
    ):
        """
        Initialize the interpreter.

        Args:
            registry: Registry receiving every rendered definition
            backend: Backend used to render definitions before registration
            config: Code generation configuration
            parser: Parser used for resolved parameter fragments
        """
        self.registry = registry
        self.backend = backend
        self.config = config or CodeGeneratorConfig()
        self.parser = parser or BodySchemaParser()

    def interpret_all(self, descriptors: list[TypeDescriptor]) -> list[ElementTree]:
        """Interpret root descriptors, each with an empty parameter scope."""
        return [self.interpret(descriptor) for descriptor in descriptors]

    def interpret(self, node: TypeDescriptor, inherited_params: ParameterScope | None = None) -> ElementTree:
        """
        Interpret one descriptor node and its subtree.

        Args:
            node: The descriptor to interpret
            inherited_params: Parameter fragments visible from enclosing nodes

        Returns:
            The element tree of the resolved node

        Raises:
            UnresolvedParameterError: If a parameter reference is not in scope
            SchemaValidationError: If a descriptor is malformed
            NameConflictError: If a definition clashes with a registered one
        """
        scope = inherited_params if isinstance(inherited_params, ChainMap) else ChainMap(dict(inherited_params or {}))
        resolved = self._resolve(node, scope)

        if resolved.local_parameters:
            # Overlay, never mutate: siblings keep seeing the inherited scope
            scope = scope.new_child(dict(resolved.local_parameters))

        value_tree = self.interpret(resolved.value.element, scope) if resolved.value is not None else None
        child_trees = tuple(self.interpret(slot.element, scope) for slot in resolved.children)

        definition = self._build_definition(resolved, value_tree, child_trees)
        if definition is not None:
            self.registry.register(definition.name, self.backend.render(definition))

        subtrees = ((value_tree,) if value_tree is not None else ()) + child_trees
        return ElementTree(descriptor=resolved, definition=definition, children=subtrees)

    def _resolve(self, node: TypeDescriptor, scope: ParameterScope) -> TypeDescriptor:
        """Replace a parameter reference by the fragment it names.

        A fragment that is itself a reference is followed in the same scope;
        the resolved node always keeps the key of the original reference.
        """
        if node.kind != ElementKind.PARAMETER:
            return node

        chain: list[str] = []
        name = node.key
        while True:
            if name in chain:
                raise SchemaValidationError(f"parameter cycle {' -> '.join(chain + [name])}", node.source_path)
            if name not in scope:
                raise UnresolvedParameterError(name, node.source_path)
            chain.append(name)

            path = f"{node.source_path}<{name}>"
            fragment = expect_mapping(scope[name], path)
            if fragment.get("type") != ElementKind.PARAMETER.value:
                logger.debug("Resolved parameter %s at %s", " -> ".join(chain), node.source_path)
                return self.parser.parse_element(fragment, path, key=node.key)
            name = require_str(fragment, "key", path)

    def _build_definition(
        self,
        node: TypeDescriptor,
        value_tree: ElementTree | None,
        child_trees: tuple[ElementTree, ...],
    ) -> TypeDef | None:
        if node.kind == ElementKind.ENUM:
            return self._build_enum(node)
        if node.kind == ElementKind.OBJECT:
            return self._build_object(node, value_tree, child_trees)
        return None

    def _build_enum(self, node: TypeDescriptor) -> TypeDef:
        return TypeDef(
            name=node.type_name,
            key=node.key,
            kind=DefinitionKind.ENUM,
            parent_type=node.parent_type or self.config.default_raw_type,
            cases=tuple(EnumCaseDef(name=option, value=option) for option in node.options),
        )

    def _build_object(
        self,
        node: TypeDescriptor,
        value_tree: ElementTree | None,
        child_trees: tuple[ElementTree, ...],
    ) -> TypeDef:
        if node.multiplicity in (Multiplicity.ONE_OF, Multiplicity.EXACTLY_ONE):
            slot = FieldDef(
                key="child",
                type_name=self._slot_type(child_trees),
                kind=ElementKind.OBJECT,
                role=FieldRole.SLOT,
            )
            return TypeDef(
                name=node.type_name,
                key=node.key,
                parent_type=node.parent_type,
                fields=(slot,),
                serialization=SerializationRule.SINGLE_CHILD,
            )

        fields: list[FieldDef] = []
        if node.container_key is not None:
            fields.append(
                FieldDef(
                    key=node.container_key,
                    type_name=self.config.default_raw_type,
                    kind=ElementKind.SCALAR,
                    role=FieldRole.CONTAINER,
                )
            )
        if value_tree is not None:
            fields.append(self._field_for(value_tree.descriptor, True, FieldRole.VALUE))
        for slot, tree in zip(node.children, child_trees):
            fields.append(self._field_for(tree.descriptor, slot.required, FieldRole.CHILD))

        if child_trees:
            rule = SerializationRule.CONTAINER_MAP if node.container_key is not None else SerializationRule.FIELD_MAP
        elif value_tree is not None:
            rule = SerializationRule.CONTAINER_VALUE
        else:
            rule = SerializationRule.EMPTY

        return TypeDef(
            name=node.type_name,
            key=node.key,
            parent_type=node.parent_type,
            fields=tuple(fields),
            serialization=rule,
        )

    def _field_for(self, descriptor: TypeDescriptor, required: bool, role: FieldRole) -> FieldDef:
        return FieldDef(
            key=descriptor.key,
            type_name=descriptor.type_name,
            kind=descriptor.kind,
            is_required=required,
            role=role,
        )

    def _slot_type(self, child_trees: tuple[ElementTree, ...]) -> str:
        """Common parent of the one_of alternatives, else the configured supertype."""
        parents = {tree.descriptor.parent_type for tree in child_trees}
        if len(parents) == 1:
            (parent,) = parents
            if parent is not None:
                return parent
        return self.config.polymorphic_type
