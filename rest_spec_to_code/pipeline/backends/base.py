"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
A backend renders one generated definition into one self-contained source
file; the rendered text is what the assembly registry compares.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import DefinitionKind, FieldDef, MethodGroupDef, SerializationRule, TypeDef
from ..config import CodeGeneratorConfig

Definition = TypeDef | MethodGroupDef


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from declared type names to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig, generation_comment: str = ""):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
            generation_comment: Text of the header comment (without comment markers)
        """
        self.config = config
        self.generation_comment = generation_comment
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            keep_trailing_newline=True,
            lstrip_blocks=True,
            trim_blocks=True,
        )

        self.type_template = self.jinja_env.get_template(f"type.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")
        self.methods_template = self.jinja_env.get_template(f"methods.{self.FILE_EXTENSION}.jinja2")

    def render(self, definition: Definition) -> str:
        """
        Render a definition to source code.

        Args:
            definition: A type, enum or method group definition

        Returns:
            The complete content of the definition's output file
        """
        if isinstance(definition, MethodGroupDef):
            return self.methods_template.render(self._prepare_method_group_context(definition))
        if definition.kind == DefinitionKind.ENUM:
            return self.enum_template.render(self._prepare_enum_context(definition))
        return self.type_template.render(self._prepare_type_context(definition))

    def definition_name(self, definition: Definition) -> str:
        """Name under which a definition is registered and written."""
        if isinstance(definition, MethodGroupDef):
            return self.method_group_name(definition.name)
        return definition.name

    def file_name(self, name: str) -> str:
        return f"{name}.{self.FILE_EXTENSION}"

    @abstractmethod
    def identifier(self, key: str) -> str:
        """Turn a descriptor key into a field/parameter identifier."""

    @abstractmethod
    def case_name(self, option: str) -> str:
        """Turn an enum option into a case name."""

    @abstractmethod
    def method_group_name(self, endpoint_name: str) -> str:
        """Turn an endpoint name into the identifier of its method group."""

    @abstractmethod
    def translate_type(self, type_name: str, is_list: bool = False, optional: bool = False) -> str:
        """
        Translate a declared type name to a language-specific type string.

        Args:
            type_name: Declared type name from the descriptor
            is_list: Whether the field holds a list of that type
            optional: Whether the field may be absent

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def serialize_expression(self, field: FieldDef, source: str) -> str:
        """Expression converting the value held in source to a generic document."""

    @abstractmethod
    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        pass

    @abstractmethod
    def _prepare_enum_context(self, type_def: TypeDef) -> dict[str, Any]:
        pass

    @abstractmethod
    def _prepare_method_group_context(self, group: MethodGroupDef) -> dict[str, Any]:
        pass

    def _get_comment_prefix(self) -> str:
        """Get the comment prefix for the language."""
        return "#" if self.TEMPLATE_LANG == "python" else "//"

    def _format_generation_comment(self) -> str:
        if not self.config.add_generation_comment or not self.generation_comment:
            return ""
        prefix = self._get_comment_prefix()
        return "\n".join(f"{prefix} {line}" for line in self.generation_comment.splitlines())

    def _serialized_value(self, type_def: TypeDef, inner: str, empty: str) -> str:
        """
        Expression stored under the type's own key by its serializer.

        Args:
            type_def: The type being rendered
            inner: Name of the local variable holding the field map
            empty: Literal of an empty document in the target language

        Returns:
            Language-specific expression
        """
        rule = type_def.serialization
        if rule == SerializationRule.SINGLE_CHILD:
            slot = type_def.fields[0]
            return self.serialize_expression(slot, f"self.{self.identifier(slot.key)}")
        if rule == SerializationRule.FIELD_MAP:
            return inner
        if rule == SerializationRule.EMPTY:
            return empty

        container = f"self.{self.identifier(type_def.container_field.key)}"
        if rule == SerializationRule.CONTAINER_MAP:
            return self._dynamic_map(container, inner)
        value = type_def.value_field
        return self._dynamic_map(container, self.serialize_expression(value, f"self.{self.identifier(value.key)}"))

    def _map_entries(self, type_def: TypeDef) -> list[FieldDef]:
        """Fields written into the inner field map, in declaration order."""
        if type_def.serialization in (SerializationRule.FIELD_MAP, SerializationRule.CONTAINER_MAP):
            return list(type_def.child_fields)
        return []

    @abstractmethod
    def _dynamic_map(self, key_field: str, value: str) -> str:
        """Literal of a one-entry map keyed by the runtime value of a field."""

    @staticmethod
    def _unique_names(names: list[str]) -> list[str]:
        """Make names unique by appending a counter to repeated ones."""
        seen: dict[str, int] = {}
        result = []
        for name in names:
            if name in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
                while candidate in seen:
                    seen[name] += 1
                    candidate = f"{name}_{seen[name]}"
                seen[candidate] = 1
                result.append(candidate)
            else:
                seen[name] = 1
                result.append(name)
        return result
