"""
Python code generation backend.

Generates one module per definition: dataclasses with an ``as_json``
serializer, ``Enum`` subclasses, and modules of request builder functions.
"""

from __future__ import annotations

from typing import Any

from ...utils import endpoint_base_name, python_constant_name, python_identifier
from ..analyzer.ir_nodes import BodyStyle, FieldDef, MethodDef, MethodGroupDef, ParamDef, ParamKind, TypeDef
from ..schema_ast.nodes import ElementKind
from .base import CodeBackend


def _string_literal(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _docstring_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    TYPE_MAP = {
        "String": "str",
        "Int": "int",
        "Integer": "int",
        "Long": "int",
        "Float": "float",
        "Double": "float",
        "Bool": "bool",
        "Boolean": "bool",
        "Any": "Any",
        "str": "str",
        "int": "int",
        "float": "float",
        "bool": "bool",
        "dict": "dict[str, Any]",
    }

    def identifier(self, key: str) -> str:
        return python_identifier(key)

    def case_name(self, option: str) -> str:
        return python_constant_name(option)

    def method_group_name(self, endpoint_name: str) -> str:
        return python_identifier(endpoint_base_name(endpoint_name))

    def translate_type(self, type_name: str, is_list: bool = False, optional: bool = False) -> str:
        """Translate a declared type name to a Python annotation."""
        result = self.TYPE_MAP.get(type_name, type_name)
        if is_list:
            result = f"list[{result}]"
        if optional:
            result = f"{result} | None"
        return result

    def serialize_expression(self, field: FieldDef, source: str) -> str:
        if field.kind == ElementKind.OBJECT:
            return f"{source}.as_json()"
        if field.kind == ElementKind.ENUM:
            return f"{source}.value"
        if field.kind == ElementKind.ARRAY:
            return f"[item.as_json() for item in {source}]"
        # Scalars and scalar arrays pass through
        return source

    def _dynamic_map(self, key_field: str, value: str) -> str:
        return f"{{{key_field}: {value}}}"

    def _external_types(self) -> set[str]:
        return {self.config.receiver_type, self.config.body_type, self.config.polymorphic_type}

    def _import_lines(self, names: set[str]) -> list[str]:
        """Import statements for referenced support and generated types."""
        external = self._external_types()
        runtime = sorted(name for name in names if name in external)
        siblings = sorted(name for name in names if name not in external)

        lines = []
        if runtime:
            lines.append(f"from {self.config.runtime_module} import {', '.join(runtime)}")
        # Each generated definition lives in its own module
        lines.extend(f"from .{name} import {name}" for name in siblings)
        return lines

    def _referenced_name(self, type_name: str, own_name: str) -> str | None:
        """Return type_name if it needs an import in the module of own_name."""
        if type_name in self.TYPE_MAP or type_name == own_name:
            return None
        return type_name

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        """
        Prepare the template context for a dataclass.

        Args:
            type_def: The type definition

        Returns:
            Dictionary of template variables
        """
        field_lines = []
        annotation_names: set[str] = set()
        for field in type_def.constructor_fields:
            optional = not field.is_required
            annotation = self.translate_type(field.type_name, field.is_list, optional)
            default = " = None" if optional else ""
            field_lines.append(f"{self.identifier(field.key)}: {annotation}{default}")
            referenced = self._referenced_name(field.type_name, type_def.name)
            if referenced:
                annotation_names.add(referenced)

        base_names: set[str] = set()
        extends = None
        if type_def.parent_type:
            extends = self.TYPE_MAP.get(type_def.parent_type, type_def.parent_type)
            referenced = self._referenced_name(type_def.parent_type, type_def.name)
            if referenced:
                base_names.add(referenced)
        annotation_names -= base_names

        body_lines = []
        entries = self._map_entries(type_def)
        if entries:
            body_lines.append("inner: dict[str, Any] = {}")
            for field in entries:
                attribute = f"self.{self.identifier(field.key)}"
                target = f"inner[{_string_literal(field.key)}]"
                if field.is_required:
                    body_lines.append(f"{target} = {self.serialize_expression(field, attribute)}")
                else:
                    # Absent optional fields are omitted, never written as null
                    body_lines.append(f"if {attribute} is not None:")
                    body_lines.append(f"    {target} = {self.serialize_expression(field, attribute)}")
        body_lines.append(f"return {{{_string_literal(type_def.key)}: {self._serialized_value(type_def, 'inner', '{}')}}}")

        typing_names = ["TYPE_CHECKING", "Any"] if annotation_names else ["Any"]
        import_lines = ["from dataclasses import dataclass", f"from typing import {', '.join(typing_names)}"]
        base_imports = self._import_lines(base_names)
        if base_imports:
            import_lines.append("")
            import_lines.extend(base_imports)

        return {
            "generation_comment": self._format_generation_comment(),
            "import_lines": import_lines,
            "type_checking_imports": self._import_lines(annotation_names),
            "class_header": f"{type_def.name}({extends})" if extends else type_def.name,
            "field_lines": field_lines,
            "body_lines": body_lines,
        }

    def _prepare_enum_context(self, type_def: TypeDef) -> dict[str, Any]:
        base = self.TYPE_MAP.get(type_def.parent_type, type_def.parent_type) if type_def.parent_type else "str"
        import_lines = ["from enum import Enum"]
        referenced = self._referenced_name(type_def.parent_type, type_def.name) if type_def.parent_type else None
        if referenced:
            import_lines.append("")
            import_lines.extend(self._import_lines({referenced}))

        names = self._unique_names([self.case_name(case.name) for case in type_def.cases])
        return {
            "generation_comment": self._format_generation_comment(),
            "import_lines": import_lines,
            "class_header": f"{type_def.name}({base}, Enum)",
            "cases": [{"name": name, "value": _string_literal(case.value)} for name, case in zip(names, type_def.cases)],
        }

    def _prepare_method_group_context(self, group: MethodGroupDef) -> dict[str, Any]:
        """
        Prepare the template context for a module of request builders.

        Python has no overloading, so every URL template and body variant
        gets its own function name derived from its placeholders.
        """
        base_name = self.method_group_name(group.name)
        names = self._unique_names([self._function_name(base_name, method) for method in group.methods])
        methods = [self._prepare_method_context(name, method, group.receiver) for name, method in zip(names, group.methods)]

        names_needed = {group.receiver}
        if any(method.body_style == BodyStyle.TYPED for method in group.methods):
            names_needed.add(self.config.body_type)
        import_lines = []
        if any(method.body_style == BodyStyle.GENERIC for method in group.methods):
            import_lines.extend(["from typing import Any", ""])
        import_lines.extend(self._import_lines(names_needed))

        return {
            "generation_comment": self._format_generation_comment(),
            "import_lines": import_lines,
            "receiver": group.receiver,
            "methods": methods,
        }

    def _function_name(self, base_name: str, method: MethodDef) -> str:
        name = base_name
        placeholders = [self.identifier(param.name) for param in method.placeholder_params]
        if placeholders:
            name += "_by_" + "_and_".join(placeholders)
        if method.body_style == BodyStyle.GENERIC:
            name += "_raw"
        return name

    def _prepare_method_context(self, name: str, method: MethodDef, receiver: str) -> dict[str, Any]:
        parameters = []
        for param in method.params:
            if param.kind == ParamKind.METHOD:
                # Everything after the placeholders is keyword-only so a
                # required body may follow the defaulted method
                parameters.append("*")
            parameters.append(self._parameter(param, method.body_style))

        allowed = ", ".join(_string_literal(m) for m in method.allowed_methods)
        if len(method.allowed_methods) == 1:
            allowed += ","

        http_method = '"POST" if method == "GET" else method' if method.promotes_get else "method"
        return {
            "signature": f"{name}({', '.join(parameters)})",
            "documentation": _docstring_text(method.documentation),
            "param_docs": [f"{self.identifier(param.name)}: {_docstring_text(param.description)}" for param in method.params],
            "allowed": f"({allowed})",
            "url": self._url_expression(method),
            "request": f"{receiver}(method={http_method}, url=url, body={self._body_expression(method)})",
        }

    def _parameter(self, param: ParamDef, body_style: BodyStyle) -> str:
        name = self.identifier(param.name)
        if param.kind == ParamKind.SCALAR:
            return f"{name}: str"
        if param.kind == ParamKind.LIST:
            return f"{name}: list[str]"
        if param.kind == ParamKind.METHOD:
            return f"{name}: str = {_string_literal(param.default)}"
        annotation = self.config.body_type if body_style == BodyStyle.TYPED else "dict[str, Any]"
        if param.is_required:
            return f"{name}: {annotation}"
        return f"{name}: {annotation} | None = None"

    def _url_expression(self, method: MethodDef) -> str:
        """Literal segments verbatim, scalars interpolated, lists comma-joined."""
        if not any(part.param for part in method.url_parts):
            return _string_literal("/".join(part.text for part in method.url_parts))

        pieces = []
        for part in method.url_parts:
            if part.param is None:
                text = part.text.replace("\\", "\\\\").replace('"', '\\"')
                pieces.append(text.replace("{", "{{").replace("}", "}}"))
            elif part.is_list:
                pieces.append(f"{{','.join({self.identifier(part.param)})}}")
            else:
                pieces.append(f"{{{self.identifier(part.param)}}}")
        return f'f"{"/".join(pieces)}"'

    def _body_expression(self, method: MethodDef) -> str:
        if method.body_style == BodyStyle.NONE:
            return "None"
        if method.body_style == BodyStyle.GENERIC:
            return "body"
        body = next(param for param in method.params if param.kind == ParamKind.BODY)
        if body.is_required:
            return "body.as_json()"
        return "body.as_json() if body is not None else None"
