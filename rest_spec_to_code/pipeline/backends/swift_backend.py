"""
Swift code generation backend.

Generates one file per definition: structs conforming to their declared
parent with an ``asJson()`` serializer, String-backed enums, and
``extension Request`` blocks of static request builders.
"""

from __future__ import annotations

from typing import Any

from ...utils import endpoint_base_name, swift_identifier
from ..analyzer.ir_nodes import BodyStyle, FieldDef, MethodDef, MethodGroupDef, ParamDef, ParamKind, TypeDef
from ..schema_ast.nodes import ElementKind
from .base import CodeBackend

GENERIC_BODY_TYPE = "[String : Any]"


def _string_literal(text: str) -> str:
    return f'"{_escape(text)}"'


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _doc_text(text: str) -> str:
    return text.replace("*/", "* /").replace("/*", "/ *")


class SwiftBackend(CodeBackend):
    """Swift code generation backend."""

    TEMPLATE_LANG = "swift"
    FILE_EXTENSION = "swift"

    TYPE_MAP = {
        "String": "String",
        "Int": "Int",
        "Integer": "Int",
        "Long": "Int",
        "Float": "Float",
        "Double": "Double",
        "Bool": "Bool",
        "Boolean": "Bool",
        "Any": "Any",
    }

    def identifier(self, key: str) -> str:
        return swift_identifier(key)

    def case_name(self, option: str) -> str:
        return swift_identifier(option)

    def method_group_name(self, endpoint_name: str) -> str:
        return swift_identifier(endpoint_base_name(endpoint_name))

    def translate_type(self, type_name: str, is_list: bool = False, optional: bool = False) -> str:
        result = self.TYPE_MAP.get(type_name, type_name)
        if is_list:
            result = f"[{result}]"
        if optional:
            result = f"{result}?"
        return result

    def serialize_expression(self, field: FieldDef, source: str) -> str:
        if field.kind == ElementKind.OBJECT:
            return f"{source}.asJson()"
        if field.kind == ElementKind.ENUM:
            return f"{source}.rawValue"
        if field.kind == ElementKind.ARRAY:
            return f"{source}.map {{ $0.asJson() }}"
        return source

    def _dynamic_map(self, key_field: str, value: str) -> str:
        return f"[{key_field}: {value}]"

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        """
        Prepare the template context for a struct.

        Args:
            type_def: The type definition

        Returns:
            Dictionary of template variables
        """
        field_lines = []
        init_params = []
        assignments = []
        for field in type_def.constructor_fields:
            name = self.identifier(field.key)
            field_type = self.translate_type(field.type_name, field.is_list, not field.is_required)
            field_lines.append(f"public let {name}: {field_type}")
            init_params.append(f"{name}: {field_type}" + ("" if field.is_required else " = nil"))
            assignments.append(f"self.{name} = {name}")
        init_params = [f"{param}," for param in init_params[:-1]] + init_params[-1:]

        body_lines = []
        entries = self._map_entries(type_def)
        if entries:
            body_lines.append("var json = [String: Any]()")
            for field in entries:
                name = self.identifier(field.key)
                target = f"json[{_string_literal(field.key)}]"
                if field.is_required:
                    body_lines.append(f"{target} = {self.serialize_expression(field, f'self.{name}')}")
                else:
                    body_lines.append(f"if let {name} = self.{name} {{")
                    body_lines.append(f"    {target} = {self.serialize_expression(field, name)}")
                    body_lines.append("}")
        value = self._serialized_value(type_def, "json", "[String: Any]()")
        body_lines.append(f"return [{_string_literal(type_def.key)}: {value}]")

        header = type_def.name
        if type_def.parent_type:
            header += f": {self.translate_type(type_def.parent_type)}"
        return {
            "generation_comment": self._format_generation_comment(),
            "header": header,
            "field_lines": field_lines,
            "init_params": init_params,
            "assignments": assignments,
            "body_lines": body_lines,
        }

    def _prepare_enum_context(self, type_def: TypeDef) -> dict[str, Any]:
        parent = self.translate_type(type_def.parent_type or self.config.default_raw_type)
        names = self._unique_names([self.case_name(case.name) for case in type_def.cases])
        return {
            "generation_comment": self._format_generation_comment(),
            "header": f"{type_def.name}: {parent}",
            "cases": [{"name": name, "value": _string_literal(case.value)} for name, case in zip(names, type_def.cases)],
        }

    def _prepare_method_group_context(self, group: MethodGroupDef) -> dict[str, Any]:
        """Overloads share the group's name and differ by their signatures."""
        name = self.method_group_name(group.name)
        return {
            "generation_comment": self._format_generation_comment(),
            "receiver": group.receiver,
            "methods": [self._prepare_method_context(name, method, group.receiver) for method in group.methods],
        }

    def _prepare_method_context(self, name: str, method: MethodDef, receiver: str) -> dict[str, Any]:
        parameters = [self._parameter(param, method.body_style) for param in method.params]
        doc_lines = [_doc_text(method.documentation)]
        doc_lines.extend(f"- parameter {self.identifier(param.name)}: {_doc_text(param.description)}" for param in method.params)

        http_method = "(method == .GET ? .POST : method)" if method.promotes_get else "method"
        return {
            "signature": f"{name}({', '.join(parameters)})",
            "doc_lines": doc_lines,
            "assertion": " || ".join(f"method == .{allowed}" for allowed in method.allowed_methods),
            "url": self._url_expression(method),
            "request": f"{receiver}(method: {http_method}, url: url, body: {self._body_expression(method)})",
        }

    def _parameter(self, param: ParamDef, body_style: BodyStyle) -> str:
        name = self.identifier(param.name)
        if param.kind == ParamKind.SCALAR:
            return f"{name}: String"
        if param.kind == ParamKind.LIST:
            return f"{name}: [String]"
        if param.kind == ParamKind.METHOD:
            return f"{name}: HttpMethod = .{param.default}"
        body_type = self.config.body_type if body_style == BodyStyle.TYPED else GENERIC_BODY_TYPE
        return f"{name}: {body_type}" + ("" if param.is_required else "?")

    def _url_expression(self, method: MethodDef) -> str:
        pieces = []
        for part in method.url_parts:
            if part.param is None:
                pieces.append(_escape(part.text))
            elif part.is_list:
                pieces.append(f'\\({self.identifier(part.param)}.joined(separator: ","))')
            else:
                pieces.append(f"\\({self.identifier(part.param)})")
        return f'"{"/".join(pieces)}"'

    def _body_expression(self, method: MethodDef) -> str:
        if method.body_style == BodyStyle.NONE:
            return "nil"
        if method.body_style == BodyStyle.GENERIC:
            return "body"
        body = next(param for param in method.params if param.kind == ParamKind.BODY)
        return "body.asJson()" if body.is_required else "body?.asJson()"
