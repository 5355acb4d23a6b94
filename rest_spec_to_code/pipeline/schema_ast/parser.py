"""
Descriptor parsers that build the descriptor AST.

Phase 1 of the pipeline: turn generic JSON documents into TypeDescriptor and
EndpointDescriptor nodes. Parameter references are kept as PARAMETER nodes
and local parameter tables are kept as raw fragments; resolving them is the
body interpreter's job because it depends on the lexical scope.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..errors import SchemaValidationError
from .document import (
    expect_mapping,
    optional_bool,
    optional_mapping,
    optional_str,
    require_list,
    require_str,
    require_str_list,
)
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

_PLACEHOLDER = re.compile(r"^\{([^{}]+)\}$")


def placeholder_name(segment: str) -> str | None:
    """Return the placeholder name if the segment is exactly '{name}'."""
    match = _PLACEHOLDER.match(segment)
    return match.group(1) if match else None


class BodySchemaParser:
    """Parses request body descriptor documents into TypeDescriptor trees."""

    KIND_TOKENS = {kind.value: kind for kind in ElementKind}

    def parse(self, documents: Mapping[str, Any]) -> list[TypeDescriptor]:
        """
        Parse every top-level entry of the merged documents.

        Args:
            documents: Merged top-level namespace (name -> descriptor node)

        Returns:
            One root descriptor per top-level entry, in document order
        """
        return [self.parse_element(node, f"#/{name}") for name, node in documents.items()]

    def parse_element(self, raw: Any, path: str, key: str | None = None) -> TypeDescriptor:
        """
        Parse one descriptor node recursively.

        Args:
            raw: The raw JSON node
            path: Current path in the documents (for error messages)
            key: Overrides the node's own key (used when a parameter
                fragment is resolved under the referencing node's key)

        Returns:
            The parsed descriptor
        """
        node = expect_mapping(raw, path)
        if key is None:
            key = require_str(node, "key", path)
        kind = self._parse_kind(node, path)

        if kind == ElementKind.PARAMETER:
            return TypeDescriptor(key=key, kind=kind, source_path=path)

        local_parameters = optional_mapping(node, "parameters", path) or {}
        for name, fragment in local_parameters.items():
            expect_mapping(fragment, f"{path}.parameters.{name}")

        payload: ObjectPayload | EnumPayload | None = None
        if kind == ElementKind.OBJECT:
            payload = self._parse_object_payload(node, path)
        elif kind == ElementKind.ENUM:
            options = require_str_list(node, "options", path)
            if not options:
                raise SchemaValidationError("field 'options' must not be empty", path)
            payload = EnumPayload(options=tuple(options))

        return TypeDescriptor(
            key=key,
            kind=kind,
            type_name=require_str(node, "typeName", path),
            parent_type=optional_str(node, "parent", path),
            payload=payload,
            local_parameters=dict(local_parameters),
            source_path=path,
        )

    def _parse_kind(self, node: Mapping[str, Any], path: str) -> ElementKind:
        token = require_str(node, "type", path)
        if token not in self.KIND_TOKENS:
            raise SchemaValidationError(f"unknown type '{token}', expected one of {sorted(self.KIND_TOKENS)}", path)
        return self.KIND_TOKENS[token]

    def _parse_object_payload(self, node: Mapping[str, Any], path: str) -> ObjectPayload:
        """Parse children, container key and container value of a struct node."""
        container_key = None
        value = None
        source = node
        source_path = path

        container = optional_mapping(node, "childContainer", path)
        if container is not None:
            # The container's one_of/any_of replace the node's own
            source = container
            source_path = f"{path}.childContainer"
            container_key = optional_str(container, "key", source_path)
            raw_value = container.get("value")
            if raw_value is not None:
                if container_key is None:
                    raise SchemaValidationError("a container value requires a container key", source_path)
                value = ChildSlot(required=True, element=self.parse_element(raw_value, f"{source_path}.value"))

        if "one_of" in source and "any_of" in source:
            raise SchemaValidationError("'one_of' and 'any_of' are mutually exclusive", source_path)

        multiplicity = Multiplicity.NONE
        raw_children: list[Any] = []
        token_path = source_path
        for token, candidate in (("one_of", Multiplicity.ONE_OF), ("any_of", Multiplicity.ANY_OF)):
            if token in source:
                multiplicity = candidate
                raw_children = require_list(source, token, source_path)
                token_path = f"{source_path}.{token}"
                break

        children = tuple(self._parse_child(child, f"{token_path}[{index}]") for index, child in enumerate(raw_children))

        return ObjectPayload(
            multiplicity=multiplicity,
            container_key=container_key,
            value=value,
            children=children,
        )

    def _parse_child(self, raw: Any, path: str) -> ChildSlot:
        node = expect_mapping(raw, path)
        return ChildSlot(
            required=optional_bool(node, "required", path),
            element=self.parse_element(node, path),
        )


class EndpointParser:
    """Parses REST endpoint documents into EndpointDescriptor nodes."""

    SCALAR_TOKENS = {"string", "enum", "number", "int", "long", "boolean", "time"}

    # Names of the parameters every request builder declares after the placeholders
    BUILDER_PARAMS = {"method", "body"}

    def parse(self, documents: Mapping[str, Any]) -> list[EndpointDescriptor]:
        return [self.parse_endpoint(name, node, f"#/{name}") for name, node in documents.items()]

    def parse_endpoint(self, name: str, raw: Any, path: str) -> EndpointDescriptor:
        node = expect_mapping(raw, path)

        methods = require_str_list(node, "methods", path)
        if not methods:
            raise SchemaValidationError("field 'methods' must not be empty", path)

        url = optional_mapping(node, "url", path)
        if url is None:
            raise SchemaValidationError("missing required field 'url'", path)
        url_path = f"{path}.url"
        parts = optional_mapping(url, "parts", url_path) or {}
        params = {part: self._parse_param(part, detail, f"{url_path}.parts.{part}") for part, detail in parts.items()}
        templates = tuple(self._parse_template(template, params) for template in require_str_list(url, "paths", url_path))

        return EndpointDescriptor(
            name=name,
            documentation=require_str(node, "documentation", path),
            url_templates=templates,
            allowed_methods=tuple(methods),
            body=self._parse_body(node, path),
            source_path=path,
        )

    def _parse_param(self, name: str, raw: Any, path: str) -> UrlParam:
        detail = expect_mapping(raw, path)
        if name.lower() in self.BUILDER_PARAMS:
            raise SchemaValidationError(f"part name '{name}' clashes with the '{name.lower()}' builder parameter", path)
        token = require_str(detail, "type", path)
        if token == "list":
            param_type = ParamType.LIST
        elif token in self.SCALAR_TOKENS:
            param_type = ParamType.SCALAR
        else:
            raise SchemaValidationError(f"unknown part type '{token}'", path)
        return UrlParam(name=name, type=param_type, description=require_str(detail, "description", path))

    def _parse_template(self, path: str, params: Mapping[str, UrlParam]) -> UrlTemplate:
        """Split a path and keep the part entries referenced by its placeholders."""
        segments = tuple(path.split("/"))
        used = {}
        for segment in segments:
            name = placeholder_name(segment)
            if name is not None and name in params:
                used[name] = params[name]
        return UrlTemplate(path=path, segments=segments, params=used)

    def _parse_body(self, node: Mapping[str, Any], path: str) -> BodyRequirement:
        body = optional_mapping(node, "body", path)
        if body is None:
            return BodyRequirement.ABSENT
        if optional_bool(body, "required", f"{path}.body"):
            return BodyRequirement.REQUIRED
        return BodyRequirement.OPTIONAL
