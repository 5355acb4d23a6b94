"""Tests for the descriptor parsers and document accessors."""

import pytest

from rest_spec_to_code.pipeline import SchemaValidationError
from rest_spec_to_code.pipeline.schema_ast import (
    BodyRequirement,
    BodySchemaParser,
    ElementKind,
    EndpointParser,
    Multiplicity,
    ParamType,
)
from rest_spec_to_code.pipeline.schema_ast.document import optional_bool, require_str, require_str_list
from rest_spec_to_code.pipeline.schema_ast.parser import placeholder_name


class TestDocumentAccessors:
    def test_require_str_missing(self):
        with pytest.raises(SchemaValidationError, match=r"#/cat: missing required field 'key'"):
            require_str({}, "key", "#/cat")

    def test_require_str_wrong_type(self):
        with pytest.raises(SchemaValidationError, match="must be a string, got number"):
            require_str({"key": 3}, "key", "#/cat")

    def test_optional_bool_default(self):
        assert optional_bool({}, "required", "#") is False
        assert optional_bool({"required": True}, "required", "#") is True

    def test_require_str_list_rejects_non_strings(self):
        with pytest.raises(SchemaValidationError):
            require_str_list({"methods": ["GET", 1]}, "methods", "#/ping")


class TestBodySchemaParser:
    def test_any_of_object(self):
        parser = BodySchemaParser()
        (cat,) = parser.parse(
            {
                "cat": {
                    "key": "cat",
                    "type": "struct",
                    "typeName": "Cat",
                    "parent": "QueryItem",
                    "any_of": [
                        {"key": "name", "type": "simple", "typeName": "String", "required": True},
                        {"key": "age", "type": "simple", "typeName": "Int"},
                    ],
                }
            }
        )
        assert cat.kind == ElementKind.OBJECT
        assert cat.type_name == "Cat"
        assert cat.parent_type == "QueryItem"
        assert cat.multiplicity == Multiplicity.ANY_OF
        assert [(slot.element.key, slot.required) for slot in cat.children] == [("name", True), ("age", False)]
        assert cat.source_path == "#/cat"

    def test_leaves_have_exactly_one_multiplicity(self):
        node = BodySchemaParser().parse_element({"key": "tags", "type": "simple_array", "typeName": "String"}, "#")
        assert node.multiplicity == Multiplicity.EXACTLY_ONE
        assert node.kind.is_list

    def test_object_without_children(self):
        node = BodySchemaParser().parse_element({"key": "match_none", "type": "struct", "typeName": "MatchNone"}, "#")
        assert node.multiplicity == Multiplicity.NONE
        assert node.children == ()

    def test_child_container_replaces_children(self):
        node = BodySchemaParser().parse_element(
            {
                "key": "match",
                "type": "struct",
                "typeName": "MatchQuery",
                "any_of": [{"key": "ignored", "type": "simple", "typeName": "String"}],
                "childContainer": {
                    "key": "field",
                    "one_of": [{"key": "query", "type": "simple", "typeName": "String"}],
                },
            },
            "#/match",
        )
        assert node.container_key == "field"
        assert node.multiplicity == Multiplicity.ONE_OF
        assert [slot.element.key for slot in node.children] == ["query"]

    def test_container_value(self):
        node = BodySchemaParser().parse_element(
            {
                "key": "term",
                "type": "struct",
                "typeName": "TermQuery",
                "childContainer": {"key": "field", "value": {"key": "value", "type": "simple", "typeName": "String"}},
            },
            "#/term",
        )
        assert node.container_key == "field"
        assert node.value.element.key == "value"
        assert node.children == ()

    def test_value_without_container_key(self):
        with pytest.raises(SchemaValidationError, match="requires a container key"):
            BodySchemaParser().parse_element(
                {
                    "key": "term",
                    "type": "struct",
                    "typeName": "TermQuery",
                    "childContainer": {"value": {"key": "value", "type": "simple", "typeName": "String"}},
                },
                "#/term",
            )

    def test_one_of_and_any_of_together(self):
        with pytest.raises(SchemaValidationError, match="mutually exclusive"):
            BodySchemaParser().parse_element(
                {"key": "q", "type": "struct", "typeName": "Q", "one_of": [], "any_of": []},
                "#/q",
            )

    def test_unknown_kind_token(self):
        with pytest.raises(SchemaValidationError, match="unknown type 'object'"):
            BodySchemaParser().parse_element({"key": "q", "type": "object", "typeName": "Q"}, "#/q")

    def test_missing_type_name(self):
        with pytest.raises(SchemaValidationError, match="'typeName'"):
            BodySchemaParser().parse_element({"key": "q", "type": "struct"}, "#/q")

    def test_error_path_points_at_child(self):
        with pytest.raises(SchemaValidationError, match=r"#/q\.any_of\[1\]"):
            BodySchemaParser().parse_element(
                {
                    "key": "q",
                    "type": "struct",
                    "typeName": "Q",
                    "any_of": [
                        {"key": "a", "type": "simple", "typeName": "String"},
                        {"type": "simple", "typeName": "String"},
                    ],
                },
                "#/q",
            )

    def test_parameter_reference_is_kept_unresolved(self):
        node = BodySchemaParser().parse_element({"key": "operator", "type": "parameter"}, "#")
        assert node.kind == ElementKind.PARAMETER
        assert node.key == "operator"
        assert node.type_name is None

    def test_local_parameters_are_kept_raw(self):
        fragment = {"type": "enum", "typeName": "Operator", "options": ["and", "or"]}
        node = BodySchemaParser().parse_element(
            {"key": "match", "type": "struct", "typeName": "MatchQuery", "parameters": {"operator": fragment}},
            "#",
        )
        assert node.local_parameters == {"operator": fragment}

    def test_enum_options(self):
        node = BodySchemaParser().parse_element({"key": "op", "type": "enum", "typeName": "Operator", "options": ["and", "or"]}, "#")
        assert node.options == ("and", "or")

    @pytest.mark.parametrize("extra,message", [({}, "missing required field 'options'"), ({"options": []}, "must not be empty")])
    def test_enum_needs_options(self, extra, message):
        with pytest.raises(SchemaValidationError, match=message):
            BodySchemaParser().parse_element({"key": "op", "type": "enum", "typeName": "Operator", **extra}, "#/op")

    def test_key_override(self):
        node = BodySchemaParser().parse_element({"type": "simple", "typeName": "String"}, "#", key="analyzer")
        assert node.key == "analyzer"


class TestEndpointParser:
    def test_parse_endpoint(self):
        (endpoint,) = EndpointParser().parse(
            {
                "search": {
                    "documentation": "Returns results matching a query.",
                    "methods": ["GET", "POST"],
                    "url": {
                        "paths": ["/_search", "/{index}/_search"],
                        "parts": {"index": {"type": "list", "description": "The indices"}},
                    },
                    "body": {},
                }
            }
        )
        assert endpoint.name == "search"
        assert endpoint.default_method == "GET"
        assert endpoint.body == BodyRequirement.OPTIONAL
        first, second = endpoint.url_templates
        assert first.segments == ("", "_search")
        assert first.params == {}
        assert second.segments == ("", "{index}", "_search")
        assert second.params["index"].type == ParamType.LIST

    def test_body_requirement(self):
        parser = EndpointParser()
        base = {"documentation": "", "methods": ["POST"], "url": {"paths": ["/_bulk"]}}
        assert parser.parse_endpoint("bulk", base, "#").body == BodyRequirement.ABSENT
        assert parser.parse_endpoint("bulk", {**base, "body": None}, "#").body == BodyRequirement.ABSENT
        assert parser.parse_endpoint("bulk", {**base, "body": {"required": True}}, "#").body == BodyRequirement.REQUIRED

    def test_scalar_part_types(self):
        parser = EndpointParser()
        for token in ["string", "enum", "number", "int", "long", "boolean", "time"]:
            endpoint = parser.parse_endpoint(
                "get",
                {
                    "documentation": "",
                    "methods": ["GET"],
                    "url": {"paths": ["/{id}"], "parts": {"id": {"type": token, "description": "The id"}}},
                },
                "#/get",
            )
            assert endpoint.url_templates[0].params["id"].type == ParamType.SCALAR

    def test_unknown_part_type(self):
        with pytest.raises(SchemaValidationError, match="unknown part type 'date'"):
            EndpointParser().parse_endpoint(
                "get",
                {
                    "documentation": "",
                    "methods": ["GET"],
                    "url": {"paths": ["/{id}"], "parts": {"id": {"type": "date", "description": "The id"}}},
                },
                "#/get",
            )

    @pytest.mark.parametrize("name", ["method", "body", "Body"])
    def test_part_named_like_a_builder_parameter(self, name):
        with pytest.raises(SchemaValidationError, match=f"part name '{name}' clashes"):
            EndpointParser().parse_endpoint(
                "get",
                {
                    "documentation": "",
                    "methods": ["GET"],
                    "url": {"paths": [f"/{{{name}}}"], "parts": {name: {"type": "string", "description": "A part"}}},
                },
                "#/get",
            )

    def test_empty_methods(self):
        with pytest.raises(SchemaValidationError, match="must not be empty"):
            EndpointParser().parse_endpoint("ping", {"documentation": "", "methods": [], "url": {"paths": ["/"]}}, "#/ping")

    def test_missing_documentation(self):
        with pytest.raises(SchemaValidationError, match="'documentation'"):
            EndpointParser().parse_endpoint("ping", {"methods": ["HEAD"], "url": {"paths": ["/"]}}, "#/ping")


@pytest.mark.parametrize(
    "segment,expected",
    [("{index}", "index"), ("_search", None), ("{index}_suffix", None), ("", None), ("{}", None)],
)
def test_placeholder_name(segment, expected):
    assert placeholder_name(segment) == expected
