"""
Tests for the schema graph: parsing documents into the shared arena and
resolving local $ref pointers.
"""

from __future__ import annotations

import pytest

from contract_schema_to_code.errors import UnresolvedReference, UnsupportedSchemaConstruct
from contract_schema_to_code.pipeline.analyzer import CompilationContext
from contract_schema_to_code.pipeline.schema_ast import SchemaGraph, SchemaParser
from contract_schema_to_code.pipeline.schema_ast.parser import escape_pointer_segment

RESPONSE_SCHEMA = {
    "title": "AllowanceResponse",
    "type": "object",
    "required": ["allowance"],
    "properties": {
        "allowance": {"$ref": "#/definitions/Uint128"},
        "spender": {"description": "Who may spend", "type": ["string", "null"]},
    },
    "definitions": {
        "Uint128": {"description": "A thin wrapper around u128", "type": "string"},
    },
}


class TestSchemaParser:
    def test_root_node(self):
        parser = SchemaParser()
        root = parser.graph.node(parser.parse(RESPONSE_SCHEMA, "responses/allowance"))

        assert root.source_path == "responses/allowance#"
        assert root.title == "AllowanceResponse"
        assert root.types == ["object"]
        assert root.required == ["allowance"]
        assert list(root.properties) == ["allowance", "spender"]
        assert parser.graph.roots["responses/allowance"] == root.index

    def test_type_list_and_description(self):
        parser = SchemaParser()
        root = parser.graph.node(parser.parse(RESPONSE_SCHEMA, "doc"))
        spender = parser.graph.node(root.properties["spender"])

        assert spender.types == ["string", "null"]
        assert spender.description == "Who may spend"
        assert spender.source_path == "doc#/properties/spender"

    def test_definitions_are_registered_by_path(self):
        parser = SchemaParser()
        parser.parse(RESPONSE_SCHEMA, "doc")

        index = parser.graph.paths["doc#/definitions/Uint128"]
        definition = parser.graph.node(index)
        assert definition.definition_name == "Uint128"
        assert definition.types == ["string"]

    def test_combinators_items_and_literals(self):
        schema = {
            "oneOf": [
                {"type": "string", "enum": ["embedded"]},
                {"const": "linked"},
                {"type": "array", "items": {"type": "integer"}},
                {"type": "array", "items": [{"type": "integer"}, {"type": "string"}]},
            ]
        }
        parser = SchemaParser()
        root = parser.graph.node(parser.parse(schema, "doc"))
        embedded, linked, array, pair = (parser.graph.node(i) for i in root.one_of)

        assert embedded.literal_values == ["embedded"]
        assert embedded.is_string_enumeration
        assert linked.has_const and linked.literal_values == ["linked"]
        assert linked.is_string_enumeration
        assert parser.graph.node(array.items).types == ["integer"]
        assert pair.tuple_items and pair.items is None
        assert not root.is_string_enumeration

    def test_null_const_is_a_literal(self):
        parser = SchemaParser()
        node = parser.graph.node(parser.parse({"const": None}, "doc"))
        assert node.has_const
        assert node.literal_values == [None]
        assert not node.is_string_enumeration

    def test_documents_share_one_arena(self):
        graph = SchemaGraph()
        parser = SchemaParser(graph)
        first = parser.parse({"type": "string"}, "query")
        second = parser.parse({"type": "string"}, "responses/balance")

        assert first != second
        assert set(graph.roots) == {"query", "responses/balance"}
        assert graph.root("responses/balance").index == second

    def test_non_dict_schema_becomes_empty_node(self):
        parser = SchemaParser()
        node = parser.graph.node(parser.parse(True, "doc"))
        assert node.types == []
        assert not node.properties

    def test_escape_pointer_segment(self):
        assert escape_pointer_segment("a/b~c") == "a~1b~0c"


class TestReferenceResolution:
    def test_local_refs_resolve_to_definition_index(self):
        context = CompilationContext()
        root = context.node(context.load_document(RESPONSE_SCHEMA, "responses/allowance"))
        allowance = context.node(root.properties["allowance"])

        assert allowance.ref_path == "#/definitions/Uint128"
        assert allowance.ref == context.graph.paths["responses/allowance#/definitions/Uint128"]

    def test_same_pointer_in_two_documents_stays_separate(self):
        context = CompilationContext()
        first = context.node(context.load_document(RESPONSE_SCHEMA, "responses/a"))
        second = context.node(context.load_document(RESPONSE_SCHEMA, "responses/b"))

        first_ref = context.node(first.properties["allowance"]).ref
        second_ref = context.node(second.properties["allowance"]).ref
        assert first_ref != second_ref
        assert context.node(first_ref).source_path.startswith("responses/a#")
        assert context.node(second_ref).source_path.startswith("responses/b#")

    def test_root_reference(self):
        schema = {"type": "object", "properties": {"parent": {"$ref": "#"}}}
        context = CompilationContext()
        root_index = context.load_document(schema, "doc")
        parent = context.node(context.node(root_index).properties["parent"])
        assert parent.ref == root_index

    def test_unresolved_reference(self):
        schema = {"properties": {"x": {"$ref": "#/definitions/Missing"}}}
        with pytest.raises(UnresolvedReference) as exc_info:
            CompilationContext().load_document(schema, "doc")
        assert exc_info.value.ref_path == "#/definitions/Missing"
        assert "doc#/properties/x" in str(exc_info.value)

    def test_external_reference_is_unsupported(self):
        schema = {"properties": {"x": {"$ref": "other.json#/definitions/X"}}}
        with pytest.raises(UnsupportedSchemaConstruct):
            CompilationContext().load_document(schema, "doc")
