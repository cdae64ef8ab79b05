"""
JSON Schema parser that builds the schema graph.

Phase 1 of the pipeline: walk each raw JSON document once and append every
schema node to the shared arena. $ref pointers are recorded as written and
resolved to node indices by the analyzer.
"""

from __future__ import annotations

import logging
from typing import Any

from .nodes import SchemaGraph, SchemaNode

logger = logging.getLogger(__name__)

DEFINITION_KEYS = ("definitions", "$defs")


def escape_pointer_segment(segment: str) -> str:
    """Escape a key for use inside a JSON pointer (RFC 6901)."""
    return segment.replace("~", "~0").replace("/", "~1")


class SchemaParser:
    """Parses JSON Schema documents into a shared SchemaGraph."""

    def __init__(self, graph: SchemaGraph | None = None):
        """
        Initialize the parser.

        Args:
            graph: Arena to append to; a fresh one is created when omitted
        """
        self.graph = graph if graph is not None else SchemaGraph()

    def parse(self, schema: dict[str, Any], document: str) -> int:
        """
        Parse one JSON Schema document into the graph.

        Args:
            schema: The JSON Schema dictionary
            document: Unique name of the document within this compilation
                (e.g. "query" or "responses/balance")

        Returns:
            Index of the document's root node
        """
        first_index = len(self.graph)
        root_index = self._parse_schema_node(schema, f"{document}#")
        self.graph.roots[document] = root_index

        logger.debug("Parsed %d schema nodes from '%s'", len(self.graph) - first_index, document)
        return root_index

    def _parse_schema_node(self, schema: Any, path: str, definition_name: str | None = None) -> int:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary (boolean schemas become empty nodes)
            path: Current path in schema, used as the node's source path
            definition_name: Key in the enclosing definitions map, if any

        Returns:
            Index of the new node
        """
        node = SchemaNode(source_path=path, definition_name=definition_name)
        index = self.graph.add(node)

        if not isinstance(schema, dict):
            return index

        node.title = schema.get("title")
        node.description = schema.get("description")

        type_value = schema.get("type")
        if isinstance(type_value, list):
            node.types = list(type_value)
        elif isinstance(type_value, str):
            node.types = [type_value]

        if "$ref" in schema:
            node.ref_path = schema["$ref"]

        if "enum" in schema:
            node.enum_values = list(schema["enum"])
        if "const" in schema:
            node.const_value = schema["const"]

        node.required = list(schema.get("required", []))
        for name, prop_schema in schema.get("properties", {}).items():
            node.properties[name] = self._parse_schema_node(prop_schema, f"{path}/properties/{escape_pointer_segment(name)}")

        items_schema = schema.get("items")
        if isinstance(items_schema, list):
            node.tuple_items = True
        elif items_schema is not None:
            node.items = self._parse_schema_node(items_schema, f"{path}/items")

        for keyword, target in (("oneOf", node.one_of), ("anyOf", node.any_of), ("allOf", node.all_of)):
            for i, variant in enumerate(schema.get(keyword, [])):
                target.append(self._parse_schema_node(variant, f"{path}/{keyword}/{i}"))

        for definitions_key in DEFINITION_KEYS:
            for name, def_schema in schema.get(definitions_key, {}).items():
                def_path = f"{path}/{definitions_key}/{escape_pointer_segment(name)}"
                self._parse_schema_node(def_schema, def_path, definition_name=name)

        return index
