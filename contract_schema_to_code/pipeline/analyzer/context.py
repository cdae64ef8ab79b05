"""
Compilation context.

Holds everything that lives for exactly one contract compilation: the schema
graph, the type registry and the parser feeding the graph. A context is never
shared across compilations or threads.
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import to_valid_type_name
from ..schema_ast.nodes import SchemaGraph, SchemaNode
from ..schema_ast.parser import SchemaParser
from .reference_resolver import ReferenceResolver
from .registry import Position, TypeRegistry

logger = logging.getLogger(__name__)


class CompilationContext:
    """Graph + registry scoped to one `generate` call."""

    def __init__(self):
        self.graph = SchemaGraph()
        self.registry = TypeRegistry()
        self._parser = SchemaParser(self.graph)

    def load_document(self, schema: dict[str, Any], document: str) -> int:
        """
        Parse a document into the graph and resolve its references.

        Args:
            schema: Raw JSON Schema dictionary
            document: Unique document name ("query", "responses/balance"...)

        Returns:
            Index of the document's root node
        """
        root_index = self._parser.parse(schema, document)
        ReferenceResolver(self.graph, document).resolve_all()
        return root_index

    def node(self, index: int) -> SchemaNode:
        return self.graph.node(index)

    def choose_name(self, node: SchemaNode, position: Position, name_hint: str | None = None) -> str:
        """
        Pick the declaration name for a node.

        Precedence: title, definitions key, contextual hint (property name or
        operation response name), then the position's synthetic counter. A
        candidate already taken by another declaration falls back to the
        counter.
        """
        for candidate in (node.title, node.definition_name, name_hint):
            if not candidate:
                continue
            name = to_valid_type_name(candidate)
            if not self.registry.is_name_taken(name):
                return name
            logger.debug("Name '%s' for %s is taken, using a synthetic name", name, node.source_path)
            break
        return self.registry.next_fallback_name(position)
