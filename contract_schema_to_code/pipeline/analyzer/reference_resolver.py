"""
Reference resolver for $ref resolution.

Resolves $ref pointers to the index of the node they designate in the
schema graph.
"""

from __future__ import annotations

from urllib.parse import unquote

from ...errors import UnresolvedReference, UnsupportedSchemaConstruct
from ..schema_ast.nodes import SchemaGraph, SchemaNode


class ReferenceResolver:
    """Resolves local $ref pointers within one document."""

    def __init__(self, graph: SchemaGraph, document: str):
        """
        Initialize the resolver.

        Args:
            graph: The schema graph holding the parsed document
            document: Name of the document the references belong to
        """
        self.graph = graph
        self.document = document

    def resolve(self, node: SchemaNode) -> int:
        """
        Resolve a node's $ref to the target node index.

        Args:
            node: A node carrying a ref_path

        Returns:
            Index of the referenced node

        Raises:
            UnsupportedSchemaConstruct: For references to other documents
            UnresolvedReference: If the pointer designates no node
        """
        ref_path = node.ref_path or ""

        # External $ref (e.g. "other.json#/definitions/X")
        if not ref_path.startswith("#"):
            raise UnsupportedSchemaConstruct(f"External reference '{ref_path}' is not supported", node.source_path)

        # "#/definitions/X" is stored as "<document>#/definitions/X"
        key = f"{self.document}{unquote(ref_path)}"
        target = self.graph.paths.get(key)
        if target is None:
            raise UnresolvedReference(ref_path, node.source_path)
        return target

    def resolve_all(self) -> None:
        """Resolve the $ref of every node belonging to the document."""
        prefix = f"{self.document}#"
        for node in self.graph.nodes:
            if node.has_reference and node.ref is None and node.source_path.startswith(prefix):
                node.ref = self.resolve(node)
