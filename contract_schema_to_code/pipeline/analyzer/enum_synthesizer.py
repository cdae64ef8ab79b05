"""
Enum synthesizer.

Turns a oneOf whose branches are all string literals into one enumeration
declaration.
"""

from __future__ import annotations

from ...utils import make_unique, to_valid_property_name
from ..schema_ast.nodes import SchemaNode
from .context import CompilationContext
from .ir_nodes import DeclKind, EnumMember, TypeDecl, TypeRef
from .registry import Position


class EnumSynthesizer:
    """Builds enumeration declarations, deduplicated by node identity."""

    def __init__(self, context: CompilationContext):
        self.context = context

    def is_enumeration(self, node: SchemaNode) -> bool:
        """Whether a node is a oneOf of string literal branches only."""
        return bool(node.one_of) and all(self.context.node(i).is_string_enumeration for i in node.one_of)

    def get_or_generate(self, node: SchemaNode, position: Position, name_hint: str | None = None) -> TypeRef:
        """
        Return a reference to the enumeration declared for a node.

        Two occurrences of the same node share one declaration; two different
        nodes with the same literals do not.
        """
        registry = self.context.registry
        existing = registry.lookup(node.index)
        if existing is not None:
            return existing.type_ref()

        decl = registry.get_or_create(
            node.index,
            lambda: TypeDecl(
                name=self.context.choose_name(node, position, name_hint),
                kind=DeclKind.ENUMERATION,
                description=node.description,
            ),
        )

        taken: set[str] = set()
        for branch_index in node.one_of:
            branch = self.context.node(branch_index)
            for value in branch.literal_values:
                decl.members.append(
                    EnumMember(
                        name=make_unique(to_valid_property_name(value), taken),
                        value=value,
                        description=branch.description,
                    )
                )

        return decl.type_ref()
