"""
Schema graph node definitions.

A parsed contract schema is held in a single arena of nodes addressed by
stable integer indices. A node's identity is its index: two properties that
reference the same definition point at the same index, which is what the
type registry keys on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Sentinel for "no const keyword present" (None is a valid const value)
NO_CONST = object()


@dataclass
class SchemaNode:
    """One node of a JSON Schema document."""

    # Position in the arena
    index: int = -1

    # Original source location in schema (for error messages)
    source_path: str = ""

    title: str | None = None
    description: str | None = None

    # Declared JSON types, always in list form ("type": "string" -> ["string"])
    types: list[str] = field(default_factory=list)

    # Object shape: property name -> node index, in declaration order
    properties: dict[str, int] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    # Array item node (None if absent); tuple-style "items" lists are kept raw
    items: int | None = None
    tuple_items: bool = False

    # Combinators
    one_of: list[int] = field(default_factory=list)
    any_of: list[int] = field(default_factory=list)
    all_of: list[int] = field(default_factory=list)

    # $ref, resolved to the target node index after parsing
    ref_path: str | None = None
    ref: int | None = None

    # Literal constraints
    enum_values: list[Any] = field(default_factory=list)
    const_value: Any = NO_CONST

    # Key of this node in its enclosing definitions / $defs map
    definition_name: str | None = None

    @property
    def has_reference(self) -> bool:
        return self.ref_path is not None

    @property
    def has_const(self) -> bool:
        return self.const_value is not NO_CONST

    @property
    def is_null_type(self) -> bool:
        """Whether this node only admits null."""
        return self.types == ["null"]

    @property
    def literal_values(self) -> list[Any]:
        """The literal values this node is restricted to (enum or const)."""
        if self.has_const:
            return [self.const_value]
        return list(self.enum_values)

    @property
    def is_string_enumeration(self) -> bool:
        """Whether this node is a closed set of string literals and nothing else."""
        values = self.literal_values
        return (
            bool(values)
            and all(isinstance(v, str) for v in values)
            and not self.properties
            and not (self.one_of or self.any_of or self.all_of)
            and not self.has_reference
        )


@dataclass
class SchemaGraph:
    """Arena of schema nodes shared by every document of one compilation."""

    nodes: list[SchemaNode] = field(default_factory=list)

    # Document name -> root node index
    roots: dict[str, int] = field(default_factory=dict)

    # "document#/json/pointer" -> node index
    paths: dict[str, int] = field(default_factory=dict)

    def add(self, node: SchemaNode) -> int:
        node.index = len(self.nodes)
        self.nodes.append(node)
        self.paths[node.source_path] = node.index
        return node.index

    def node(self, index: int) -> SchemaNode:
        return self.nodes[index]

    def root(self, document: str) -> SchemaNode:
        return self.nodes[self.roots[document]]

    def __len__(self) -> int:
        return len(self.nodes)
