"""
Type registry for generated declarations.

One registry exists per compilation. It maps schema node identity (the node
index in the schema graph) to the declaration generated for it, tracks which
names are taken, and hands out the synthetic Request{N} / Response{N} names.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from .ir_nodes import TypeDecl

logger = logging.getLogger(__name__)


class Position(str, Enum):
    """Where a schema node is used, which selects the fallback name counter."""

    REQUEST = "Request"
    RESPONSE = "Response"


class TypeRegistry:
    """Compilation-scoped store of generated declarations keyed by node index."""

    def __init__(self):
        self._by_node: dict[int, TypeDecl] = {}
        self._names: set[str] = set()
        self._counters: dict[Position, int] = {Position.REQUEST: 0, Position.RESPONSE: 0}

    def lookup(self, node_index: int) -> TypeDecl | None:
        """Return the declaration already generated for a node, if any."""
        return self._by_node.get(node_index)

    def get_or_create(self, node_index: int, factory: Callable[[], TypeDecl]) -> TypeDecl:
        """
        Return the declaration for a node, creating it on first use.

        Args:
            node_index: Identity of the originating schema node
            factory: Builds the declaration; its name must not be taken yet

        Returns:
            The (stable) declaration bound to the node

        Raises:
            ValueError: If the factory produced a name bound to another node
        """
        existing = self._by_node.get(node_index)
        if existing is not None:
            return existing

        decl = factory()
        if decl.name in self._names:
            raise ValueError(f"Declaration name '{decl.name}' is already taken")
        decl.node_index = node_index
        self._by_node[node_index] = decl
        self._names.add(decl.name)
        logger.debug("Registered %s declaration '%s' for node %d", decl.kind.value, decl.name, node_index)
        return decl

    def reserve_name(self, name: str) -> None:
        """Mark a name as unavailable for declarations (e.g. the contract class)."""
        self._names.add(name)

    def is_name_taken(self, name: str) -> bool:
        return name in self._names

    def next_fallback_name(self, position: Position) -> str:
        """Return the next free synthetic name for the given position."""
        while True:
            name = f"{position.value}{self._counters[position]}"
            self._counters[position] += 1
            if name not in self._names:
                return name

    @property
    def declarations(self) -> list[TypeDecl]:
        """All declarations in registration (first-encountered) order."""
        return list(self._by_node.values())

    def __len__(self) -> int:
        return len(self._by_node)
