"""
Base class for AST-based backends: build a syntax tree, then print it.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from ..analyzer.ir_nodes import ContractIR
from ..emitter import Emitter


class AstBackend(Emitter):
    """Emitter that goes through a language AST."""

    def generate(self, ir: ContractIR) -> str:
        return self.serialize(self.build(ir))

    @abstractmethod
    def build(self, ir: ContractIR) -> Any:
        """Map the IR onto the root node of the language AST."""

    @abstractmethod
    def serialize(self, tree: Any) -> str:
        """Print an AST built by `build`."""
