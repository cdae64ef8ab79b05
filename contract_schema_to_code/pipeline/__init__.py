"""
Pipeline - contract schema to client code generator.

This module provides a multi-phase architecture for generating contract
clients from contract schemas:

1. Phase 1 (Parser): Parse the query and response schemas into one schema graph
2. Phase 2 (Analyzer): Resolve references, synthesize declarations and query functions into IR
3. Phase 3 (Backend): Generate a language-native AST (C#) or render templates (Python) from IR
4. Phase 4 (Serializer): Convert the AST to source code
"""

from __future__ import annotations

from .config import CodeGeneratorConfig
from .contract_schema import ContractSchema
from .generator import LANGUAGES, ContractGenerator, generate

__all__ = [
    "ContractGenerator",
    "ContractSchema",
    "CodeGeneratorConfig",
    "LANGUAGES",
    "generate",
]
