"""
Analyzer module.

Contains reference resolution, type resolution, declaration registry,
enum and function synthesis, and IR building.
"""

from __future__ import annotations

from .analyzer import ContractAnalyzer
from .context import CompilationContext
from .enum_synthesizer import EnumSynthesizer
from .function_synthesizer import FunctionSynthesizer
from .ir_nodes import (
    ContractIR,
    DeclKind,
    EnumMember,
    FieldDef,
    FunctionDef,
    ParameterDef,
    TypeDecl,
    TypeKind,
    TypeRef,
)
from .registry import Position, TypeRegistry
from .type_resolver import Strategy, TypeResolver

__all__ = [
    "ContractAnalyzer",
    "CompilationContext",
    "ContractIR",
    "DeclKind",
    "EnumMember",
    "EnumSynthesizer",
    "FieldDef",
    "FunctionDef",
    "FunctionSynthesizer",
    "ParameterDef",
    "Position",
    "Strategy",
    "TypeDecl",
    "TypeKind",
    "TypeRef",
    "TypeRegistry",
    "TypeResolver",
]
