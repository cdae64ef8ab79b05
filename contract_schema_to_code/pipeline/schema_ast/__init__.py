"""
Schema graph module.

Contains the arena node definitions and the parser for JSON Schema.
"""

from __future__ import annotations

from .nodes import SchemaGraph, SchemaNode
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "SchemaGraph",
    "SchemaParser",
]
