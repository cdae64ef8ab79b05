"""
Template-based code generation backends.

Contains language-specific code generators rendered with Jinja2.
"""

from __future__ import annotations

from .base import CodeBackend
from .python_backend import PythonBackend

__all__ = [
    "CodeBackend",
    "PythonBackend",
]
