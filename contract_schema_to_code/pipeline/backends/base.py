"""
Jinja2-rendered backends.

Templates live in ``templates/<TEMPLATE_LANG>/<name>.<FILE_EXTENSION>.jinja2``.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from ..config import CodeGeneratorConfig
from ..emitter import Emitter

TEMPLATE_ROOT = Path(__file__).parent.parent.parent / "templates"


class CodeBackend(Emitter):
    """Emitter rendering its output from a set of Jinja2 templates."""

    TEMPLATE_LANG: str = ""
    FILE_EXTENSION: str = ""
    TEMPLATE_NAMES: tuple[str, ...] = ("prefix", "class", "enum", "contract")

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_ROOT / self.TEMPLATE_LANG)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["docstring"] = docstring
        self.templates = {
            name: self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2") for name in self.TEMPLATE_NAMES
        }


def docstring(text: str, indent: int = 4) -> str:
    """Quote a description as a docstring whose continuation lines sit at ``indent``."""
    text = text.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    lines = text.splitlines()
    if len(lines) == 1:
        return f'"""{lines[0]}"""'
    prefix = " " * indent
    body = "\n".join(f"{prefix}{line}".rstrip() for line in lines[1:])
    return f'"""{lines[0]}\n{body}\n{prefix}"""'
