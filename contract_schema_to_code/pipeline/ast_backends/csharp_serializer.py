"""
C# AST Serializer.

Prints C# AST nodes as source code:
- Allman braces, 4-space indentation
- XML documentation summary, then attributes, above each declaration
- Blank line between members, except between consecutive fields
- Blank line between type declarations
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from .csharp_ast_nodes import (
    CSharpConstructor,
    CSharpDeclaration,
    CSharpField,
    CSharpFile,
    CSharpMember,
    CSharpMethod,
    CSharpParameter,
    CSharpProperty,
    CSharpType,
    TypeKeyword,
)

INDENT = "    "


class CSharpSerializer:
    """Serializes a CSharpFile to source code."""

    def serialize(self, file: CSharpFile) -> str:
        lines: list[str] = []

        if file.header_comment:
            lines.append(file.header_comment)
        lines.extend(f"using {namespace};" for namespace in file.usings)
        if lines:
            lines.append("")

        if file.namespace:
            lines.extend([f"namespace {file.namespace};", ""])

        for position, declaration in enumerate(file.types):
            if position:
                lines.append("")
            lines.extend(self._type(declaration))

        return "\n".join(lines) + "\n"

    def _header(self, declaration: CSharpDeclaration, indent: str) -> list[str]:
        """Doc summary and attribute lines of a declaration."""
        lines = self._summary(declaration.summary, indent)
        lines.extend(f"{indent}{attribute.to_string()}" for attribute in declaration.attributes)
        return lines

    @staticmethod
    def _summary(summary: str | None, indent: str) -> list[str]:
        if not summary:
            return []
        text = [f"{indent}/// {escape(line.rstrip())}".rstrip() for line in summary.strip().splitlines()]
        return [f"{indent}/// <summary>", *text, f"{indent}/// </summary>"]

    @staticmethod
    def _modifiers(declaration: CSharpDeclaration) -> str:
        """Access and modifiers, each followed by a space."""
        words = [declaration.access.value] if declaration.access else []
        words.extend(modifier.value for modifier in declaration.modifiers)
        return "".join(f"{word} " for word in words)

    @staticmethod
    def _parameters(parameters: list[CSharpParameter]) -> str:
        return ", ".join(
            f"{p.type_name} {p.name}" + (f" = {p.default_value}" if p.default_value is not None else "") for p in parameters
        )

    @staticmethod
    def _block(head: str, body: list[str], indent: str) -> list[str]:
        return [head, f"{indent}{{", *(f"{indent}{INDENT}{line}" for line in body), f"{indent}}}"]

    def _type(self, declaration: CSharpType, indent: str = "") -> list[str]:
        head = f"{indent}{self._modifiers(declaration)}{declaration.keyword.value} {declaration.name}"
        if declaration.base_types:
            head += f" : {', '.join(declaration.base_types)}"

        lines = self._header(declaration, indent)
        lines.extend([head, f"{indent}{{"])

        inner = indent + INDENT
        if declaration.keyword == TypeKeyword.ENUM:
            for member in declaration.enum_members:
                lines.extend(self._summary(member.summary, inner))
                lines.append(f"{inner}{member.name},")
        else:
            previous: CSharpMember | None = None
            for member in declaration.members:
                if previous is not None and not (isinstance(previous, CSharpField) and isinstance(member, CSharpField)):
                    lines.append("")
                lines.extend(self._member(member, inner))
                previous = member

        lines.append(f"{indent}}}")
        return lines

    def _member(self, member: CSharpMember, indent: str) -> list[str]:
        lines = self._header(member, indent)
        modifiers = self._modifiers(member)

        if isinstance(member, CSharpField):
            lines.append(f"{indent}{modifiers}{member.type_name} {member.name};")
        elif isinstance(member, CSharpProperty):
            lines.append(f"{indent}{modifiers}{member.type_name} {member.name} {{ get; init; }}")
        elif isinstance(member, CSharpConstructor):
            head = f"{indent}{modifiers}{member.name}({self._parameters(member.parameters)})"
            lines.extend(self._block(head, member.body, indent))
        elif isinstance(member, CSharpMethod):
            head = f"{indent}{modifiers}{member.return_type} {member.name}({self._parameters(member.parameters)})"
            if member.body is None:
                lines.append(f"{head};")
            else:
                lines.extend(self._block(head, member.body, indent))
        else:
            raise TypeError(f"Unknown member {member!r}")

        return lines
