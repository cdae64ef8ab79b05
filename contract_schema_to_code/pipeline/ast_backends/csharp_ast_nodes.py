"""
C# AST node definitions.

Every declaration, whether a type or a member, shares one header: XML doc
summary, attributes, access and modifiers. The serializer prints that header
the same way everywhere and only the body differs per node kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AccessModifier(str, Enum):
    """C# access modifiers."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"


class MemberModifier(str, Enum):
    """C# modifiers, in the order they are written."""

    READONLY = "readonly"
    REQUIRED = "required"
    ASYNC = "async"
    PARTIAL = "partial"


class TypeKeyword(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"


@dataclass
class CSharpAttribute:
    """An attribute such as [JsonPropertyName("amount")]."""

    name: str
    arguments: list[str] = field(default_factory=list)

    def to_string(self) -> str:
        if not self.arguments:
            return f"[{self.name}]"
        return f"[{self.name}({', '.join(self.arguments)})]"


@dataclass
class CSharpParameter:
    name: str
    type_name: str
    default_value: str | None = None


@dataclass
class CSharpDeclaration:
    """Header shared by types and members."""

    name: str = ""
    summary: str | None = None
    attributes: list[CSharpAttribute] = field(default_factory=list)
    access: AccessModifier | None = AccessModifier.PUBLIC
    modifiers: list[MemberModifier] = field(default_factory=list)


@dataclass
class CSharpField(CSharpDeclaration):
    type_name: str = ""
    access: AccessModifier | None = AccessModifier.PRIVATE


@dataclass
class CSharpProperty(CSharpDeclaration):
    """An auto-property with get/init accessors."""

    type_name: str = ""


@dataclass
class CSharpConstructor(CSharpDeclaration):
    parameters: list[CSharpParameter] = field(default_factory=list)
    body: list[str] = field(default_factory=list)


@dataclass
class CSharpMethod(CSharpDeclaration):
    """A method; without a body it is printed as a signature (interface member)."""

    return_type: str = "void"
    parameters: list[CSharpParameter] = field(default_factory=list)
    body: list[str] | None = None


@dataclass
class CSharpEnumMember:
    name: str
    summary: str | None = None


CSharpMember = CSharpField | CSharpProperty | CSharpConstructor | CSharpMethod


@dataclass
class CSharpType(CSharpDeclaration):
    """A class, interface or enum declaration."""

    keyword: TypeKeyword = TypeKeyword.CLASS
    base_types: list[str] = field(default_factory=list)
    members: list[CSharpMember] = field(default_factory=list)
    enum_members: list[CSharpEnumMember] = field(default_factory=list)


@dataclass
class CSharpFile:
    """A complete C# source file with a file-scoped namespace."""

    header_comment: str = ""
    usings: list[str] = field(default_factory=list)
    namespace: str | None = None
    types: list[CSharpType] = field(default_factory=list)
