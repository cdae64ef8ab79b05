"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed contract schema, ready for code
generation. All references are resolved, names are unique, and query
functions are expanded into their overload sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # boolean, integer, number, string
    OBJECT = "object"  # A generated object or merged-variant declaration
    ENUM = "enum"  # A generated enumeration
    ARRAY = "array"  # T[]
    ANY = "any"  # Untyped JSON object
    BOXED = "boxed"  # Primitive wrapped so it can be a merged-variant member


@dataclass(frozen=True)
class TypeRef:
    """A resolved type reference (one candidate type of a schema node)."""

    kind: TypeKind = TypeKind.PRIMITIVE

    # Primitive JSON type name ("string", "integer"...) or declaration name
    name: str = ""

    # Element type for ARRAY, wrapped primitive for BOXED
    item: TypeRef | None = None

    is_nullable: bool = False

    def as_nullable(self) -> TypeRef:
        return replace(self, is_nullable=True)

    def as_non_nullable(self) -> TypeRef:
        return replace(self, is_nullable=False)

    @property
    def is_primitive(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE


class DeclKind(Enum):
    """Kind of generated declaration."""

    OBJECT = "object"
    ENUMERATION = "enumeration"
    MERGED_VARIANT = "merged_variant"


@dataclass
class FieldDef:
    """A field of an object or merged-variant declaration."""

    name: str = ""  # Member name (PascalCase)
    json_name: str = ""  # Original JSON property key
    type_ref: TypeRef | None = None
    is_required: bool = False
    description: str | None = None

    # Merged-variant member of a branch without a property: its value is sent bare, not keyed
    is_unkeyed: bool = False


@dataclass
class EnumMember:
    """A member of an enumeration declaration."""

    name: str = ""  # Member name (PascalCase)
    value: str = ""  # JSON literal
    description: str | None = None


@dataclass
class TypeDecl:
    """A generated type declaration, bound to exactly one schema node."""

    name: str = ""
    kind: DeclKind = DeclKind.OBJECT
    node_index: int = -1
    description: str | None = None

    # For OBJECT and MERGED_VARIANT
    fields: list[FieldDef] = field(default_factory=list)

    # For ENUMERATION
    members: list[EnumMember] = field(default_factory=list)

    def type_ref(self) -> TypeRef:
        """Reference to this declaration."""
        kind = TypeKind.ENUM if self.kind == DeclKind.ENUMERATION else TypeKind.OBJECT
        return TypeRef(kind=kind, name=self.name)


@dataclass
class ParameterDef:
    """A parameter of a generated query function."""

    name: str = ""  # JSON property key; renderers make it a valid identifier
    type_ref: TypeRef | None = None
    has_default: bool = False


# Body statements, in the order the function synthesizer appends them


@dataclass(frozen=True)
class Statement:
    """Base class for primitive statements of a generated function body."""


@dataclass(frozen=True)
class InitRequest(Statement):
    """Create the request body accumulator wrapped under the operation key."""

    operation: str = ""


@dataclass(frozen=True)
class AddRequestField(Statement):
    """Insert a serialized parameter value into the request body."""

    json_name: str = ""
    parameter: str = ""


@dataclass(frozen=True)
class EncodeRequest(Statement):
    """Serialize the request body to bytes."""


@dataclass(frozen=True)
class QueryContract(Statement):
    """Invoke the injected query capability with the contract address."""


@dataclass(frozen=True)
class DecodeResponse(Statement):
    """Deserialize the returned bytes as the response type."""

    type_ref: TypeRef | None = None


@dataclass(frozen=True)
class ReturnResponse(Statement):
    """Return the decoded response."""


@dataclass
class FunctionDef:
    """A generated query function (one member of an overload set)."""

    name: str = ""
    operation: str = ""  # Query operation key in the schema
    parameters: list[ParameterDef] = field(default_factory=list)
    return_type: TypeRef | None = None
    description: str | None = None
    body: list[Statement] = field(default_factory=list)

    def clone(self) -> FunctionDef:
        return FunctionDef(
            name=self.name,
            operation=self.operation,
            parameters=list(self.parameters),
            return_type=self.return_type,
            description=self.description,
            body=list(self.body),
        )


@dataclass
class ContractIR:
    """The complete Intermediate Representation of one contract."""

    contract_name: str = ""
    contract_version: str = ""

    interface_name: str = ""
    class_name: str = ""
    namespace: str = ""

    # All declarations, in first-encountered order
    declarations: list[TypeDecl] = field(default_factory=list)

    # All functions, grouped by operation in query oneOf order
    functions: list[FunctionDef] = field(default_factory=list)

    # Generation comment
    generation_comment: str = ""

    def overload_sets(self) -> list[list[FunctionDef]]:
        """Functions grouped per query operation, preserving order."""
        groups: dict[str, list[FunctionDef]] = {}
        for function in self.functions:
            groups.setdefault(function.operation, []).append(function)
        return list(groups.values())
