"""
C# AST-based code generation backend.

Builds the contract interface, its implementing class on top of the wasm
module, and the component types as C# AST nodes.
"""

from __future__ import annotations

from ...utils import make_unique, to_valid_parameter_name
from ..analyzer.ir_nodes import (
    AddRequestField,
    ContractIR,
    DecodeResponse,
    DeclKind,
    EncodeRequest,
    FunctionDef,
    InitRequest,
    QueryContract,
    ReturnResponse,
    Statement,
    TypeDecl,
    TypeRef,
)
from .base import AstBackend
from .csharp_ast_nodes import (
    AccessModifier,
    CSharpAttribute,
    CSharpConstructor,
    CSharpEnumMember,
    CSharpField,
    CSharpFile,
    CSharpMethod,
    CSharpParameter,
    CSharpProperty,
    CSharpType,
    MemberModifier,
    TypeKeyword,
)
from .csharp_serializer import CSharpSerializer

# Always imported by the generated file
BASE_USINGS = [
    "System",
    "System.Text",
    "System.Text.Json",
    "System.Text.Json.Nodes",
    "System.Text.Json.Serialization",
    "System.Threading.Tasks",
]

# Locals of a generated query method
LOCAL_NAMES = frozenset(
    {"innerJsonRequest", "jsonRequest", "encodedRequest", "encodedResponse", "jsonResponse", "response"}
)


class CSharpAstBackend(AstBackend):
    """C# code generation backend using custom AST."""

    TYPE_MAP = {
        "boolean": "bool",
        "integer": "int",
        "number": "double",
        "string": "string",
        "object": "object",
    }

    def build(self, ir: ContractIR) -> CSharpFile:
        usings = list(BASE_USINGS)
        usings.extend(ns for ns in self.config.csharp_additional_usings if ns not in usings)

        types = [self._interface(ir), self._contract_class(ir)]
        for decl in ir.declarations:
            types.append(self._enum(decl) if decl.kind == DeclKind.ENUMERATION else self._component_class(decl))

        return CSharpFile(header_comment=ir.generation_comment, usings=usings, namespace=ir.namespace or None, types=types)

    def serialize(self, tree: CSharpFile) -> str:
        return CSharpSerializer().serialize(tree)

    def array_type(self, item: str) -> str:
        return f"{item}[]"

    def nullable_type(self, spelled: str) -> str:
        return f"{spelled}?"

    def boxed_type(self, type_ref: TypeRef) -> str:
        return self.config.csharp_string_wrapper_type

    # Contract interface and class

    def _interface(self, ir: ContractIR) -> CSharpType:
        """The partial interface listing every query signature."""
        return CSharpType(
            name=ir.interface_name,
            keyword=TypeKeyword.INTERFACE,
            modifiers=[MemberModifier.PARTIAL],
            members=[self._signature(function, access=None) for function in ir.functions],
        )

    def _contract_class(self, ir: ContractIR) -> CSharpType:
        """The class implementing the interface on top of the wasm module."""
        wasm_type = self.config.csharp_wasm_module_type
        members = [
            CSharpField(name="_wasm", type_name=wasm_type, modifiers=[MemberModifier.READONLY]),
            CSharpField(name="_contractAddress", type_name="string", modifiers=[MemberModifier.READONLY]),
            CSharpConstructor(
                name=ir.class_name,
                parameters=[CSharpParameter("wasm", wasm_type), CSharpParameter("contractAddress", "string")],
                body=["_wasm = wasm;", "_contractAddress = contractAddress;"],
            ),
        ]
        for function in ir.functions:
            method = self._signature(function)
            method.modifiers = [MemberModifier.ASYNC]
            method.body = [line for stmt in function.body for line in self._render_statement(stmt)]
            members.append(method)

        return CSharpType(
            name=ir.class_name,
            access=AccessModifier.INTERNAL,
            modifiers=[MemberModifier.PARTIAL],
            base_types=[self.config.csharp_contract_base_type, ir.interface_name],
            members=members,
        )

    def _signature(self, function: FunctionDef, access: AccessModifier | None = AccessModifier.PUBLIC) -> CSharpMethod:
        return CSharpMethod(
            name=function.name,
            summary=function.description,
            access=access,
            return_type=f"Task<{self.translate_type(function.return_type)}>",
            parameters=[
                CSharpParameter(
                    name=to_valid_parameter_name(p.name, "cs", LOCAL_NAMES),
                    type_name=self.translate_type(p.type_ref),
                    default_value="null" if p.has_default else None,
                )
                for p in function.parameters
            ],
        )

    def _render_statement(self, stmt: Statement) -> list[str]:
        """Render one body statement as C# source lines."""
        if isinstance(stmt, InitRequest):
            return [
                "var innerJsonRequest = new JsonObject();",
                f'var jsonRequest = new JsonObject {{ ["{stmt.operation}"] = innerJsonRequest }};',
            ]
        if isinstance(stmt, AddRequestField):
            parameter = to_valid_parameter_name(stmt.parameter, "cs", LOCAL_NAMES)
            return [f'innerJsonRequest.Add("{stmt.json_name}", JsonSerializer.SerializeToNode({parameter}));']
        if isinstance(stmt, EncodeRequest):
            return ["var encodedRequest = Encoding.UTF8.GetBytes(jsonRequest.ToJsonString());"]
        if isinstance(stmt, QueryContract):
            return [
                "var encodedResponse = await _wasm.SmartContractStateAsync("
                "_contractAddress, global::Google.Protobuf.ByteString.CopyFrom(encodedRequest));"
            ]
        if isinstance(stmt, DecodeResponse):
            return [
                "var jsonResponse = Encoding.UTF8.GetString(encodedResponse.Data.Span);",
                f"var response = JsonSerializer.Deserialize<{self.translate_type(stmt.type_ref)}>(jsonResponse)!;",
            ]
        if isinstance(stmt, ReturnResponse):
            return ["return response;"]
        raise TypeError(f"Unknown statement {stmt!r}")

    # Component declarations

    def _component_class(self, decl: TypeDecl) -> CSharpType:
        """A partial class for an object or merged-variant declaration."""
        # A member cannot share its enclosing type's name
        taken = {decl.name}
        properties = [
            CSharpProperty(
                name=make_unique(field.name, taken),
                summary=field.description,
                attributes=[CSharpAttribute("JsonPropertyName", [f'"{field.json_name}"'])],
                modifiers=[MemberModifier.REQUIRED] if field.is_required else [],
                type_name=self.translate_type(field.type_ref),
            )
            for field in decl.fields
        ]
        return CSharpType(name=decl.name, summary=decl.description, modifiers=[MemberModifier.PARTIAL], members=properties)

    def _enum(self, decl: TypeDecl) -> CSharpType:
        converter = self.config.csharp_enum_json_converter.format(name=decl.name)
        return CSharpType(
            name=decl.name,
            keyword=TypeKeyword.ENUM,
            summary=decl.description,
            attributes=[CSharpAttribute("JsonConverter", [f"typeof({converter})"])],
            enum_members=[CSharpEnumMember(m.name, m.description) for m in decl.members],
        )
