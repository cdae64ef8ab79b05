"""
Python code generation backend.

Generates an asyncio contract client from IR: dataclass_json component
types, Enum enumerations, a Protocol for the target interface and a class
implementing it on top of an injected query callable.
"""

from __future__ import annotations

import collections
import json
from typing import Any

from ...utils import make_unique, pascal_to_snake_case, to_valid_parameter_name
from ..analyzer.ir_nodes import (
    AddRequestField,
    ContractIR,
    DecodeResponse,
    DeclKind,
    EncodeRequest,
    FieldDef,
    FunctionDef,
    InitRequest,
    QueryContract,
    ReturnResponse,
    Statement,
    TypeDecl,
    TypeKind,
    TypeRef,
)
from ..config import CodeGeneratorConfig
from .base import CodeBackend

# Names a generated dataclass body cannot shadow
RESERVED_ATTRIBUTE_NAMES = {"self", "field", "config", "to_dict", "from_dict", "to_json", "from_json", "schema"}

# Locals of a generated query method
LOCAL_NAMES = frozenset({"self", "inner_request", "request", "encoded_request", "encoded_response", "data", "response"})


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    COMMENT_PREFIX = "#"

    TYPE_MAP = {
        "boolean": "bool",
        "integer": "int",
        "number": "float",
        "string": "str",
        "object": "dict[str, Any]",
    }

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()
        # Merged variant name -> JSON name of its member sent as a bare string
        self.bare_members: dict[str, str] = {}

    def generate(self, ir: ContractIR) -> str:
        """Generate Python code from IR."""
        # Reset import tracking
        self.python_imports = {
            ("__future__", "annotations"),
            ("collections.abc", "Awaitable"),
            ("collections.abc", "Callable"),
            ("enum", "Enum"),
            ("typing", "Any"),
            ("typing", "Protocol"),
        }
        self.bare_members = {}
        for decl in ir.declarations:
            member = self._bare_member(decl)
            if member is not None:
                self.bare_members[decl.name] = member.json_name

        declarations = []
        for decl in ir.declarations:
            if decl.kind == DeclKind.ENUMERATION:
                declarations.append(self.templates["enum"].render(self._prepare_enum_context(decl)))
            else:
                declarations.append(self.templates["class"].render(self._prepare_class_context(decl)))

        contract = self.templates["contract"].render(self._prepare_contract_context(ir))

        # Rendered last so that every import recorded above is included
        prefix = self.templates["prefix"].render(
            generation_comment=ir.generation_comment,
            required_imports=self._assemble_imports(),
            has_variants=any(decl.kind == DeclKind.MERGED_VARIANT for decl in ir.declarations),
            has_bare_variants=bool(self.bare_members),
        )

        return "\n\n\n".join([prefix.rstrip("\n"), contract.rstrip("\n"), *(d.rstrip("\n") for d in declarations)]) + "\n"

    def array_type(self, item: str) -> str:
        return f"list[{item}]"

    def nullable_type(self, spelled: str) -> str:
        return f"{spelled} | None"

    def boxed_type(self, type_ref: TypeRef) -> str:
        # A JSON string needs no wrapper on the Python side
        return self.TYPE_MAP["string"]

    # Component declarations

    def _prepare_class_context(self, decl: TypeDecl) -> dict[str, Any]:
        """Prepare the template context for an object or merged-variant declaration."""
        self.python_imports.add(("dataclasses", "dataclass"))
        self.python_imports.add(("dataclasses_json", "dataclass_json"))
        is_variant = decl.kind == DeclKind.MERGED_VARIANT

        taken = set(RESERVED_ATTRIBUTE_NAMES)
        fields = []
        for field in decl.fields:
            attribute = make_unique(self._attribute_name(field.name), taken)
            overrides = []
            if attribute != field.json_name:
                overrides.append(f"field_name={json.dumps(field.json_name)}")
            # Only the populated member of a merged variant goes on the wire
            if is_variant:
                overrides.append("exclude=_is_none")
            if self._holds_bare_variant(field.type_ref):
                decoder = self._decode_expression(field.type_ref.as_non_nullable(), "data")
                overrides.append(f"encoder=_encode, decoder=lambda data: {decoder}")

            metadata = None
            if overrides:
                self.python_imports.add(("dataclasses", "field"))
                self.python_imports.add(("dataclasses_json", "config"))
                metadata = f"metadata=config({', '.join(overrides)})"

            if field.is_required:
                init = f" = field({metadata})" if metadata else ""
            else:
                init = f" = field(default=None, {metadata})" if metadata else " = None"

            fields.append(
                {
                    "name": attribute,
                    "type": self.translate_type(field.type_ref),
                    "init": init,
                    "comment_lines": field.description.strip().splitlines() if field.description else [],
                }
            )

        return {
            "name": decl.name,
            "description": decl.description,
            "fields": fields,
            "bare_member": json.dumps(self.bare_members[decl.name]) if decl.name in self.bare_members else None,
        }

    def _holds_bare_variant(self, type_ref: TypeRef) -> bool:
        """Whether values of ``type_ref`` may contain a merged variant sent as a bare string."""
        while type_ref.kind == TypeKind.ARRAY:
            type_ref = type_ref.item
        return type_ref.name in self.bare_members and type_ref.kind == TypeKind.OBJECT

    def _prepare_enum_context(self, decl: TypeDecl) -> dict[str, Any]:
        """Prepare the template context for an enumeration declaration."""
        taken: set[str] = set()
        members = []
        for member in decl.members:
            name = make_unique(self._attribute_name(member.name).upper(), taken)
            members.append(
                {
                    "name": name,
                    "value": json.dumps(member.value),
                    "comment_lines": member.description.strip().splitlines() if member.description else [],
                }
            )

        return {
            "name": decl.name,
            "description": decl.description,
            "members": members,
        }

    @staticmethod
    def _bare_member(decl: TypeDecl) -> FieldDef | None:
        """The unkeyed string member of a merged variant, which is sent as a bare JSON string."""
        if decl.kind != DeclKind.MERGED_VARIANT:
            return None
        return next(
            (f for f in decl.fields if f.is_unkeyed and f.type_ref.kind in (TypeKind.BOXED, TypeKind.ENUM)),
            None,
        )

    @staticmethod
    def _attribute_name(name: str) -> str:
        return to_valid_parameter_name(pascal_to_snake_case(name) or name, "python")

    # Contract interface and class

    def _prepare_contract_context(self, ir: ContractIR) -> dict[str, Any]:
        """Prepare the template context for the interface protocol and its implementation."""
        methods = []
        for overloads in ir.overload_sets():
            if len(overloads) > 1:
                self.python_imports.add(("typing", "overload"))
            first = overloads[0]
            methods.append(
                {
                    "name": pascal_to_snake_case(first.name),
                    "return_type": self.translate_type(first.return_type),
                    "description": first.description,
                    "stubs": [self._format_parameters(f) for f in overloads],
                    "params": self._format_merged_parameters(overloads),
                    "body": [line for stmt in first.body for line in self._render_statement(stmt)],
                }
            )

        return {
            "contract_name": ir.contract_name or ir.class_name,
            "interface_name": ir.interface_name,
            "class_name": ir.class_name,
            "query_callable": self.config.python_query_callable_name,
            "methods": methods,
        }

    def _format_parameters(self, function: FunctionDef) -> str:
        """Format the parameters of one overload, including the leading separator after ``self``."""
        parts = []
        for p in function.parameters:
            part = f"{to_valid_parameter_name(p.name, 'python', LOCAL_NAMES)}: {self.translate_type(p.type_ref)}"
            if p.has_default:
                part += " = None"
            parts.append(part)
        return "".join(f", {part}" for part in parts)

    def _format_merged_parameters(self, overloads: list[FunctionDef]) -> str:
        """Format the implementation parameters accepting every overload's types."""
        parts = []
        for position, p in enumerate(overloads[0].parameters):
            types: list[str] = []
            has_default = False
            for function in overloads:
                param = function.parameters[position]
                has_default = has_default or param.has_default
                for t in self.translate_type(param.type_ref).split(" | "):
                    if t not in types:
                        types.append(t)
            # None always goes last in the union
            if "None" in types:
                types.remove("None")
                types.append("None")
            part = f"{to_valid_parameter_name(p.name, 'python', LOCAL_NAMES)}: {' | '.join(types)}"
            if has_default:
                part += " = None"
            parts.append(part)
        return "".join(f", {part}" for part in parts)

    def _render_statement(self, stmt: Statement) -> list[str]:
        """Render one body statement as Python source lines."""
        if isinstance(stmt, InitRequest):
            return [
                "inner_request: dict[str, Any] = {}",
                f"request = {{{json.dumps(stmt.operation)}: inner_request}}",
            ]
        if isinstance(stmt, AddRequestField):
            parameter = to_valid_parameter_name(stmt.parameter, "python", LOCAL_NAMES)
            return [f"inner_request[{json.dumps(stmt.json_name)}] = _encode({parameter})"]
        if isinstance(stmt, EncodeRequest):
            self.python_imports.add(("json", ""))
            return ['encoded_request = json.dumps(request).encode("utf-8")']
        if isinstance(stmt, QueryContract):
            return [f"encoded_response = await self._{self.config.python_query_callable_name}(self.contract_address, encoded_request)"]
        if isinstance(stmt, DecodeResponse):
            self.python_imports.add(("json", ""))
            return [
                'data = json.loads(encoded_response.decode("utf-8"))',
                f"response = {self._decode_expression(stmt.type_ref, 'data')}",
            ]
        if isinstance(stmt, ReturnResponse):
            return ["return response"]
        raise TypeError(f"Unknown statement {stmt!r}")

    def _decode_expression(self, type_ref: TypeRef, value: str, depth: int = 0) -> str:
        """Build the expression converting decoded JSON ``value`` into ``type_ref``."""
        if type_ref.kind == TypeKind.OBJECT and type_ref.name in self.bare_members:
            expression = f"_decode_variant({type_ref.name}, {value})"
        elif type_ref.kind == TypeKind.OBJECT:
            expression = f"{type_ref.name}.from_dict({value})"
        elif type_ref.kind == TypeKind.ENUM:
            expression = f"{type_ref.name}({value})"
        elif type_ref.kind == TypeKind.ARRAY:
            item = f"item{depth}" if depth else "item"
            inner = self._decode_expression(type_ref.item, item, depth + 1)
            if inner == item:
                return value
            expression = f"[{inner} for {item} in {value}]"
        else:
            return value

        if type_ref.is_nullable:
            return f"None if {value} is None else {expression}"
        return expression

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        # Define standard library modules
        STDLIB_MODULES = {"collections.abc", "dataclasses", "enum", "json", "typing"}

        # Separate stdlib and third-party
        stdlib_groups = {m: import_groups[m] for m in import_groups if m in STDLIB_MODULES}
        third_party_groups = {m: import_groups[m] for m in import_groups if m not in STDLIB_MODULES and m != "__future__"}

        assembled = []

        # __future__ imports first
        if "__future__" in import_groups:
            names = sorted(import_groups["__future__"])
            assembled.append(f"from __future__ import {', '.join(names)}")
            if stdlib_groups or third_party_groups:
                assembled.append("")

        # Plain module imports, then from-imports
        for module in sorted(m for m in stdlib_groups if "" in stdlib_groups[m]):
            assembled.append(f"import {module}")

        for module in sorted(stdlib_groups.keys()):
            names = sorted(n for n in stdlib_groups[module] if n)
            if names:
                assembled.append(f"from {module} import {', '.join(names)}")

        if stdlib_groups and third_party_groups:
            assembled.append("")

        # Third party
        for module in sorted(third_party_groups.keys()):
            names = sorted(third_party_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        return assembled
