"""
Function synthesizer.

Builds the query functions of a contract: one overload set per branch of the
query message's top-level oneOf. When a parameter resolves to several
candidate types, the overload set is the Cartesian product of every
parameter's candidates.
"""

from __future__ import annotations

import logging

from ...errors import MalformedOperationSchema, MissingResponseSchema
from ...utils import to_valid_function_name
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import SchemaNode
from .context import CompilationContext
from .ir_nodes import (
    AddRequestField,
    DecodeResponse,
    EncodeRequest,
    FunctionDef,
    InitRequest,
    ParameterDef,
    QueryContract,
    ReturnResponse,
    TypeRef,
)
from .registry import Position
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)


class FunctionSynthesizer:
    """Builds FunctionDefs for every query operation."""

    def __init__(self, context: CompilationContext, resolver: TypeResolver, config: CodeGeneratorConfig):
        self.context = context
        self.resolver = resolver
        self.config = config

    def synthesize(self, query_root: int, response_roots: dict[str, int]) -> list[FunctionDef]:
        """
        Build all query functions.

        Args:
            query_root: Root node index of the query message schema
            response_roots: Operation name -> root node index of its response schema

        Returns:
            Functions in query oneOf order, overloads of one operation adjacent

        Raises:
            MalformedOperationSchema: If a query branch does not name exactly one operation
            MissingResponseSchema: If an operation has no response schema
        """
        query_node = self.context.node(query_root)
        functions: list[FunctionDef] = []
        for branch_index in query_node.one_of:
            functions.extend(self.synthesize_operation(self.context.node(branch_index), response_roots))
        return functions

    def synthesize_operation(self, branch: SchemaNode, response_roots: dict[str, int]) -> list[FunctionDef]:
        """Build the overload set of one query operation."""
        if len(branch.properties) != 1:
            raise MalformedOperationSchema(
                f"A query branch must declare exactly one property, found {len(branch.properties)}",
                branch.source_path,
            )
        operation, arguments_index = next(iter(branch.properties.items()))

        if operation not in response_roots:
            raise MissingResponseSchema(operation, branch.source_path)

        function_name = to_valid_function_name(operation)
        return_type = self.resolver.resolve_merged(
            response_roots[operation],
            Position.RESPONSE,
            name_hint=f"{function_name}Response",
        )

        functions = [
            FunctionDef(
                name=f"{function_name}{self.config.function_suffix}",
                operation=operation,
                return_type=return_type,
                description=branch.description,
                body=[InitRequest(operation=operation)],
            )
        ]

        arguments = self._dereference(arguments_index)
        for key in self._ordered_parameters(arguments):
            candidates = self.resolver.resolve_split(arguments.properties[key], Position.REQUEST, name_hint=key)
            functions = self._expand(functions, key, candidates)

        for function in functions:
            self._trim_defaults(function)
            function.body.extend(
                [
                    EncodeRequest(),
                    QueryContract(),
                    DecodeResponse(type_ref=return_type),
                    ReturnResponse(),
                ]
            )

        logger.debug("Synthesized %d overload(s) for query '%s'", len(functions), operation)
        return functions

    def _expand(self, functions: list[FunctionDef], key: str, candidates: list[TypeRef]) -> list[FunctionDef]:
        """
        Append a parameter to every partial signature.

        With a single candidate every signature gets it in place; otherwise
        each signature is extended with every candidate in turn, so the result
        is the Cartesian product of all parameters processed so far.
        """
        expanded: list[FunctionDef] = []
        for function in functions:
            for candidate in candidates:
                target = function if len(candidates) == 1 else function.clone()
                target.parameters.append(ParameterDef(name=key, type_ref=candidate, has_default=candidate.is_nullable))
                target.body.append(AddRequestField(json_name=key, parameter=key))
                expanded.append(target)
        return expanded

    def _dereference(self, index: int) -> SchemaNode:
        """Follow $ref and single-$ref allOf wrappers to the operation's argument object."""
        node = self.context.node(index)
        seen = {index}
        while True:
            if node.has_reference and not node.all_of:
                next_index = node.ref
            elif len(node.all_of) == 1 and self.context.node(node.all_of[0]).has_reference:
                next_index = node.all_of[0]
            else:
                break
            if next_index in seen:
                raise MalformedOperationSchema("Circular reference in query arguments", node.source_path)
            seen.add(next_index)
            node = self.context.node(next_index)

        if node.types != ["object"]:
            raise MalformedOperationSchema("Query arguments must be an object", node.source_path)
        return node

    @staticmethod
    def _trim_defaults(function: FunctionDef) -> None:
        """Drop the default of a nullable parameter followed by one without a default."""
        trailing = True
        for position in reversed(range(len(function.parameters))):
            parameter = function.parameters[position]
            if not parameter.has_default:
                trailing = False
            elif not trailing:
                function.parameters[position] = ParameterDef(name=parameter.name, type_ref=parameter.type_ref)

    @staticmethod
    def _ordered_parameters(arguments: SchemaNode) -> list[str]:
        """Property keys with required ones first, each group in schema order."""
        required = [key for key in arguments.properties if key in arguments.required]
        optional = [key for key in arguments.properties if key not in arguments.required]
        return required + optional
