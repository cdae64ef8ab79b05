"""
Contract analyzer that transforms a contract schema into IR.

Phase 2 of the pipeline: parse the query and response schemas into one
schema graph, resolve references, synthesize declarations and query
functions, and collect everything into a ContractIR.
"""

from __future__ import annotations

import logging

from ..config import CodeGeneratorConfig
from ..contract_schema import ContractSchema
from .context import CompilationContext
from .function_synthesizer import FunctionSynthesizer
from .ir_nodes import ContractIR
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)


class ContractAnalyzer:
    """Analyzes a contract schema and builds IR."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration
        """
        self.config = config

    def analyze(self, contract: ContractSchema, interface_name: str, namespace: str) -> ContractIR:
        """
        Analyze a contract schema.

        A fresh CompilationContext is created on every call, so one analyzer
        can compile several contracts one after the other.

        Args:
            contract: The contract schema document
            interface_name: Name of the interface the generated class implements
            namespace: Namespace of the generated code

        Returns:
            ContractIR ready for code generation
        """
        context = CompilationContext()

        ir = ContractIR(
            contract_name=contract.contract_name,
            contract_version=contract.contract_version,
            interface_name=interface_name,
            class_name=self.class_name_for(interface_name),
            namespace=namespace,
        )
        context.registry.reserve_name(ir.interface_name)
        context.registry.reserve_name(ir.class_name)

        query_root = context.load_document(contract.query, "query")
        response_roots = {
            operation: context.load_document(schema, f"responses/{operation}") for operation, schema in contract.responses.items()
        }

        resolver = TypeResolver(context)
        ir.functions = FunctionSynthesizer(context, resolver, self.config).synthesize(query_root, response_roots)
        ir.declarations = context.registry.declarations

        logger.info(
            "Analyzed contract '%s': %d declaration(s), %d function(s)",
            contract.contract_name or interface_name,
            len(ir.declarations),
            len(ir.functions),
        )
        return ir

    def class_name_for(self, interface_name: str) -> str:
        """
        Derive the implementation class name from the interface name.

        "ICw20" -> "Cw20"; an interface without the marker gets a suffix
        ("Cw20Api" -> "Cw20ApiImplementation").
        """
        marker = self.config.interface_marker
        stripped = interface_name[len(marker) :] if marker and interface_name.startswith(marker) else ""
        if stripped and stripped[0].isupper():
            return stripped
        return f"{interface_name}{self.config.implementation_suffix}"
