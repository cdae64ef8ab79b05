"""
Pipeline generator: contract schema in, source text out.

1. Read the contract schema document
2. Analyze it into IR (parse, resolve references, synthesize types and functions)
3. Hand the IR to the backend of the target language
"""

from __future__ import annotations

import logging
from typing import Any

from .analyzer import ContractAnalyzer, ContractIR
from .ast_backends import CSharpAstBackend
from .backends import PythonBackend
from .config import CodeGeneratorConfig
from .contract_schema import ContractSchema

logger = logging.getLogger(__name__)

LANGUAGES = ("cs", "python")


class ContractGenerator:
    """Generates the client code of one contract."""

    def __init__(
        self,
        interface_name: str,
        namespace: str,
        schema: ContractSchema | dict[str, Any] | str,
        config: CodeGeneratorConfig | None = None,
        language: str = "cs",
    ):
        """
        Initialize the generator.

        Args:
            interface_name: Name of the interface the generated class implements
            namespace: Namespace of the generated code
            schema: Contract schema, as a ContractSchema, decoded JSON or JSON text
            config: Code generation configuration
            language: Target language ("cs" or "python")
        """
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language '{language}', expected one of {', '.join(LANGUAGES)}")

        self.interface_name = interface_name
        self.namespace = namespace
        self.config = config or CodeGeneratorConfig()
        self.language = language

        if isinstance(schema, ContractSchema):
            self.contract = schema
        elif isinstance(schema, str):
            self.contract = ContractSchema.from_json(schema)
        else:
            self.contract = ContractSchema.from_dict(schema)

        if language == "cs":
            self.backend = CSharpAstBackend(self.config)
        else:
            self.backend = PythonBackend(self.config)

    def analyze(self) -> ContractIR:
        """Run the analysis phase only."""
        return ContractAnalyzer(self.config).analyze(self.contract, self.interface_name, self.namespace)

    def generate(self) -> str:
        """
        Generate the source code.

        Returns:
            Complete source text

        Raises:
            SchemaCodegenError: If the schema cannot be compiled; nothing is generated then
        """
        logger.info("Compiling contract '%s' into %s", self.contract.contract_name or self.interface_name, self.language)
        ir = self.analyze()
        ir.generation_comment = self._generate_command_comment()

        code = self.backend.generate(ir)
        logger.info("Generated %s client '%s' (%d characters)", self.language, ir.class_name, len(code))
        return code

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file."""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line
        from ..contract_schema_to_code import contract_schema_to_code as click_command

        command_line = reconstruct_command_line(click_command)
        return f"{self.backend.COMMENT_PREFIX} Generated by contract_schema_to_code v{__version__} : {command_line}"


def generate(
    target_interface_name: str,
    target_namespace: str,
    schema_document: ContractSchema | dict[str, Any] | str,
    config: CodeGeneratorConfig | None = None,
    language: str = "cs",
) -> str:
    """
    Compile a contract schema document into client source code.

    Every call compiles from scratch with its own registry, so independent
    contracts can be generated concurrently from separate threads.

    Args:
        target_interface_name: Interface the generated class implements ("ICw20")
        target_namespace: Namespace of the generated code
        schema_document: Contract schema, as a ContractSchema, decoded JSON or JSON text
        config: Code generation configuration
        language: Target language ("cs" or "python")

    Returns:
        The complete generated source text
    """
    return ContractGenerator(target_interface_name, target_namespace, schema_document, config, language).generate()
