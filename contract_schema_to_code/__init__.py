"""Contract Schema to Code Generator

A Python package for generating typed smart-contract query clients from
CosmWasm contract schemas. Supports C# and Python code generation.
"""

__version__ = "0.1.0"

from .errors import (
    InvalidContractSchema,
    MalformedOperationSchema,
    MissingResponseSchema,
    SchemaCodegenError,
    UnresolvedReference,
    UnsupportedSchemaConstruct,
)
from .pipeline import CodeGeneratorConfig, ContractGenerator, ContractSchema, generate

__all__ = [
    "ContractGenerator",
    "ContractSchema",
    "CodeGeneratorConfig",
    "generate",
    "SchemaCodegenError",
    "UnsupportedSchemaConstruct",
    "MalformedOperationSchema",
    "MissingResponseSchema",
    "UnresolvedReference",
    "InvalidContractSchema",
]
