"""Exceptions raised while compiling a contract schema into source code."""

from __future__ import annotations


class SchemaCodegenError(Exception):
    """Base exception for contract schema compilation errors.

    Any of these aborts the whole compilation: no partial source is ever
    returned.
    """

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = message if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class UnsupportedSchemaConstruct(SchemaCodegenError):
    """Raised when a schema node matches none of the recognized shapes."""


class MalformedOperationSchema(UnsupportedSchemaConstruct):
    """Raised when a query or merged-variant branch does not declare exactly one property."""


class MissingResponseSchema(SchemaCodegenError):
    """Raised when a query operation has no entry in the response map."""

    def __init__(self, operation: str, schema_path: str | None = None) -> None:
        self.operation = operation
        super().__init__(f"No response schema for query operation '{operation}'", schema_path)


class UnresolvedReference(SchemaCodegenError):
    """Raised when a local $ref does not point at any node of its document."""

    def __init__(self, ref_path: str, schema_path: str | None = None) -> None:
        self.ref_path = ref_path
        super().__init__(f"Unresolved reference '{ref_path}'", schema_path)


class InvalidContractSchema(SchemaCodegenError):
    """Raised when the contract schema document itself cannot be read."""
