"""
Contract schema document.

The JSON document emitted by contract schema tooling: contract metadata,
the message schemas and the per-query response schemas. Only `query` and
`responses` drive code generation; the other sub-schemas are carried along
untouched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import InvalidContractSchema


@dataclass
class ContractSchema:
    """A parsed contract schema document."""

    contract_name: str = ""
    contract_version: str = ""
    idl_version: str = ""

    instantiate: dict[str, Any] | None = None
    execute: dict[str, Any] | None = None
    query: dict[str, Any] = field(default_factory=dict)
    migrate: dict[str, Any] | None = None

    # Query operation name -> response schema
    responses: dict[str, dict[str, Any]] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> ContractSchema:
        """
        Build a ContractSchema from a decoded JSON document.

        Raises:
            InvalidContractSchema: If the query schema or the response map is missing
        """
        if not isinstance(d, dict):
            raise InvalidContractSchema("Contract schema must be a JSON object")
        if not isinstance(d.get("query"), dict):
            raise InvalidContractSchema("Contract schema has no 'query' schema")
        responses = d.get("responses") or {}
        if not isinstance(responses, dict):
            raise InvalidContractSchema("'responses' must map query names to schemas")

        return ContractSchema(
            contract_name=d.get("contract_name", ""),
            contract_version=d.get("contract_version", ""),
            idl_version=d.get("idl_version", ""),
            instantiate=d.get("instantiate"),
            execute=d.get("execute"),
            query=d["query"],
            migrate=d.get("migrate"),
            responses=responses,
        )

    @staticmethod
    def from_json(text: str) -> ContractSchema:
        """Parse a contract schema from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidContractSchema(f"Contract schema is not valid JSON: {e}") from e
        return ContractSchema.from_dict(data)

    @staticmethod
    def from_file(path: str | Path) -> ContractSchema:
        """Load a contract schema from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return ContractSchema.from_json(f.read())
