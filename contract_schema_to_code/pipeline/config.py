"""
Configuration for the contract code generator pipeline.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Leading marker stripped from the target interface name ("ICw20" -> "Cw20")
    interface_marker: str = "I"

    # Appended to the interface name when it carries no marker
    implementation_suffix: str = "Implementation"

    # Appended to every generated query function name
    function_suffix: str = "Async"

    # C# specific configuration
    csharp_wasm_module_type: str = "global::Cosm.Net.Wasm.IWasmModule"
    csharp_contract_base_type: str = "global::Cosm.Net.Wasm.Models.IContract"
    csharp_string_wrapper_type: str = "global::Cosm.Net.Json.StringWrapper"
    # Formatted with the enum name
    csharp_enum_json_converter: str = "global::Cosm.Net.Json.SnakeCaseJsonStringEnumConverter<{name}>"
    csharp_additional_usings: list[str] = field(default_factory=list)

    # Python specific configuration
    python_query_callable_name: str = "query"

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    @staticmethod
    def from_file(path: str | Path) -> CodeGeneratorConfig:
        """Load a config from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return CodeGeneratorConfig.from_dict(json.load(f))

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
