"""
Common base of the code emitters.

An emitter turns a ContractIR into the source text of one target language.
Spelling IR types is shared: primitives and untyped objects go through
TYPE_MAP, arrays, boxed strings and nullability through per-language hooks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .analyzer.ir_nodes import ContractIR, TypeKind, TypeRef
from .config import CodeGeneratorConfig


class Emitter(ABC):
    """Base class of the C# and Python backends."""

    # JSON primitive ("string", "integer"...) and "object" -> language type
    TYPE_MAP: dict[str, str] = {}

    # Line comment marker, used for the generation comment
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config

    @abstractmethod
    def generate(self, ir: ContractIR) -> str:
        """
        Generate the complete source file.

        Args:
            ir: Analyzed contract

        Returns:
            Source text ending with a newline
        """

    def translate_type(self, type_ref: TypeRef) -> str:
        """Spell an IR type in the target language."""
        if type_ref.kind == TypeKind.PRIMITIVE:
            spelled = self.TYPE_MAP.get(type_ref.name, type_ref.name)
        elif type_ref.kind == TypeKind.ANY:
            spelled = self.TYPE_MAP["object"]
        elif type_ref.kind == TypeKind.BOXED:
            spelled = self.boxed_type(type_ref)
        elif type_ref.kind == TypeKind.ARRAY:
            spelled = self.array_type(self.translate_type(type_ref.item))
        else:
            spelled = type_ref.name
        return self.nullable_type(spelled) if type_ref.is_nullable else spelled

    @abstractmethod
    def array_type(self, item: str) -> str: ...

    @abstractmethod
    def nullable_type(self, spelled: str) -> str: ...

    @abstractmethod
    def boxed_type(self, type_ref: TypeRef) -> str:
        """Spell a primitive boxed as a merged-variant member."""
