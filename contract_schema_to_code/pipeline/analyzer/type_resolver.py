"""
Type resolver.

Maps schema nodes to IR type references with one of two strategies:

- merging: one unified type per node, used for responses and object
  fields. A heterogeneous oneOf becomes a merged-variant declaration with
  one nullable field per branch.
- splitting: a list of candidate types, used for query parameters. Each
  branch of a heterogeneous oneOf is a separate candidate, which the
  function synthesizer turns into separate overloads.

Both strategies share the same decision tree otherwise.
"""

from __future__ import annotations

import logging
from enum import Enum

from ...errors import MalformedOperationSchema, UnsupportedSchemaConstruct
from ...utils import make_unique, to_valid_property_name
from ..schema_ast.nodes import SchemaNode
from .context import CompilationContext
from .enum_synthesizer import EnumSynthesizer
from .ir_nodes import DeclKind, FieldDef, TypeDecl, TypeKind, TypeRef
from .registry import Position

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = {"boolean", "integer", "number", "string"}

# Name of the merged-variant field for a branch without a single property
VALUE_MEMBER = "Value"


class Strategy(Enum):
    MERGING = "merging"
    SPLITTING = "splitting"


class TypeResolver:
    """Resolves schema nodes to TypeRefs, registering declarations on the way."""

    def __init__(self, context: CompilationContext):
        self.context = context
        self.registry = context.registry
        self.enums = EnumSynthesizer(context)
        # (node index, declarations registered when its resolution started), to detect
        # reference cycles that return to a node without registering a declaration
        self._stack: list[tuple[int, int]] = []

    def resolve_merged(
        self,
        index: int,
        position: Position = Position.RESPONSE,
        name_hint: str | None = None,
    ) -> TypeRef:
        """
        Resolve a node to exactly one type.

        Args:
            index: Schema node index
            position: Request or response position (selects fallback names)
            name_hint: Contextual name for an anonymous declaration

        Returns:
            The node's type
        """
        return self._resolve(index, Strategy.MERGING, position, name_hint)[0]

    def resolve_split(
        self,
        index: int,
        position: Position = Position.REQUEST,
        name_hint: str | None = None,
    ) -> list[TypeRef]:
        """
        Resolve a node to its ordered, duplicate-free list of candidate types.

        Raises:
            UnsupportedSchemaConstruct: If the node yields no candidate
        """
        candidates: list[TypeRef] = []
        for candidate in self._resolve(index, Strategy.SPLITTING, position, name_hint):
            if candidate not in candidates:
                candidates.append(candidate)
        if not candidates:
            raise UnsupportedSchemaConstruct("Schema yields no candidate type", self.context.node(index).source_path)
        return candidates

    def _resolve(self, index: int, strategy: Strategy, position: Position, name_hint: str | None) -> list[TypeRef]:
        node = self.context.node(index)

        if self.registry.lookup(index) is None and (index, len(self.registry)) in self._stack:
            raise UnsupportedSchemaConstruct("Circular reference without an object in between", node.source_path)

        self._stack.append((index, len(self.registry)))
        try:
            return self._resolve_node(node, strategy, position, name_hint)
        finally:
            self._stack.pop()

    def _resolve_node(self, node: SchemaNode, strategy: Strategy, position: Position, name_hint: str | None) -> list[TypeRef]:
        if self.enums.is_enumeration(node):
            return [self.enums.get_or_generate(node, position, name_hint)]

        if node.one_of:
            if strategy == Strategy.MERGING:
                return [self._merged_variant_type(node, position, name_hint)]
            candidates = []
            for branch_index in node.one_of:
                candidates.extend(self._resolve(branch_index, strategy, position, None))
            return candidates

        if len(node.any_of) == 2 and sum(1 for i in node.any_of if not self.context.node(i).is_null_type) == 1:
            inner = next(i for i in node.any_of if not self.context.node(i).is_null_type)
            return [t.as_nullable() for t in self._resolve(inner, strategy, position, name_hint)]

        if node.has_reference and not node.all_of:
            return self._resolve(node.ref, strategy, position, name_hint)

        if len(node.all_of) == 1 and not node.has_reference and self.context.node(node.all_of[0]).has_reference:
            return self._resolve(node.all_of[0], strategy, position, name_hint)

        if not (node.any_of or node.all_of or node.has_reference):
            return self._resolve_by_type(node, strategy, position, name_hint)

        raise UnsupportedSchemaConstruct("Unsupported combination of anyOf/allOf/$ref", node.source_path)

    def _resolve_by_type(self, node: SchemaNode, strategy: Strategy, position: Position, name_hint: str | None) -> list[TypeRef]:
        """Resolve a node without combinators from its declared type."""
        nullable = "null" in node.types
        declared = [t for t in node.types if t != "null"]
        if len(declared) != 1:
            raise UnsupportedSchemaConstruct(f"Unsupported declared type {node.types!r}", node.source_path)
        type_name = declared[0]

        if type_name == "array":
            if nullable:
                raise UnsupportedSchemaConstruct("Nullable array types are not supported, use anyOf with null", node.source_path)
            if node.tuple_items or node.items is None:
                raise UnsupportedSchemaConstruct("Arrays need a single 'items' schema", node.source_path)
            return [TypeRef(kind=TypeKind.ARRAY, item=t) for t in self._resolve(node.items, strategy, position, name_hint)]

        if type_name == "object":
            if nullable:
                raise UnsupportedSchemaConstruct("Nullable object types are not supported, use anyOf with null", node.source_path)
            if not node.properties:
                return [TypeRef(kind=TypeKind.ANY, name="object")]
            return [self._object_type(node, position, name_hint)]

        if type_name in PRIMITIVE_TYPES:
            return [TypeRef(kind=TypeKind.PRIMITIVE, name=type_name, is_nullable=nullable)]

        raise UnsupportedSchemaConstruct(f"Unsupported declared type '{type_name}'", node.source_path)

    def _object_type(self, node: SchemaNode, position: Position, name_hint: str | None) -> TypeRef:
        """Reuse or synthesize the object declaration for a node."""
        existing = self.registry.lookup(node.index)
        if existing is not None:
            return existing.type_ref()

        # Registered before its fields are resolved so that cycles terminate
        decl = self.registry.get_or_create(
            node.index,
            lambda: TypeDecl(
                name=self.context.choose_name(node, position, name_hint),
                kind=DeclKind.OBJECT,
                description=node.description,
            ),
        )

        taken: set[str] = set()
        for key, prop_index in node.properties.items():
            type_ref = self.resolve_merged(prop_index, position, name_hint=key)
            decl.fields.append(
                FieldDef(
                    name=make_unique(to_valid_property_name(key), taken),
                    json_name=key,
                    type_ref=type_ref,
                    is_required=not type_ref.is_nullable,
                    description=self.context.node(prop_index).description,
                )
            )

        return decl.type_ref()

    def _merged_variant_type(self, node: SchemaNode, position: Position, name_hint: str | None) -> TypeRef:
        """Reuse or synthesize the merged-variant declaration for a heterogeneous oneOf."""
        existing = self.registry.lookup(node.index)
        if existing is not None:
            return existing.type_ref()

        decl = self.registry.get_or_create(
            node.index,
            lambda: TypeDecl(
                name=self.context.choose_name(node, position, name_hint),
                kind=DeclKind.MERGED_VARIANT,
                description=node.description,
            ),
        )

        taken: set[str] = set()
        for branch_index in node.one_of:
            branch = self.context.node(branch_index)
            if len(branch.properties) > 1:
                raise MalformedOperationSchema("A oneOf branch declares more than one property", branch.source_path)

            if branch.properties:
                json_name, value_index = next(iter(branch.properties.items()))
                type_ref = self.resolve_merged(value_index, position, name_hint=json_name)
            else:
                json_name = VALUE_MEMBER
                type_ref = self.resolve_merged(branch_index, position)

            if type_ref.is_primitive:
                if type_ref.name != "string":
                    raise UnsupportedSchemaConstruct(
                        f"Cannot box a '{type_ref.name}' oneOf branch, only strings are supported",
                        branch.source_path,
                    )
                type_ref = TypeRef(kind=TypeKind.BOXED, name="string", item=type_ref.as_non_nullable())

            decl.fields.append(
                FieldDef(
                    name=make_unique(to_valid_property_name(json_name), taken),
                    json_name=json_name,
                    type_ref=type_ref.as_nullable(),
                    is_required=False,
                    description=branch.description,
                    is_unkeyed=not branch.properties,
                )
            )

        return decl.type_ref()
