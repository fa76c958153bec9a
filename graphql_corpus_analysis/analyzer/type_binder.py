"""
Type binder.

Resolves, for every field selection in an operation or fragment, the
composite type it is selected on and the schema field it refers to.
The type context is an immutable stack carried through the recursive
descent, so a binder can be shared and re-entered freely.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    GraphQLCompositeType,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    InlineFragmentNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    get_named_type,
    is_composite_type,
)

from ..documents.nodes import CorpusDocument, ExecutableDefinition, SelectionKind, selection_kind


@dataclass(frozen=True)
class TypeFrame:
    """One level of the type context."""

    parent_type: GraphQLCompositeType | None = None
    field_def: GraphQLField | None = None


@dataclass(frozen=True)
class TypeContext:
    """Immutable stack of type frames. push() and pop() return new contexts."""

    frames: tuple[TypeFrame, ...] = ()

    def push(self, parent_type: GraphQLCompositeType | None, field_def: GraphQLField | None = None) -> TypeContext:
        return TypeContext(self.frames + (TypeFrame(parent_type, field_def),))

    def pop(self) -> TypeContext:
        if not self.frames:
            raise IndexError("pop from empty type context")
        return TypeContext(self.frames[:-1])

    @property
    def parent_type(self) -> GraphQLCompositeType | None:
        return self.frames[-1].parent_type if self.frames else None

    @property
    def field_def(self) -> GraphQLField | None:
        return self.frames[-1].field_def if self.frames else None

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def is_empty(self) -> bool:
        return not self.frames


@dataclass(frozen=True)
class BoundField:
    """A field selection bound to its schema definition."""

    node: FieldNode
    parent_type: GraphQLCompositeType
    field_def: GraphQLField
    context: TypeContext

    @property
    def name(self) -> str:
        return self.node.name.value


def root_type_for(schema: GraphQLSchema, definition: ExecutableDefinition) -> GraphQLCompositeType | None:
    """Get the type an operation or fragment is rooted at, if the schema defines it."""
    if isinstance(definition, OperationDefinitionNode):
        return {
            OperationType.QUERY: schema.query_type,
            OperationType.MUTATION: schema.mutation_type,
            OperationType.SUBSCRIPTION: schema.subscription_type,
        }[definition.operation]
    if isinstance(definition, FragmentDefinitionNode):
        return _composite_type(schema, definition.type_condition.name.value)
    raise TypeError(f"Expected an operation or fragment definition, got {type(definition).__name__}")


def _composite_type(schema: GraphQLSchema, name: str) -> GraphQLCompositeType | None:
    named = schema.get_type(name)
    return named if is_composite_type(named) else None


def lookup_field(parent_type: GraphQLCompositeType | None, name: str) -> GraphQLField | None:
    """Find a field declared on a type. Meta fields and union members are not declared fields."""
    if isinstance(parent_type, (GraphQLObjectType, GraphQLInterfaceType)):
        return parent_type.fields.get(name)
    return None


def bind(schema: GraphQLSchema, definition: ExecutableDefinition | CorpusDocument) -> TypeContext:
    """
    Resolve the type context at the root of an operation or fragment.

    Returns an empty context when the root type does not exist in the schema.
    """
    if isinstance(definition, CorpusDocument):
        definition = definition.node
    root = root_type_for(schema, definition)
    if root is None:
        return TypeContext()
    return TypeContext().push(root)


class TypeBinder:
    """Binds field selections of a definition to schema types."""

    def __init__(self, schema: GraphQLSchema):
        """
        Initialize the binder.

        Args:
            schema: The schema selections are bound against
        """
        self.schema = schema

    def bind_fields(self, definition: ExecutableDefinition | CorpusDocument) -> Iterator[BoundField]:
        """
        Yield every field that binds to a schema field, depth-first in document order.

        Fields that do not bind are skipped together with their subtree.
        Fragment spreads are not followed.
        """
        context = bind(self.schema, definition)
        if context.is_empty:
            return
        node = definition.node if isinstance(definition, CorpusDocument) else definition
        yield from self._walk(node.selection_set, context)

    def _walk(self, selection_set: SelectionSetNode | None, context: TypeContext) -> Iterator[BoundField]:
        if selection_set is None:
            return
        for selection in selection_set.selections:
            kind = selection_kind(selection)
            if kind is SelectionKind.FIELD:
                yield from self._walk_field(selection, context)
            elif kind is SelectionKind.INLINE_FRAGMENT:
                yield from self._walk_inline_fragment(selection, context)
            elif kind is SelectionKind.FRAGMENT_SPREAD:
                # Bound separately as its own corpus document
                continue

    def _walk_field(self, node: FieldNode, context: TypeContext) -> Iterator[BoundField]:
        parent_type = context.parent_type
        field_def = lookup_field(parent_type, node.name.value)
        if field_def is None:
            return

        yield BoundField(node=node, parent_type=parent_type, field_def=field_def, context=context)

        if node.selection_set is None:
            return
        named = get_named_type(field_def.type)
        if not is_composite_type(named):
            return
        yield from self._walk(node.selection_set, context.push(named, field_def))

    def _walk_inline_fragment(self, node: InlineFragmentNode, context: TypeContext) -> Iterator[BoundField]:
        if node.type_condition is None:
            yield from self._walk(node.selection_set, context)
            return
        condition_type = _composite_type(self.schema, node.type_condition.name.value)
        if condition_type is None:
            return
        yield from self._walk(node.selection_set, context.push(condition_type, context.field_def))
