"""
Corpus document model.

Wraps graphql-core definition nodes with the metadata the analyzers need:
what kind of document it is, where it came from, and how to address it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    Node,
    OperationDefinitionNode,
    SelectionNode,
)

# Name graphql-core gives to a Source built without one
DEFAULT_SOURCE_NAME = "GraphQL request"


class DocumentKind(str, Enum):
    """Kind of a corpus document."""

    OPERATION = "operation"
    FRAGMENT = "fragment"


class SelectionKind(Enum):
    """Closed set of selection node kinds handled during traversal."""

    FIELD = "field"
    FRAGMENT_SPREAD = "fragment_spread"
    INLINE_FRAGMENT = "inline_fragment"


def selection_kind(node: SelectionNode) -> SelectionKind:
    """Classify a selection node.

    Raises:
        TypeError: If the node is not a field, fragment spread or inline fragment
    """
    if isinstance(node, FieldNode):
        return SelectionKind.FIELD
    if isinstance(node, FragmentSpreadNode):
        return SelectionKind.FRAGMENT_SPREAD
    if isinstance(node, InlineFragmentNode):
        return SelectionKind.INLINE_FRAGMENT
    raise TypeError(f"Unhandled selection node kind: {getattr(node, 'kind', type(node).__name__)}")


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based line/column position in a source file."""

    path: str = ""
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict:
        return {"path": self.path, "line": self.line, "column": self.column}

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


def location_of(node: Node | None, source_path: str = "") -> SourceLocation | None:
    """Get the source location of a node, or None if it was parsed without locations."""
    if node is None or node.loc is None:
        return None
    token = node.loc.start_token
    path = source_path
    if not path and node.loc.source is not None and node.loc.source.name != DEFAULT_SOURCE_NAME:
        path = node.loc.source.name
    return SourceLocation(path=path, line=token.line, column=token.column)


ExecutableDefinition = OperationDefinitionNode | FragmentDefinitionNode


@dataclass(frozen=True)
class SourceDocument:
    """A parsed document together with the path it was read from."""

    path: str
    document: DocumentNode


@dataclass(frozen=True)
class CorpusDocument:
    """A single operation or fragment definition in the corpus."""

    kind: DocumentKind
    node: ExecutableDefinition
    source_path: str = ""

    @staticmethod
    def from_node(node: ExecutableDefinition, source_path: str = "") -> CorpusDocument:
        """Wrap a definition node, inferring its kind."""
        if isinstance(node, OperationDefinitionNode):
            return CorpusDocument(DocumentKind.OPERATION, node, source_path)
        if isinstance(node, FragmentDefinitionNode):
            return CorpusDocument(DocumentKind.FRAGMENT, node, source_path)
        raise TypeError(f"Expected an operation or fragment definition, got {type(node).__name__}")

    @property
    def is_operation(self) -> bool:
        return self.kind is DocumentKind.OPERATION

    @property
    def is_fragment(self) -> bool:
        return self.kind is DocumentKind.FRAGMENT

    @property
    def name(self) -> str | None:
        """Fragment or operation name (None for anonymous operations)."""
        return self.node.name.value if self.node.name else None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return f"anonymous {self.node.operation.value}"

    @property
    def type_condition(self) -> str | None:
        """Declared target type of a fragment."""
        if isinstance(self.node, FragmentDefinitionNode):
            return self.node.type_condition.name.value
        return None

    @property
    def location(self) -> SourceLocation | None:
        return location_of(self.node, self.source_path)
