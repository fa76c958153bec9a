"""
Fragment usage resolver.

Resolves the transitive set of fragment definitions an operation or
fragment spreads into, looking each spread up in the corpus index.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog
from graphql import FragmentDefinitionNode, FragmentSpreadNode, SelectionSetNode

from ..documents.nodes import (
    CorpusDocument,
    ExecutableDefinition,
    SelectionKind,
    SourceLocation,
    location_of,
    selection_kind,
)
from .corpus_index import CorpusIndex

log = structlog.get_logger()


@dataclass(frozen=True)
class MissingFragment:
    """A spread whose fragment is not in the corpus."""

    name: str = ""
    location: SourceLocation | None = None  # First spread found referencing it


@dataclass(frozen=True)
class FragmentClosure:
    """Fragments reachable from a root, in first-discovery order."""

    fragments: tuple[CorpusDocument, ...] = ()
    missing: tuple[MissingFragment, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.missing

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(fragment.name for fragment in self.fragments)

    def __iter__(self) -> Iterator[CorpusDocument]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)


def iter_spreads(selection_set: SelectionSetNode | None) -> Iterator[FragmentSpreadNode]:
    """Yield every fragment spread under a selection set, in document order."""
    if selection_set is None:
        return
    for selection in selection_set.selections:
        kind = selection_kind(selection)
        if kind is SelectionKind.FRAGMENT_SPREAD:
            yield selection
        elif kind is SelectionKind.FIELD:
            yield from iter_spreads(selection.selection_set)
        elif kind is SelectionKind.INLINE_FRAGMENT:
            yield from iter_spreads(selection.selection_set)


@dataclass
class _ResolverState:
    """Mutable state of one resolve() call."""

    visited: set[str] = field(default_factory=set)
    fragments: list[CorpusDocument] = field(default_factory=list)
    missing: dict[str, MissingFragment] = field(default_factory=dict)


class FragmentUsageResolver:
    """Resolves fragment spreads to fragment definitions in a corpus."""

    def __init__(self, index: CorpusIndex):
        """
        Initialize the resolver.

        Args:
            index: The corpus index fragments are looked up in
        """
        self.index = index

    def resolve(self, root: CorpusDocument | ExecutableDefinition) -> FragmentClosure:
        """
        Resolve the fragment closure of an operation or fragment.

        Each fragment appears once, even when reached through several
        paths or through a spread cycle. The root fragment itself is never
        part of its own closure.

        Args:
            root: The operation or fragment to resolve

        Returns:
            FragmentClosure with the fragments found and any missing names
        """
        source_path = ""
        if isinstance(root, CorpusDocument):
            source_path = root.source_path
            root = root.node

        state = _ResolverState()
        if isinstance(root, FragmentDefinitionNode):
            state.visited.add(root.name.value)

        self._collect(root.selection_set, source_path, state)
        return FragmentClosure(fragments=tuple(state.fragments), missing=tuple(state.missing.values()))

    def _collect(self, selection_set: SelectionSetNode | None, source_path: str, state: _ResolverState) -> None:
        for spread in iter_spreads(selection_set):
            name = spread.name.value
            if name in state.visited:
                continue
            fragment = self.index.get_fragment_by_name(name)
            if fragment is None:
                if name not in state.missing:
                    log.debug("fragment_not_found", fragment=name, source=source_path)
                    state.missing[name] = MissingFragment(name=name, location=location_of(spread, source_path))
                continue
            state.visited.add(name)
            state.fragments.append(fragment)
            self._collect(fragment.node.selection_set, fragment.source_path, state)


def resolve_fragment_closure(root: CorpusDocument | ExecutableDefinition, index: CorpusIndex) -> FragmentClosure:
    """Resolve the fragment closure of a root against a corpus index."""
    return FragmentUsageResolver(index).resolve(root)
