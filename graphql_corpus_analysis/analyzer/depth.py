"""
Selection depth analysis.

Walks an operation or fragment together with the fragments it spreads
into, and reports every field whose selection set nests deeper than the
configured maximum.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from graphql import DocumentNode, FieldNode, FragmentDefinitionNode, SelectionSetNode

from ..documents.nodes import (
    CorpusDocument,
    ExecutableDefinition,
    SelectionKind,
    SourceLocation,
    location_of,
    selection_kind,
)
from ..errors import ConfigurationError
from .fragment_resolver import FragmentClosure

IgnoreRule = str | re.Pattern


@dataclass(frozen=True)
class DepthViolation:
    """A field whose sub-selection exceeds the maximum depth."""

    field_name: str = ""
    depth: int = 0  # Level opened by the field's selection set
    max_depth: int = 0
    location: SourceLocation | None = None
    root_name: str = ""  # Operation or fragment the walk started from

    def to_dict(self) -> dict:
        return {
            "field_name": self.field_name,
            "depth": self.depth,
            "max_depth": self.max_depth,
            "location": self.location.to_dict() if self.location else None,
            "root_name": self.root_name,
        }


def build_depth_document(root: CorpusDocument | ExecutableDefinition, closure: FragmentClosure | None = None) -> DocumentNode:
    """Assemble the root definition and its fragment closure into one document."""
    node = root.node if isinstance(root, CorpusDocument) else root
    fragments = tuple(fragment.node for fragment in closure) if closure is not None else ()
    return DocumentNode(definitions=(node,) + fragments)


def _validate_max_depth(max_depth: int) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        raise ConfigurationError(f"max_depth must be a non-negative integer, got {max_depth!r}")
    return max_depth


class DepthAnalyzer:
    """Checks selection depth against a maximum."""

    def __init__(self, max_depth: int, ignore: Iterable[IgnoreRule] = ()):
        """
        Initialize the analyzer.

        Args:
            max_depth: Deepest allowed selection level
            ignore: Field names (or compiled patterns) that do not open a level
        """
        self.max_depth = _validate_max_depth(max_depth)
        self.ignore = tuple(ignore)
        for rule in self.ignore:
            if not isinstance(rule, (str, re.Pattern)):
                raise ConfigurationError(f"ignore entries must be strings or patterns, got {rule!r}")

    def is_ignored(self, field_name: str) -> bool:
        for rule in self.ignore:
            if isinstance(rule, str):
                if rule == field_name:
                    return True
            elif rule.fullmatch(field_name):
                return True
        return False

    def check(self, root: CorpusDocument | ExecutableDefinition, closure: FragmentClosure | None = None) -> list[DepthViolation]:
        """
        Check one operation or fragment.

        Spreads to fragments outside the closure are skipped, so a partial
        closure still yields a partial result.

        Args:
            root: The operation or fragment to check
            closure: Its resolved fragment closure

        Returns:
            Violations in document order
        """
        if not isinstance(root, CorpusDocument):
            root = CorpusDocument.from_node(root)

        document = build_depth_document(root, closure)
        fragments: dict[str, FragmentDefinitionNode] = {}
        for definition in document.definitions[1:]:
            fragments[definition.name.value] = definition
        sources = {fragment.name: fragment.source_path for fragment in closure or ()}

        walk = _DepthWalk(self, root.display_name, fragments, sources)
        path = frozenset({root.name}) if root.is_fragment else frozenset()
        walk.walk(root.node.selection_set, 0, path, root.source_path)
        return list(walk.violations.values())


class _DepthWalk:
    """State of a single depth check."""

    def __init__(
        self,
        analyzer: DepthAnalyzer,
        root_name: str,
        fragments: dict[str, FragmentDefinitionNode],
        sources: dict[str, str],
    ):
        self.analyzer = analyzer
        self.root_name = root_name
        self.fragments = fragments
        self.sources = sources
        self.violations: dict[tuple[int, int], DepthViolation] = {}

    def walk(self, selection_set: SelectionSetNode | None, level: int, path: frozenset[str], source_path: str) -> None:
        if selection_set is None:
            return
        for selection in selection_set.selections:
            kind = selection_kind(selection)
            if kind is SelectionKind.FIELD:
                self._walk_field(selection, level, path, source_path)
            elif kind is SelectionKind.INLINE_FRAGMENT:
                self.walk(selection.selection_set, level, path, source_path)
            elif kind is SelectionKind.FRAGMENT_SPREAD:
                name = selection.name.value
                fragment = self.fragments.get(name)
                # Missing fragments and spread cycles end the walk here
                if fragment is None or name in path:
                    continue
                self.walk(fragment.selection_set, level, path | {name}, self.sources.get(name, ""))

    def _walk_field(self, node: FieldNode, level: int, path: frozenset[str], source_path: str) -> None:
        if node.selection_set is None:
            return
        name = node.name.value
        if name.startswith("__"):
            # Introspection selections are not limited
            return
        if self.analyzer.is_ignored(name):
            self.walk(node.selection_set, level, path, source_path)
            return

        depth = level + 1
        if depth > self.analyzer.max_depth:
            key = (id(node), depth)
            if key not in self.violations:
                self.violations[key] = DepthViolation(
                    field_name=name,
                    depth=depth,
                    max_depth=self.analyzer.max_depth,
                    location=location_of(node, source_path),
                    root_name=self.root_name,
                )
            return
        self.walk(node.selection_set, depth, path, source_path)


def check_depth(
    root: CorpusDocument | ExecutableDefinition,
    closure: FragmentClosure | None,
    max_depth: int,
    ignore: Iterable[IgnoreRule] = (),
) -> list[DepthViolation]:
    """Check the selection depth of one root against max_depth."""
    return DepthAnalyzer(max_depth, ignore).check(root, closure)
