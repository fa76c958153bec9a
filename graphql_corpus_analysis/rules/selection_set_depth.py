"""
selection-set-depth: limit operation complexity by selection depth.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..analyzer.depth import DepthAnalyzer
from ..config import DEPTH_RULE, DepthConfig
from ..documents.nodes import CorpusDocument
from .base import AnalysisRule, Diagnostic, Suggestion


class SelectionSetDepthRule(AnalysisRule):
    """Reports selections nested deeper than maxDepth, following fragment spreads."""

    RULE_ID = DEPTH_RULE
    MESSAGES = {DEPTH_RULE: "'{{ rootName }}' exceeds maximum operation depth of {{ maxDepth }}"}
    SUGGESTIONS = {"remove-selections": "Remove selections"}
    requires_siblings = True

    def __init__(self, options: dict | None = None):
        super().__init__(options)
        self.depth_config = DepthConfig.from_dict(self.options)
        self.analyzer = DepthAnalyzer(self.depth_config.max_depth, self.depth_config.ignore)

    def targets(self, session) -> Iterable[CorpusDocument]:
        """
        Every operation, plus the fragments no other root reaches.

        A fragment spread by an operation is checked through that operation
        only, so its fields are not reported a second time.
        """
        operations = session.index.get_operations()
        covered: set[str] = set()
        for operation in operations:
            covered.update(session.fragment_closure(operation).names)

        standalone = [f for f in session.index.get_fragments() if f.name not in covered]
        spread: set[str] = set()
        for fragment in standalone:
            spread.update(session.fragment_closure(fragment).names)

        roots = [f for f in standalone if f.name not in spread]
        for fragment in roots:
            covered.add(fragment.name)
            covered.update(session.fragment_closure(fragment).names)
        # Spread cycles nothing else enters
        for fragment in standalone:
            if fragment.name not in covered:
                roots.append(fragment)
                covered.add(fragment.name)
                covered.update(session.fragment_closure(fragment).names)

        chosen = {id(f) for f in roots}
        return [*operations, *(f for f in standalone if id(f) in chosen)]

    def check_target(self, session, target: CorpusDocument) -> list[Diagnostic]:
        closure = session.fragment_closure(target)
        diagnostics = []
        for violation in self.analyzer.check(target, closure):
            diagnostics.append(
                Diagnostic(
                    rule_id=self.RULE_ID,
                    message_id=DEPTH_RULE,
                    data={
                        "rootName": violation.root_name,
                        "maxDepth": violation.max_depth,
                        "depth": violation.depth,
                        "fieldName": violation.field_name,
                    },
                    location=violation.location,
                    suggestions=(Suggestion("remove-selections"),),
                )
            )
        return diagnostics
