"""
Analysis session.

Owns everything derived from one (schema, corpus) pair: the corpus index,
the fragment resolver and the used-field cache. Rules run against the
session one target at a time; a failure on one target is recorded and
the remaining targets are still checked.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog
from graphql import GraphQLSchema

from .analyzer.cache import UsedFieldCache
from .analyzer.corpus_index import CorpusIndex, CorpusInput
from .analyzer.depth import DepthViolation, IgnoreRule, check_depth
from .analyzer.fragment_resolver import FragmentClosure, FragmentUsageResolver
from .analyzer.used_fields import UsedFieldIndex
from .config import AnalysisConfig
from .documents.nodes import CorpusDocument, ExecutableDefinition
from .rules import RULES, AnalysisRule, Diagnostic

log = structlog.get_logger()

SIBLINGS_UNAVAILABLE = "siblings_unavailable"


@dataclass(frozen=True)
class DocumentFailure:
    """A rule that failed on one target."""

    rule_id: str = ""
    target: str = ""
    source_path: str = ""
    error: str = ""

    def to_dict(self) -> dict:
        return {"rule_id": self.rule_id, "target": self.target, "source_path": self.source_path, "error": self.error}


@dataclass
class AnalysisReport:
    """Everything a run produced."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    failures: list[DocumentFailure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics or self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "failures": [f.to_dict() for f in self.failures],
            "warnings": list(self.warnings),
        }


class AnalysisSession:
    """Shared analysis state for one schema and one corpus."""

    def __init__(
        self,
        schema: GraphQLSchema,
        documents: Iterable[CorpusInput] = (),
        config: AnalysisConfig | None = None,
    ):
        """
        Initialize the session.

        Args:
            schema: The schema documents are analyzed against
            documents: Every operation and fragment document of the project

        Raises:
            UnclassifiableDocumentError: If a document definition is neither
                an operation nor a fragment
        """
        self.schema = schema
        self.config = config or AnalysisConfig()
        self.index = CorpusIndex.build(documents)
        self.resolver = FragmentUsageResolver(self.index)
        self.used_field_cache = UsedFieldCache()

    def used_fields(self) -> UsedFieldIndex:
        """The used-field index of this session's corpus, computed once."""
        return self.used_field_cache.get_or_build(self.schema, self.index)

    def fragment_closure(self, document: CorpusDocument | ExecutableDefinition) -> FragmentClosure:
        return self.resolver.resolve(document)

    def check_depth(
        self,
        document: CorpusDocument | ExecutableDefinition,
        max_depth: int,
        ignore: Iterable[IgnoreRule] = (),
    ) -> list[DepthViolation]:
        """Check one operation or fragment, following its fragment spreads."""
        return check_depth(document, self.fragment_closure(document), max_depth, ignore)

    def create_rules(self) -> list[AnalysisRule]:
        """Instantiate every rule enabled in the config."""
        return [RULES[rule_id](self.config.rules[rule_id].options) for rule_id in self.config.enabled_rules]

    def run(self, rules: Iterable[AnalysisRule] | None = None) -> AnalysisReport:
        """
        Run rules over the session.

        Args:
            rules: Rules to run (defaults to the rules enabled in the config)

        Returns:
            AnalysisReport with diagnostics, per-target failures and corpus warnings
        """
        rules = self.create_rules() if rules is None else list(rules)
        report = AnalysisReport()
        needs_siblings = [rule.RULE_ID for rule in rules if rule.requires_siblings]
        if self.index.is_empty and needs_siblings:
            log.warning(SIBLINGS_UNAVAILABLE, rules=needs_siblings, hint="no operation or fragment documents were loaded")
            report.warnings.append(SIBLINGS_UNAVAILABLE)

        for rule in rules:
            log.debug("rule_started", rule=rule.RULE_ID)
            for target in rule.targets(self):
                try:
                    report.diagnostics.extend(rule.check_target(self, target))
                except Exception as e:
                    log.exception("rule_failed", rule=rule.RULE_ID, target=rule.target_name(target))
                    report.failures.append(
                        DocumentFailure(
                            rule_id=rule.RULE_ID,
                            target=rule.target_name(target),
                            source_path=rule.target_path(target),
                            error=str(e),
                        )
                    )
        log.info("analysis_finished", diagnostics=len(report.diagnostics), failures=len(report.failures))
        return report
