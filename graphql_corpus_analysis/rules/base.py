"""
Base classes for analysis rules.

A rule turns analyzer output into diagnostics. Diagnostics carry a
message id and template data; the text itself is rendered later by
the reporting layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..documents.nodes import SourceLocation

if TYPE_CHECKING:
    from ..session import AnalysisSession


class Severity(str, Enum):
    ERROR = "error"


@dataclass(frozen=True)
class Suggestion:
    """A proposed fix, described by a template id and its data."""

    desc_id: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Diagnostic:
    """A single finding reported by a rule."""

    rule_id: str = ""
    message_id: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    location: SourceLocation | None = None
    suggestions: tuple[Suggestion, ...] = ()
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "data": dict(self.data),
            "location": self.location.to_dict() if self.location else None,
            "suggestions": [{"desc_id": s.desc_id, "data": dict(s.data)} for s in self.suggestions],
            "severity": self.severity.value,
        }


class AnalysisRule(ABC):
    """Abstract base class for rules run by an analysis session."""

    RULE_ID: str = ""

    # Message id -> jinja2 template
    MESSAGES: dict[str, str] = {}

    # Suggestion id -> jinja2 template
    SUGGESTIONS: dict[str, str] = {}

    # Needs the other documents of the corpus, not just its own target
    requires_siblings: bool = False

    def __init__(self, options: dict[str, Any] | None = None):
        self.options = dict(options or {})

    @abstractmethod
    def targets(self, session: AnalysisSession) -> Iterable[Any]:
        """Units of work the session checks one at a time."""

    @abstractmethod
    def check_target(self, session: AnalysisSession, target: Any) -> list[Diagnostic]:
        """Check a single target."""

    def target_name(self, target: Any) -> str:
        return getattr(target, "display_name", None) or getattr(target, "name", "") or str(target)

    def target_path(self, target: Any) -> str:
        return getattr(target, "source_path", "")

    def check(self, session: AnalysisSession) -> list[Diagnostic]:
        """Check every target, letting errors propagate."""
        diagnostics: list[Diagnostic] = []
        for target in self.targets(session):
            diagnostics.extend(self.check_target(session, target))
        return diagnostics
