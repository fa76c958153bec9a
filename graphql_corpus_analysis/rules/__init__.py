"""
Rules module.

Rules consume the analyzers through an AnalysisSession and report
structured diagnostics.
"""

from __future__ import annotations

from .base import AnalysisRule, Diagnostic, Severity, Suggestion
from .selection_set_depth import SelectionSetDepthRule
from .unused_fields import UnusedFieldsRule

RULES: dict[str, type[AnalysisRule]] = {
    SelectionSetDepthRule.RULE_ID: SelectionSetDepthRule,
    UnusedFieldsRule.RULE_ID: UnusedFieldsRule,
}

__all__ = [
    "AnalysisRule",
    "Diagnostic",
    "Severity",
    "Suggestion",
    "SelectionSetDepthRule",
    "UnusedFieldsRule",
    "RULES",
]
