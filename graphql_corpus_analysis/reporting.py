"""
Rendering analysis reports.

Diagnostics hold message ids and data; the rule message templates and
the report layout are jinja2 templates rendered here.
"""

from __future__ import annotations

import json
from pathlib import Path

import jinja2

from .rules import RULES, Diagnostic
from .session import AnalysisReport

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    lstrip_blocks=True,
    trim_blocks=True,
    keep_trailing_newline=True,
)

WARNING_MESSAGES = {
    "siblings_unavailable": "No operation or fragment documents were loaded; cross-document rules ran on an empty corpus",
}


def render_message(diagnostic: Diagnostic) -> str:
    """Render the message of a diagnostic from its rule's template."""
    rule = RULES.get(diagnostic.rule_id)
    template = rule.MESSAGES.get(diagnostic.message_id) if rule else None
    if template is None:
        return diagnostic.message_id
    return _env.from_string(template).render(**diagnostic.data)


def render_suggestions(diagnostic: Diagnostic) -> list[str]:
    rule = RULES.get(diagnostic.rule_id)
    rendered = []
    for suggestion in diagnostic.suggestions:
        template = rule.SUGGESTIONS.get(suggestion.desc_id) if rule else None
        rendered.append(_env.from_string(template).render(**suggestion.data) if template else suggestion.desc_id)
    return rendered


def render_text(report: AnalysisReport) -> str:
    """Render a report as human-readable text."""
    diagnostics = [
        {
            "location": str(d.location) if d.location else "",
            "severity": d.severity.value,
            "message": render_message(d),
            "rule_id": d.rule_id,
            "suggestions": render_suggestions(d),
        }
        for d in report.diagnostics
    ]
    warnings = [WARNING_MESSAGES.get(w, w) for w in report.warnings]
    template = _env.get_template("report.txt.jinja2")
    return template.render(diagnostics=diagnostics, failures=report.failures, warnings=warnings)


def render_json(report: AnalysisReport) -> str:
    """Render a report as JSON, with rendered messages added to each diagnostic."""
    data = report.to_dict()
    for item, diagnostic in zip(data["diagnostics"], report.diagnostics):
        item["message"] = render_message(diagnostic)
    return json.dumps(data, indent=2)
