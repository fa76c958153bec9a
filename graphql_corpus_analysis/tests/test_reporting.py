from __future__ import annotations

import json

from graphql_corpus_analysis.config import DEPTH_RULE, UNUSED_FIELDS_RULE
from graphql_corpus_analysis.documents.nodes import SourceLocation
from graphql_corpus_analysis.reporting import render_json, render_message, render_suggestions, render_text
from graphql_corpus_analysis.rules import Diagnostic, Suggestion
from graphql_corpus_analysis.session import SIBLINGS_UNAVAILABLE, AnalysisReport, DocumentFailure

UNUSED = Diagnostic(
    rule_id=UNUSED_FIELDS_RULE,
    message_id=UNUSED_FIELDS_RULE,
    data={"fieldName": "email", "typeName": "User"},
    location=SourceLocation(path="schema.graphql", line=38, column=3),
    suggestions=(Suggestion(desc_id="remove-field", data={"fieldName": "email"}),),
)

TOO_DEEP = Diagnostic(
    rule_id=DEPTH_RULE,
    message_id=DEPTH_RULE,
    data={"rootName": "ViewerAlbums", "maxDepth": 2, "depth": 3, "fieldName": "photos"},
    location=SourceLocation(path="operations/fragments.graphql", line=4, column=3),
)


def test_render_message():
    assert render_message(UNUSED) == 'Field "email" is unused'
    assert render_message(TOO_DEEP) == "'ViewerAlbums' exceeds maximum operation depth of 2"


def test_unknown_message_id_falls_back_to_id():
    assert render_message(Diagnostic(rule_id="custom", message_id="something-odd")) == "something-odd"


def test_render_suggestions():
    assert render_suggestions(UNUSED) == ["Remove `email` field"]
    assert render_suggestions(TOO_DEEP) == []


def test_render_text():
    report = AnalysisReport(
        diagnostics=[UNUSED, TOO_DEEP],
        failures=[DocumentFailure(rule_id=DEPTH_RULE, target="Broken", source_path="broken.graphql", error="boom")],
    )
    lines = render_text(report).splitlines()
    assert lines[0] == 'schema.graphql:38:3  error  Field "email" is unused  [no-unused-fields]'
    assert lines[1] == "    suggestion: Remove `email` field"
    assert lines[2].startswith("operations/fragments.graphql:4:3  error  'ViewerAlbums' exceeds")
    assert lines[3] == "broken.graphql  failure  selection-set-depth could not check Broken: boom"
    assert lines[-1] == "2 problems, 1 failure"


def test_render_text_empty_report_with_warning():
    text = render_text(AnalysisReport(warnings=[SIBLINGS_UNAVAILABLE]))
    assert text.splitlines()[0].startswith("warning: No operation or fragment documents")
    assert text.splitlines()[-1] == "0 problems, 0 failures"


def test_render_json():
    data = json.loads(render_json(AnalysisReport(diagnostics=[TOO_DEEP])))
    (item,) = data["diagnostics"]
    assert item["message"] == "'ViewerAlbums' exceeds maximum operation depth of 2"
    assert item["location"] == {"path": "operations/fragments.graphql", "line": 4, "column": 3}
    assert item["severity"] == "error"
    assert data["failures"] == []
