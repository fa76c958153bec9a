"""
Unit tests for the rule objects.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from graphql import parse

from graphql_corpus_analysis.config import DEPTH_RULE, UNUSED_FIELDS_RULE
from graphql_corpus_analysis.documents import load_schema, schema_from_sdl
from graphql_corpus_analysis.documents.nodes import SourceDocument
from graphql_corpus_analysis.errors import ConfigurationError
from graphql_corpus_analysis.rules import RULES, SelectionSetDepthRule, Severity, UnusedFieldsRule
from graphql_corpus_analysis.session import AnalysisSession

TEST_DATA = Path(__file__).parent / "test_data"

SCHEMA = """type Query {
  user: User
}

type User {
  id: ID!
  name: String
  someUnusedField: String
}
"""


class TestUnusedFieldsRule(unittest.TestCase):
    def setUp(self):
        self.schema = schema_from_sdl(SCHEMA, "schema.graphql")

    def session(self, *sources):
        documents = [SourceDocument(f"q{i}.graphql", parse(text)) for i, text in enumerate(sources)]
        return AnalysisSession(self.schema, documents)

    def test_reports_unused_field(self):
        diagnostics = UnusedFieldsRule().check(self.session("{ user { id name } }"))
        self.assertEqual(len(diagnostics), 1)
        diagnostic = diagnostics[0]
        self.assertEqual(diagnostic.rule_id, UNUSED_FIELDS_RULE)
        self.assertEqual(diagnostic.message_id, UNUSED_FIELDS_RULE)
        self.assertEqual(diagnostic.data, {"fieldName": "someUnusedField", "typeName": "User"})
        self.assertEqual(diagnostic.severity, Severity.ERROR)
        self.assertEqual(diagnostic.suggestions[0].desc_id, "remove-field")

    def test_location_points_at_field_name(self):
        (diagnostic,) = UnusedFieldsRule().check(self.session("{ user { id name } }"))
        self.assertEqual(diagnostic.location.path, "schema.graphql")
        self.assertEqual((diagnostic.location.line, diagnostic.location.column), (8, 3))

    def test_all_used(self):
        diagnostics = UnusedFieldsRule().check(self.session("{ user { id } }", "fragment F on User { name someUnusedField }"))
        self.assertEqual(diagnostics, [])

    def test_unbound_selection_does_not_count_as_use(self):
        diagnostics = UnusedFieldsRule().check(self.session("{ user { id name } viewer { someUnusedField } }"))
        self.assertEqual([d.data["fieldName"] for d in diagnostics], ["someUnusedField"])

    def test_targets_skip_introspection_types(self):
        session = self.session("{ user { id } }")
        self.assertEqual([t.name for t in UnusedFieldsRule().targets(session)], ["Query", "User"])

    def test_introspection_schema_has_no_locations(self):
        from graphql import build_client_schema, introspection_from_schema

        schema = build_client_schema(introspection_from_schema(self.schema))
        session = AnalysisSession(schema, [SourceDocument("q.graphql", parse("{ user { id name } }"))])
        (diagnostic,) = UnusedFieldsRule().check(session)
        self.assertIsNone(diagnostic.location)


class TestSelectionSetDepthRule(unittest.TestCase):
    def test_default_options(self):
        rule = SelectionSetDepthRule()
        self.assertEqual(rule.analyzer.max_depth, 7)
        self.assertEqual(rule.analyzer.ignore, ())

    def test_invalid_options(self):
        with self.assertRaises(ConfigurationError):
            SelectionSetDepthRule({"maxDepth": "deep"})

    def test_reports_with_rule_data(self):
        schema = load_schema(TEST_DATA / "schema.graphql")
        session = AnalysisSession(schema, [SourceDocument("deep.graphql", parse("query deep2 { viewer { albums { title } } }"))])
        (diagnostic,) = SelectionSetDepthRule({"maxDepth": 1}).check(session)
        self.assertEqual(diagnostic.rule_id, DEPTH_RULE)
        self.assertEqual(diagnostic.data, {"rootName": "deep2", "maxDepth": 1, "depth": 2, "fieldName": "albums"})
        self.assertEqual(diagnostic.location.path, "deep.graphql")
        self.assertEqual(diagnostic.suggestions[0].desc_id, "remove-selections")

    def session(self, *texts):
        schema = load_schema(TEST_DATA / "schema.graphql")
        return AnalysisSession(schema, [SourceDocument(f"f{i}.graphql", parse(text)) for i, text in enumerate(texts)])

    def test_spread_fragment_reported_once(self):
        session = self.session("query Q { ...F }\nfragment F on Query { viewer { albums { id } } }")
        diagnostics = SelectionSetDepthRule({"maxDepth": 1}).check(session)
        self.assertEqual([(d.data["rootName"], d.data["fieldName"], str(d.location)) for d in diagnostics], [("Q", "albums", "f0.graphql:2:32")])

    def test_targets(self):
        rule = SelectionSetDepthRule()
        session = self.session(
            "query Q { viewer { ...Used } }",
            "fragment Used on Viewer { id }",
            "fragment Unused on Album { photos { url } }",
            "fragment Chained on Viewer { albums { ...Tail } }",
            "fragment Tail on Album { photos { url } }",
        )
        self.assertEqual([t.name for t in rule.targets(session)], ["Q", "Unused", "Chained"])

    def test_fragment_chain_reported_once(self):
        session = self.session("fragment A on Viewer { albums { ...B } }", "fragment B on Album { photos { url } }")
        diagnostics = SelectionSetDepthRule({"maxDepth": 1}).check(session)
        self.assertEqual([(d.data["rootName"], d.data["fieldName"]) for d in diagnostics], [("A", "photos")])

    def test_fragment_cycle_checked_once(self):
        session = self.session("fragment A on User { avatar { id } ...B }", "fragment B on User { name ...A }")
        rule = SelectionSetDepthRule({"maxDepth": 0})
        self.assertEqual([t.name for t in rule.targets(session)], ["A"])
        self.assertEqual([d.data["fieldName"] for d in rule.check(session)], ["avatar"])

    def test_ignore_option(self):
        schema = load_schema(TEST_DATA / "schema.graphql")
        session = AnalysisSession(schema, [SourceDocument("deep.graphql", parse("query deep2 { viewer { albums { title } } }"))])
        self.assertEqual(SelectionSetDepthRule({"maxDepth": 1, "ignore": ["albums"]}).check(session), [])


def test_registry():
    assert RULES == {DEPTH_RULE: SelectionSetDepthRule, UNUSED_FIELDS_RULE: UnusedFieldsRule}
    for rule_id, rule in RULES.items():
        assert rule.RULE_ID == rule_id
        assert rule_id in rule.MESSAGES
