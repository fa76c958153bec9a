from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from graphql_corpus_analysis.graphql_corpus_analysis import graphql_corpus_analysis

TEST_DATA = Path(__file__).parent / "test_data"
SCHEMA = str(TEST_DATA / "schema.graphql")
OPERATIONS = str(TEST_DATA / "operations")


def invoke(*args):
    return CliRunner().invoke(graphql_corpus_analysis, list(args))


def test_clean_project():
    result = invoke("--schema", SCHEMA, OPERATIONS)
    assert result.exit_code == 0, result.output
    assert "0 problems, 0 failures" in result.output


def test_max_depth():
    result = invoke("--schema", SCHEMA, "--max-depth", "2", OPERATIONS)
    assert result.exit_code == 1
    assert "'ViewerAlbums' exceeds maximum operation depth of 2" in result.output
    assert "fragments.graphql:" in result.output
    assert "1 problem, 0 failures" in result.output


def test_ignore():
    result = invoke("--schema", SCHEMA, "--max-depth", "2", "--ignore", "albums", OPERATIONS)
    assert result.exit_code == 0, result.output


def test_json_format():
    result = invoke("--schema", SCHEMA, "--max-depth", "2", "--format", "json", OPERATIONS)
    assert result.exit_code == 1
    data = json.loads(result.output)
    (diagnostic,) = data["diagnostics"]
    assert diagnostic["data"]["fieldName"] == "photos"
    assert diagnostic["rule_id"] == "selection-set-depth"


def test_unused_fields():
    result = invoke("--schema", SCHEMA, "--unused-fields", OPERATIONS)
    assert result.exit_code == 1
    assert 'Field "caption" is unused' in result.output
    assert "9 problems" in result.output


def test_config_file(tmp_path):
    (tmp_path / "analysis.json").write_text(
        json.dumps(
            {
                "schema": SCHEMA,
                "documents": [str(TEST_DATA / "operations" / "*.graphql")],
                "rules": {"selection-set-depth": {"maxDepth": 1}},
            }
        )
    )
    result = invoke("--config", str(tmp_path / "analysis.json"))
    assert result.exit_code == 1
    assert "'ViewerAlbums' exceeds maximum operation depth of 1" in result.output

    # Command line options win over the file
    result = invoke("--config", str(tmp_path / "analysis.json"), "--max-depth", "3")
    assert result.exit_code == 0, result.output


def test_config_paths_stay_relative_to_config_file(tmp_path, monkeypatch):
    project = tmp_path / "proj"
    project.mkdir()
    (project / "schema.graphql").write_text((TEST_DATA / "schema.graphql").read_text())
    (project / "analysis.json").write_text(json.dumps({"schema": "schema.graphql"}))
    operations = tmp_path / "ops"
    operations.mkdir()
    (operations / "q.graphql").write_text("query Q { viewer { albums { id } } }")
    monkeypatch.chdir(tmp_path)

    result = invoke("-c", "proj/analysis.json", "ops/*.graphql")
    assert result.exit_code == 0, result.output
    assert "0 problems, 0 failures" in result.output

    result = invoke("-c", "proj/analysis.json", "--max-depth", "1", "ops/*.graphql")
    assert result.exit_code == 1
    assert "q.graphql:1:20" in result.output


def test_missing_schema():
    result = invoke(OPERATIONS)
    assert result.exit_code == 2
    assert "A schema is required" in result.output


def test_invalid_max_depth():
    result = invoke("--schema", SCHEMA, "--max-depth", "-1", OPERATIONS)
    assert result.exit_code == 2
    assert "maxDepth" in result.output


def test_unclassifiable_document():
    result = invoke("--schema", SCHEMA, str(TEST_DATA / "broken" / "type_definition.graphql"))
    assert result.exit_code == 2
    assert "Cannot classify" in result.output


def test_parse_errors_fail_the_run():
    result = invoke("--schema", SCHEMA, OPERATIONS, str(TEST_DATA / "broken" / "syntax_error.graphql"))
    assert result.exit_code == 1
    assert "syntax_error.graphql" in result.output


def test_empty_corpus_warning():
    result = invoke("--schema", SCHEMA)
    assert result.exit_code == 0
    assert "warning: No operation or fragment documents" in result.output
