from __future__ import annotations

from pathlib import Path

import pytest

from graphql_corpus_analysis.analyzer import CorpusIndex
from graphql_corpus_analysis.documents import load_documents, load_schema, parse_source, schema_from_sdl

TEST_DATA = Path(__file__).parent / "test_data"

SCHEMA_SDL = (TEST_DATA / "schema.graphql").read_text()


@pytest.fixture
def schema():
    return schema_from_sdl(SCHEMA_SDL, "schema.graphql")


@pytest.fixture
def project_schema():
    return load_schema(TEST_DATA / "schema.graphql")


@pytest.fixture
def project_documents():
    documents, errors = load_documents(["operations/*.graphql"], TEST_DATA)
    assert errors == []
    return documents


@pytest.fixture
def project_index(project_documents):
    return CorpusIndex.build(project_documents)


def make_index(*sources: str) -> CorpusIndex:
    """Build an index from inline document texts, one file per text."""
    return CorpusIndex.build(parse_source(text, f"doc{i}.graphql") for i, text in enumerate(sources))


@pytest.fixture
def index_of():
    return make_index
