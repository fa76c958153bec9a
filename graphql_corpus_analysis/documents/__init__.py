"""
Documents module.

Contains the corpus document model and the loaders that read schemas and
operation files from disk.
"""

from __future__ import annotations

from .loader import load_documents, load_schema, parse_source, schema_from_introspection, schema_from_sdl
from .nodes import (
    CorpusDocument,
    DocumentKind,
    SelectionKind,
    SourceDocument,
    SourceLocation,
    location_of,
    selection_kind,
)

__all__ = [
    "CorpusDocument",
    "DocumentKind",
    "SelectionKind",
    "SourceDocument",
    "SourceLocation",
    "location_of",
    "selection_kind",
    "load_documents",
    "load_schema",
    "parse_source",
    "schema_from_sdl",
    "schema_from_introspection",
]
