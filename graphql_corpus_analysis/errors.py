"""
Error types raised by the analysis engine.

Binding misses and missing fragment references are not errors: they are
recovered where they happen and surface as partial results instead.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every error raised by graphql_corpus_analysis."""

    pass


class ConfigurationError(AnalysisError):
    """Raised when configuration or corpus setup is invalid.

    This can happen when:
    - A config file cannot be read or is not valid JSON
    - An option has the wrong type or an out-of-range value
    - A document in the corpus cannot be classified
    """

    pass


class UnclassifiableDocumentError(ConfigurationError):
    """Raised when a corpus definition is neither an operation nor a fragment."""

    def __init__(self, kind: str, source_path: str = ""):
        self.kind = kind
        self.source_path = source_path
        where = f" in {source_path}" if source_path else ""
        super().__init__(f"Cannot classify '{kind}' definition{where}: expected an operation or a fragment")


class SchemaLoadError(AnalysisError):
    """Raised when a schema cannot be read or built."""

    pass


class DocumentLoadError(AnalysisError):
    """Raised when a document file cannot be read or parsed."""

    def __init__(self, message: str, source_path: str = ""):
        self.source_path = source_path
        super().__init__(message)
