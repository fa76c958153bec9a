"""GraphQL Corpus Analysis

Schema-aware cross-document analysis of GraphQL operations and fragments:
type binding, fragment usage resolution, corpus-wide field usage and
fragment-aware selection depth checks.
"""

__version__ = "1.0.0"

from .analyzer import (
    CorpusIndex,
    DepthAnalyzer,
    DepthViolation,
    FragmentClosure,
    FragmentUsageResolver,
    TypeBinder,
    TypeContext,
    UsedFieldCache,
    UsedFieldIndex,
    bind,
    check_depth,
    compute_used_fields,
    resolve_fragment_closure,
)
from .config import AnalysisConfig, DepthConfig, load_config
from .documents import CorpusDocument, DocumentKind, SourceLocation, load_documents, load_schema, parse_source
from .errors import AnalysisError, ConfigurationError, DocumentLoadError, SchemaLoadError, UnclassifiableDocumentError
from .session import AnalysisReport, AnalysisSession

__all__ = [
    "AnalysisSession",
    "AnalysisReport",
    "AnalysisConfig",
    "DepthConfig",
    "load_config",
    "CorpusIndex",
    "CorpusDocument",
    "DocumentKind",
    "SourceLocation",
    "TypeBinder",
    "TypeContext",
    "bind",
    "FragmentClosure",
    "FragmentUsageResolver",
    "resolve_fragment_closure",
    "UsedFieldIndex",
    "UsedFieldCache",
    "compute_used_fields",
    "DepthAnalyzer",
    "DepthViolation",
    "check_depth",
    "load_documents",
    "load_schema",
    "parse_source",
    "AnalysisError",
    "ConfigurationError",
    "DocumentLoadError",
    "SchemaLoadError",
    "UnclassifiableDocumentError",
]
