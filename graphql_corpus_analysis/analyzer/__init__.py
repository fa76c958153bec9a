"""
Analyzer module.

Contains type binding, the corpus index, fragment resolution and the
used-field and depth analyses built on top of them.
"""

from __future__ import annotations

from .cache import UsedFieldCache
from .corpus_index import CorpusIndex, classify
from .depth import DepthAnalyzer, DepthViolation, build_depth_document, check_depth
from .fragment_resolver import (
    FragmentClosure,
    FragmentUsageResolver,
    MissingFragment,
    resolve_fragment_closure,
)
from .type_binder import BoundField, TypeBinder, TypeContext, TypeFrame, bind, root_type_for
from .used_fields import UsedFieldIndex, compute_used_fields

__all__ = [
    "BoundField",
    "TypeBinder",
    "TypeContext",
    "TypeFrame",
    "bind",
    "root_type_for",
    "CorpusIndex",
    "classify",
    "FragmentClosure",
    "FragmentUsageResolver",
    "MissingFragment",
    "resolve_fragment_closure",
    "UsedFieldIndex",
    "compute_used_fields",
    "UsedFieldCache",
    "DepthAnalyzer",
    "DepthViolation",
    "build_depth_document",
    "check_depth",
]
