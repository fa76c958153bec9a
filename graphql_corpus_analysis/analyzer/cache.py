"""
Session-scoped cache for the used-field index.

Entries are keyed by the identity of both the schema and the corpus index
they were computed from. Each entry holds strong references to its key
objects, so their ids stay reserved for as long as the entry exists.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from graphql import GraphQLSchema

from .corpus_index import CorpusIndex
from .used_fields import UsedFieldIndex, compute_used_fields

log = structlog.get_logger()


@dataclass(frozen=True)
class _CacheEntry:
    schema: GraphQLSchema
    index: CorpusIndex
    used_fields: UsedFieldIndex


class UsedFieldCache:
    """Build-or-fetch cache of used-field indices for one analysis session."""

    def __init__(self):
        self._entries: dict[tuple[int, int], _CacheEntry] = {}
        self.builds = 0

    def get_or_build(self, schema: GraphQLSchema, index: CorpusIndex) -> UsedFieldIndex:
        """Return the index for (schema, corpus), computing it only on the first request."""
        key = (id(schema), id(index))
        entry = self._entries.get(key)
        if entry is not None and entry.schema is schema and entry.index is index:
            log.debug("used_fields_cache_hit", documents=len(index))
            return entry.used_fields

        used_fields = compute_used_fields(schema, index)
        self._entries[key] = _CacheEntry(schema=schema, index=index, used_fields=used_fields)
        self.builds += 1
        return used_fields

    def invalidate(self) -> None:
        """Drop every cached index."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[GraphQLSchema, CorpusIndex]) -> bool:
        schema, index = key
        entry = self._entries.get((id(schema), id(index)))
        return entry is not None and entry.schema is schema and entry.index is index
