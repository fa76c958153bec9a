"""
Used-field analysis.

Computes which schema fields are selected anywhere in the corpus. The
result is corpus-global: a field counts as used when any operation or
fragment selects it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

import structlog
from graphql import GraphQLSchema

from .corpus_index import CorpusIndex
from .type_binder import TypeBinder

log = structlog.get_logger()


class UsedFieldIndex(Mapping[str, frozenset[str]]):
    """Immutable mapping of type name to the names of its used fields."""

    def __init__(self, used: Mapping[str, Iterable[str]] | None = None):
        self._used: dict[str, frozenset[str]] = {
            type_name: frozenset(field_names) for type_name, field_names in (used or {}).items() if field_names
        }

    def __getitem__(self, type_name: str) -> frozenset[str]:
        return self._used[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._used)

    def __len__(self) -> int:
        return len(self._used)

    def __repr__(self) -> str:
        return f"UsedFieldIndex({self.as_dict()!r})"

    def is_used(self, type_name: str, field_name: str) -> bool:
        return field_name in self._used.get(type_name, ())

    def fields_of(self, type_name: str) -> frozenset[str]:
        return self._used.get(type_name, frozenset())

    @property
    def type_names(self) -> frozenset[str]:
        return frozenset(self._used)

    def as_dict(self) -> dict[str, list[str]]:
        """Sorted, JSON-friendly copy of the index."""
        return {type_name: sorted(self._used[type_name]) for type_name in sorted(self._used)}


def compute_used_fields(schema: GraphQLSchema, index: CorpusIndex) -> UsedFieldIndex:
    """
    Record every (parent type, field) pair selected in the corpus.

    Fields that do not bind to the schema are not recorded.

    Args:
        schema: The schema selections are bound against
        index: The whole corpus (all operations and fragments)

    Returns:
        UsedFieldIndex for this schema and corpus
    """
    binder = TypeBinder(schema)
    used: dict[str, set[str]] = {}
    selections = 0

    for document in index.get_documents():
        for bound in binder.bind_fields(document):
            used.setdefault(bound.parent_type.name, set()).add(bound.name)
            selections += 1

    log.debug("used_fields_computed", documents=len(index), selections=selections, types=len(used))
    return UsedFieldIndex(used)
