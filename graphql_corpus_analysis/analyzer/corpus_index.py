"""
Corpus index.

Partitions every definition found in the project's documents into
operations and fragments, and looks fragments up by name.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from graphql import DefinitionNode, DocumentNode, FragmentDefinitionNode, OperationDefinitionNode

from ..documents.nodes import CorpusDocument, SourceDocument, location_of
from ..errors import UnclassifiableDocumentError

log = structlog.get_logger()

CorpusInput = SourceDocument | DocumentNode | DefinitionNode | CorpusDocument


def classify(definition: DefinitionNode, source_path: str = "") -> CorpusDocument:
    """
    Classify a single definition as an operation or a fragment.

    Raises:
        UnclassifiableDocumentError: For any other kind of definition
    """
    if isinstance(definition, (OperationDefinitionNode, FragmentDefinitionNode)):
        return CorpusDocument.from_node(definition, source_path)
    location = location_of(definition, source_path)
    raise UnclassifiableDocumentError(definition.kind, str(location) if location else source_path)


def _iter_corpus_documents(items: Iterable[CorpusInput]) -> Iterable[CorpusDocument]:
    for item in items:
        if isinstance(item, CorpusDocument):
            yield item
        elif isinstance(item, SourceDocument):
            for definition in item.document.definitions:
                yield classify(definition, item.path)
        elif isinstance(item, DocumentNode):
            for definition in item.definitions:
                yield classify(definition)
        else:
            yield classify(item)


class CorpusIndex:
    """Read-only index of the operations and fragments in a corpus."""

    def __init__(self, documents: Iterable[CorpusDocument] = ()):
        self._operations: list[CorpusDocument] = []
        self._fragments: list[CorpusDocument] = []
        self._fragments_by_name: dict[str, CorpusDocument] = {}

        for document in documents:
            if document.is_operation:
                self._operations.append(document)
                continue
            name = document.name
            previous = self._fragments_by_name.get(name)
            if previous is not None:
                log.warning(
                    "duplicate_fragment",
                    fragment=name,
                    previous=previous.source_path,
                    current=document.source_path,
                )
            self._fragments.append(document)
            self._fragments_by_name[name] = document

    @classmethod
    def build(cls, documents: Iterable[CorpusInput]) -> CorpusIndex:
        """
        Build an index from documents.

        Args:
            documents: Source documents, document nodes, definition nodes or
                already classified corpus documents, in corpus order

        Raises:
            UnclassifiableDocumentError: If a definition is neither an operation nor a fragment
        """
        index = cls(_iter_corpus_documents(documents))
        log.debug("corpus_indexed", operations=len(index._operations), fragments=len(index._fragments))
        return index

    def get_operations(self) -> tuple[CorpusDocument, ...]:
        return tuple(self._operations)

    def get_fragments(self) -> tuple[CorpusDocument, ...]:
        return tuple(self._fragments)

    def get_fragment_by_name(self, name: str) -> CorpusDocument | None:
        """Get a fragment by name. The last fragment with a duplicated name wins."""
        return self._fragments_by_name.get(name)

    def get_documents(self) -> tuple[CorpusDocument, ...]:
        """All operations followed by all fragments."""
        return tuple(self._operations) + tuple(self._fragments)

    @property
    def fragment_names(self) -> frozenset[str]:
        return frozenset(self._fragments_by_name)

    @property
    def is_empty(self) -> bool:
        return not self._operations and not self._fragments

    def __len__(self) -> int:
        return len(self._operations) + len(self._fragments)
