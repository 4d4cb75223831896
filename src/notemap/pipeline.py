from __future__ import annotations
from typing import Iterable, List, Sequence

from .trie import PrefixIndex
from .DB.index import DocumentIndex
from .graph import TopicGraph
from . import config as CFG


def _distinct(terms: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for t in terms:
        if t not in seen:
            seen.add(t)
            out.append(t)
    return out


class IngestionPipeline:
    """
    Feeds one tokenized document into the three index structures.

    The pipeline holds references to structures owned by the Engine; it keeps
    no state of its own besides the uploaded-documents list it appends to.
    """
    def __init__(self, prefix: PrefixIndex, docs: DocumentIndex,
                 graph: TopicGraph, uploads: List[str]) -> None:
        self.prefix = prefix
        self.docs = docs
        self.graph = graph
        self.uploads = uploads

    def ingest(self, doc_id: str, terms: Sequence[str],
               sentence_groups: Iterable[Sequence[str]], text: str) -> None:
        # 1) content store (last write wins on re-upload)
        self.docs.store_document_text(doc_id, text)

        # 2) prefix index + keyword postings
        for term in terms:
            if len(term) >= CFG.MIN_TERM_LENGTH:
                self.prefix.insert(term)
                self.docs.record_occurrence(term, doc_id)

        # 3) co-occurrence graph, one batch per sentence
        for group in sentence_groups:
            self.add_cooccurrences(group)

        # 4) upload log (duplicates allowed)
        self.uploads.append(doc_id)

    def add_cooccurrences(self, group: Sequence[str], window: int | None = None) -> None:
        """
        Every term of the sentence becomes a vertex; every pair of distinct
        terms in it gets +1. With a window N, a term only pairs with the next
        N-1 distinct terms of the sentence.
        """
        window = CFG.COOCCURRENCE_WINDOW if window is None else window
        distinct = _distinct(group)
        for t in distinct:
            self.graph.add_vertex(t)
        n = len(distinct)
        for i in range(n):
            stop = n if not window else min(n, i + window)
            for j in range(i + 1, stop):
                self.graph.bump_edge(distinct[i], distinct[j])
