from __future__ import annotations
from typing import Dict, List, Iterable, Tuple

from ..models import Posting

NOT_AVAILABLE = "File content not available"


class DocumentIndex:
    """
    Inverted keyword index + document content store.

      * postings: term -> {doc_id: frequency}; a (term, doc_id) pair exists at most
        once, repeat occurrences bump its frequency.
      * contents: doc_id -> full text as uploaded (last write wins), used only for
        snippet extraction.

    Postings keep first-seen document order; ranking is the caller's job.
    """
    def __init__(self) -> None:
        self._postings: Dict[str, Dict[str, int]] = {}
        self._contents: Dict[str, str] = {}

    # ---- Build ----
    def record_occurrence(self, term: str, doc_id: str) -> None:
        docs = self._postings.setdefault(term, {})
        docs[doc_id] = docs.get(doc_id, 0) + 1

    def store_document_text(self, doc_id: str, text: str) -> None:
        self._contents[doc_id] = text

    def clear(self) -> None:
        self._postings.clear()
        self._contents.clear()

    # ---- Query ----
    def get_postings(self, term: str) -> List[Posting]:
        """Copy of the postings for term; [] if the term was never indexed."""
        docs = self._postings.get(term)
        if not docs:
            return []
        return [Posting(doc_id=d, frequency=f) for d, f in docs.items()]

    def contains_term(self, term: str) -> bool:
        return term in self._postings

    def get_document_text(self, doc_id: str) -> str:
        return self._contents.get(doc_id, NOT_AVAILABLE)

    def has_document_text(self, doc_id: str) -> bool:
        return doc_id in self._contents

    def terms(self) -> List[str]:
        return list(self._postings)

    def documents(self) -> List[str]:
        return list(self._contents)

    def __len__(self) -> int:
        return len(self._postings)

    # ---- Snapshot helpers ----
    def iter_postings(self) -> Iterable[Tuple[str, List[Posting]]]:
        for term in self._postings:
            yield term, self.get_postings(term)

    def iter_contents(self) -> Iterable[Tuple[str, str]]:
        yield from self._contents.items()

    def load_postings(self, term: str, entries: Iterable[Posting]) -> None:
        docs = self._postings.setdefault(term, {})
        for p in entries:
            docs[p.doc_id] = docs.get(p.doc_id, 0) + int(p.frequency)
