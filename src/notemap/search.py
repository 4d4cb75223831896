from __future__ import annotations
from typing import List, Optional

from .DB.index import DocumentIndex, NOT_AVAILABLE
from .heap import select_top_k
from .models import SearchResult
from .normalize import normalize_term, extract_snippet
from . import config as CFG


def rank_postings(term: str, docs: DocumentIndex, top_k: Optional[int] = None) -> List[SearchResult]:
    """
    /* ~~~ postings for one term -> SearchResult candidates (relevance = frequency)
           -> RankedSelector -> best first. top_k=None keeps every document. ~~~ */
    """
    postings = docs.get_postings(term)
    if not postings:
        return []
    candidates = [SearchResult(doc_id=p.doc_id, frequency=p.frequency) for p in postings]
    k = len(candidates) if top_k is None else top_k
    return select_top_k(candidates, k)


def snippet_for(docs: DocumentIndex, doc_id: str, term: str,
                context_words: int = CFG.SNIPPET_CONTEXT_WORDS) -> str:
    if not docs.has_document_text(doc_id):
        return NOT_AVAILABLE
    return extract_snippet(docs.get_document_text(doc_id), term, context_words)


def search_query(query: str, docs: DocumentIndex, *, top_k: Optional[int] = CFG.TOP_K,
                 with_snippets: bool = True) -> List[SearchResult]:
    """Normalize the user's term, rank its documents, attach a snippet to each hit."""
    term = normalize_term(query)
    if not term:
        return []
    results = rank_postings(term, docs, top_k)
    if with_snippets:
        for r in results:
            r.snippet = snippet_for(docs, r.doc_id, term)
    return results
