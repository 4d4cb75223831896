# src/notemap/models.py
"""
Data models for the note engine.

Small, focused containers shared by the index structures, the engine and the
presentation layers (CLI, Flask):

- Posting: one (document, frequency) pair of the keyword index.
- Edge: one weighted co-occurrence edge of the topic graph.
- SearchResult: a ranked document hit for a keyword query.
- RelatedTopic: a (term, weight) pair returned by relatedness queries.
- MindMap: a center term plus its direct connections.
- UploadResult: the outcome of ingesting one note file.

These classes do not contain business logic; the structures that own them
decide how they are created and mutated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Posting:
    """
    One entry of a term's postings list.

    Attributes
    ----------
    doc_id : str
        Identifier of the ingested document (its source name).
    frequency : int
        How many times the term occurred in that document. Only ever grows.
    """
    doc_id: str
    frequency: int = 1


@dataclass(slots=True)
class Edge:
    """Adjacency-list entry: the other endpoint and the co-occurrence weight (>= 1)."""
    destination: str
    weight: int = 1


@dataclass(slots=True)
class SearchResult:
    """
    A ranked document hit.

    ``relevance`` defaults to ``frequency``; it is the key the
    RankedSelector orders on, so alternative scorers only need to set it.
    """
    doc_id: str
    frequency: int
    relevance: Optional[float] = None
    snippet: str = ""

    def __post_init__(self) -> None:
        if self.relevance is None:
            self.relevance = float(self.frequency)


@dataclass(frozen=True, slots=True)
class RelatedTopic:
    term: str
    weight: int


@dataclass(slots=True)
class MindMap:
    center: str
    connections: List[RelatedTopic] = field(default_factory=list)

    def render(self) -> str:
        lines = [self.center]
        if not self.connections:
            lines.append("  (no strong connections found)")
        for rel in self.connections:
            lines.append(f"  |- {rel.term} [weight: {rel.weight}]")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class UploadResult:
    """
    Outcome of uploading one note.

    ``ok`` is False when the collaborator failed (unreadable file, bad
    encoding); ``error`` then holds the reason and the engine is unchanged.
    """
    doc_id: str
    ok: bool
    keywords: int = 0
    paragraphs: int = 0
    error: Optional[str] = None
