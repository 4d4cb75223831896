# src/notemap/snapshot.py
"""
Versioned snapshot format for the engine state.

A snapshot is a plain, JSON-compatible dict (so any store can persist it):

    {
      "format":   "notemap-snapshot",
      "version":  1,
      "terms":    [term, ...],                                   # prefix index, traversal order
      "postings": [{"term": t, "entries": [{"doc": d, "freq": n}, ...]}, ...],
      "documents":[{"doc": d, "text": text}, ...],
      "graph":    [{"term": t, "edges": [{"to": u, "weight": w}, ...]}, ...],
      "uploads":  [doc, ...]
    }

Ordering is part of the format: replaying terms in traversal order rebuilds
the same trie child order, and per-vertex edge lists keep neighbor order, so
every query answers identically after a round-trip.
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from .trie import PrefixIndex
from .DB.index import DocumentIndex
from .graph import TopicGraph
from .models import Edge, Posting

SNAPSHOT_FORMAT = "notemap-snapshot"
SNAPSHOT_VERSION = 1

Snapshot = Dict[str, Any]
State = Tuple[PrefixIndex, DocumentIndex, TopicGraph, List[str]]


def export_state(prefix: PrefixIndex, docs: DocumentIndex,
                 graph: TopicGraph, uploads: List[str]) -> Snapshot:
    return {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "terms": prefix.terms(),
        "postings": [
            {"term": term, "entries": [{"doc": p.doc_id, "freq": p.frequency} for p in entries]}
            for term, entries in docs.iter_postings()
        ],
        "documents": [{"doc": d, "text": text} for d, text in docs.iter_contents()],
        "graph": [
            {"term": term, "edges": [{"to": e.destination, "weight": e.weight} for e in edges]}
            for term, edges in graph.iter_adjacency()
        ],
        "uploads": list(uploads),
    }


def validate_snapshot(snap: Any) -> None:
    """Raise ValueError unless snap looks like a snapshot this version can read."""
    if not isinstance(snap, dict):
        raise ValueError("snapshot must be a mapping")
    if snap.get("format") != SNAPSHOT_FORMAT:
        raise ValueError(f"unknown snapshot format: {snap.get('format')!r}")
    version = snap.get("version")
    if not isinstance(version, int) or version < 1 or version > SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version!r}")
    for key in ("terms", "postings", "documents", "graph", "uploads"):
        if not isinstance(snap.get(key, []), list):
            raise ValueError(f"snapshot field {key!r} must be a list")


def import_state(snap: Snapshot) -> State:
    """
    Build fresh structures from a snapshot. Nothing existing is touched, so a
    caller can swap the result in only once the whole import succeeded.
    """
    validate_snapshot(snap)
    try:
        prefix = PrefixIndex()
        for term in snap.get("terms", []):
            prefix.insert(str(term))

        docs = DocumentIndex()
        for rec in snap.get("postings", []):
            entries = [Posting(str(e["doc"]), int(e["freq"])) for e in rec["entries"]]
            if any(p.frequency < 1 for p in entries):
                raise ValueError(f"non-positive frequency under {rec['term']!r}")
            docs.load_postings(str(rec["term"]), entries)
        for rec in snap.get("documents", []):
            docs.store_document_text(str(rec["doc"]), str(rec["text"]))

        graph = TopicGraph()
        graph.set_adjacency(
            (str(rec["term"]), [Edge(str(e["to"]), int(e["weight"])) for e in rec["edges"]])
            for rec in snap.get("graph", [])
        )

        uploads = [str(d) for d in snap.get("uploads", [])]
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed snapshot: {e!r}") from e
    return prefix, docs, graph, uploads
