"""
Notemap: note indexing and topic discovery

Ingests free-text notes, builds a searchable keyword index and a prefix trie,
infers topic relationships from word co-occurrence inside sentences, and
derives study aids from them:

- ranked keyword search with snippets
- autocomplete
- related topics, topic clusters
- learning paths and mind maps

Everything lives in one Engine instance, in memory; snapshots can be saved
to and loaded from JSON or SQLite stores.

Example Usage:
    from notemap import Engine

    eng = Engine()
    eng.ingest("graphs.txt", "Dijkstra finds shortest paths. Dijkstra uses a priority queue.")
    eng.search("dijkstra")
    eng.related_topics("dijkstra")
    eng.learning_path("dijkstra")
"""

# src/notemap/__init__.py
from .engine import Engine  # re-export
from .models import SearchResult, RelatedTopic, MindMap, UploadResult

__version__ = "1.0.0"
__all__ = ["Engine", "SearchResult", "RelatedTopic", "MindMap", "UploadResult"]
