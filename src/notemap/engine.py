# src/notemap/engine.py
from __future__ import annotations

import os
import logging
import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from . import config as CFG
from .trie import PrefixIndex
from .graph import TopicGraph
from .DB.index import DocumentIndex
from .DB.api import SnapshotStore, make_store
from .pipeline import IngestionPipeline
from .models import MindMap, RelatedTopic, SearchResult, UploadResult
from .normalize import tokenize, sentence_term_groups, normalize_term, extract_paragraphs
from .search import search_query, snippet_for
from .snapshot import export_state, import_state
from . import loader

log = logging.getLogger(__name__)


class Engine:
    """
    The single owned aggregate behind every front end. Glues together:
      - PrefixIndex (autocomplete),
      - DocumentIndex (keyword postings + document texts),
      - TopicGraph (co-occurrence relations),
      - the uploaded-documents list,
    plus the IngestionPipeline that feeds them and a SnapshotStore for save/load.

    Public API (used by CLI/Flask):
      * ingest(doc_id, text) / upload_note(path) / upload_directory(roots)
      * autocomplete, search, snippet, related_topics, clusters, learning_path,
        mind_map, export_mind_map_dot, list_documents, stats
      * export_state() / import_state(snapshot), save(dsn) / load(dsn)
      * reset(), shutdown()

    Not thread-safe: callers that share one Engine across threads serialize
    calls with one lock around the whole instance.
    """

    # ------------- lifecycle -------------

    def __init__(self, *, store: Optional[str] = None, verbose: bool = False) -> None:
        if verbose or os.environ.get("NOTEMAP_VERBOSE") == "1":
            logging.basicConfig(level=logging.INFO)
            # basicConfig is a no-op once the root logger has handlers
            logging.getLogger("notemap").setLevel(logging.INFO)
            os.environ["NOTEMAP_VERBOSE"] = "1"
        self.store_dsn = store or CFG.DEFAULT_STORE
        self._store: Optional[SnapshotStore] = None
        self._install(PrefixIndex(), DocumentIndex(), TopicGraph(), [])

    def _install(self, prefix: PrefixIndex, docs: DocumentIndex,
                 graph: TopicGraph, uploads: List[str]) -> None:
        self.prefix = prefix
        self.docs = docs
        self.graph = graph
        self.uploads = uploads
        self.pipeline = IngestionPipeline(prefix, docs, graph, uploads)

    # /* ~~~ wipe every structure, keep the store binding ~~~ */
    def reset(self) -> None:
        self._install(PrefixIndex(), DocumentIndex(), TopicGraph(), [])
        log.info("Engine reset")

    # ------------- ingestion -------------

    def ingest(self, doc_id: str, text: str) -> int:
        """Tokenize text and feed it to every index. Returns the number of keywords found."""
        terms = tokenize(text)
        self.pipeline.ingest(doc_id, terms, sentence_term_groups(text), text)
        log.info("Ingested %s: %d keywords", doc_id, len(terms))
        return len(terms)

    def upload_note(self, path: str | os.PathLike) -> UploadResult:
        """Read a note from disk and ingest it. Read failures are reported, not raised."""
        doc_id = loader.doc_id_for(path)
        try:
            text = loader.read_document(path)
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Upload failed for %s: %s", doc_id, e)
            return UploadResult(doc_id=doc_id, ok=False, error=str(e))
        n = self.ingest(doc_id, text)
        return UploadResult(doc_id=doc_id, ok=True, keywords=n,
                            paragraphs=len(extract_paragraphs(text)))

    def upload_directory(self, roots: Iterable[str]) -> List[UploadResult]:
        roots = list(roots)
        if not roots:
            raise ValueError("upload_directory(): at least one root is required")
        log.info("Scanning %s for notes", roots)
        return [self.upload_note(p) for p in loader.iter_note_files(roots)]

    # ------------- query -------------

    def autocomplete(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        hits = self.prefix.autocomplete(normalize_term(prefix))
        return hits if limit is None else hits[:max(0, limit)]

    def search(self, term: str, *, top_k: Optional[int] = CFG.TOP_K) -> List[SearchResult]:
        return search_query(term, self.docs, top_k=top_k)

    def snippet(self, doc_id: str, term: str) -> str:
        return snippet_for(self.docs, doc_id, normalize_term(term))

    def related_topics(self, term: str, depth: int = CFG.RELATED_DEPTH) -> List[RelatedTopic]:
        return self.graph.related_topics(normalize_term(term), depth)

    def clusters(self, min_weight: int = CFG.CLUSTER_MIN_WEIGHT) -> List[List[str]]:
        return self.graph.find_clusters(min_weight)

    def learning_path(self, term: str, max_topics: int = CFG.LEARNING_PATH_TOPICS) -> List[str]:
        return self.graph.learning_path(normalize_term(term), max_topics)

    def has_topic(self, term: str) -> bool:
        return self.graph.contains(normalize_term(term))

    def mind_map(self, term: str, depth: int = 1) -> MindMap:
        center = normalize_term(term)
        return MindMap(center=center, connections=self.graph.related_topics(center, depth))

    def render_mind_map(self, term: str, depth: int = 2) -> str:
        return self.graph.render_mind_map(normalize_term(term), depth)

    def mind_map_dot(self, term: str, depth: int = 2) -> str:
        return self.graph.to_dot(normalize_term(term), depth)

    def export_mind_map_dot(self, term: str, path: str, depth: int = 2) -> bool:
        """Write the DOT rendering to path. False (and a warning) if the topic is unknown or the write fails."""
        if not self.has_topic(term):
            return False
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.mind_map_dot(term, depth) + "\n")
        except OSError as e:
            log.warning("Could not write mind map to %s: %s", path, e)
            return False
        log.info("Mind map for %r written to %s", term, path)
        return True

    def list_documents(self) -> List[str]:
        return list(self.uploads)

    def stats(self) -> Dict[str, Any]:
        return {
            "totalFiles": len(self.uploads),
            "totalKeywords": len(self.docs),
            "totalTopics": len(self.graph),
            "totalConnections": self.graph.edge_count(),
            "uploadedFiles": self.list_documents(),
        }

    # ------------- snapshot / persistence -------------

    def export_state(self) -> Dict[str, Any]:
        return export_state(self.prefix, self.docs, self.graph, self.uploads)

    def import_state(self, snapshot: Dict[str, Any]) -> None:
        """Replace the whole state. Raises ValueError on a bad snapshot, leaving the engine untouched."""
        self._install(*import_state(snapshot))

    def _get_store(self, dsn: Optional[str]) -> SnapshotStore:
        if dsn is not None and dsn != self.store_dsn:
            # the old binding survives a DSN that make_store() rejects
            store = make_store(dsn)
            self.close_store()
            self._store, self.store_dsn = store, dsn
        if self._store is None:
            self._store = make_store(self.store_dsn)
        return self._store

    # /* ~~~ persist current state; failures are reported, never fatal ~~~ */
    def save(self, dsn: Optional[str] = None) -> bool:
        try:
            store = self._get_store(dsn)
            store.save(self.export_state())
        except (OSError, ValueError, RuntimeError, sqlite3.Error) as e:
            log.warning("Could not save data to %s: %s", dsn or self.store_dsn, e)
            return False
        log.info("Data saved to %s", self.store_dsn)
        return True

    # /* ~~~ restore state; False when nothing is saved or the snapshot is unreadable ~~~ */
    def load(self, dsn: Optional[str] = None) -> bool:
        try:
            store = self._get_store(dsn)
            snap = store.load() if store.exists() else None
            if snap is None:
                log.info("No saved data found at %s", self.store_dsn)
                return False
            self.import_state(snap)
        except (OSError, ValueError, RuntimeError, sqlite3.Error) as e:
            log.warning("Could not load data from %s: %s", dsn or self.store_dsn, e)
            return False
        log.info("Data loaded from %s: files=%d keywords=%d topics=%d",
                 self.store_dsn, len(self.uploads), len(self.docs), len(self.graph))
        return True

    # ------------- teardown -------------

    def close_store(self) -> None:
        if self._store is not None:
            try:
                self._store.close()
            finally:
                self._store = None

    def shutdown(self) -> None:
        try:
            self.close_store()
        finally:
            log.info("Engine shutdown complete")
