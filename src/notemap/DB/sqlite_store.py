# src/notemap/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
from typing import Any, Dict, Optional

# Every table carries an explicit position column: order is part of the snapshot.
_SCHEMA = """
CREATE TABLE IF NOT EXISTS meta (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS terms (
  pos INTEGER PRIMARY KEY,
  term TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS postings (
  term_pos INTEGER NOT NULL,
  term TEXT NOT NULL,
  pos INTEGER NOT NULL,
  doc TEXT NOT NULL,
  freq INTEGER NOT NULL,
  PRIMARY KEY (term_pos, pos)
);
CREATE TABLE IF NOT EXISTS documents (
  pos INTEGER PRIMARY KEY,
  doc TEXT NOT NULL,
  text TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS vertices (
  pos INTEGER PRIMARY KEY,
  term TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS adjacency (
  vertex_pos INTEGER NOT NULL,
  pos INTEGER NOT NULL,
  dest TEXT NOT NULL,
  weight INTEGER NOT NULL,
  PRIMARY KEY (vertex_pos, pos)
);
CREATE TABLE IF NOT EXISTS uploads (
  pos INTEGER PRIMARY KEY,
  doc TEXT NOT NULL
);
"""

_TABLES = ("meta", "terms", "postings", "documents", "vertices", "adjacency", "uploads")


class SQLiteStore:
    """Relational rendition of the snapshot; save() replaces everything in one transaction."""
    def __init__(self, db_path: str) -> None:
        self.db_path = os.path.abspath(db_path)
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self.conn: Optional[sqlite3.Connection] = sqlite3.connect(self.db_path)
        self.conn.executescript(_SCHEMA)

    def _c(self) -> sqlite3.Connection:
        if self.conn is None:
            raise RuntimeError("SQLiteStore is closed")
        return self.conn

    # ---- Write ----
    def save(self, snapshot: Dict[str, Any]) -> None:
        conn = self._c()
        with conn:  # one transaction; rolls back on error
            for t in _TABLES:
                conn.execute(f"DELETE FROM {t}")
            conn.executemany(
                "INSERT INTO meta(key, value) VALUES (?,?)",
                [("format", str(snapshot["format"])), ("version", str(snapshot["version"]))],
            )
            conn.executemany(
                "INSERT INTO terms(pos, term) VALUES (?,?)",
                list(enumerate(snapshot.get("terms", []))),
            )
            conn.executemany(
                "INSERT INTO postings(term_pos, term, pos, doc, freq) VALUES (?,?,?,?,?)",
                [
                    (tp, rec["term"], p, e["doc"], int(e["freq"]))
                    for tp, rec in enumerate(snapshot.get("postings", []))
                    for p, e in enumerate(rec["entries"])
                ],
            )
            conn.executemany(
                "INSERT INTO documents(pos, doc, text) VALUES (?,?,?)",
                [(i, rec["doc"], rec["text"]) for i, rec in enumerate(snapshot.get("documents", []))],
            )
            graph = snapshot.get("graph", [])
            conn.executemany(
                "INSERT INTO vertices(pos, term) VALUES (?,?)",
                [(i, rec["term"]) for i, rec in enumerate(graph)],
            )
            conn.executemany(
                "INSERT INTO adjacency(vertex_pos, pos, dest, weight) VALUES (?,?,?,?)",
                [
                    (vp, p, e["to"], int(e["weight"]))
                    for vp, rec in enumerate(graph)
                    for p, e in enumerate(rec["edges"])
                ],
            )
            conn.executemany(
                "INSERT INTO uploads(pos, doc) VALUES (?,?)",
                list(enumerate(snapshot.get("uploads", []))),
            )

    # ---- Read ----
    def load(self) -> Optional[Dict[str, Any]]:
        conn = self._c()
        meta = dict(conn.execute("SELECT key, value FROM meta"))
        if not meta:
            return None

        terms = [t for (t,) in conn.execute("SELECT term FROM terms ORDER BY pos")]

        postings: list[Dict[str, Any]] = []
        last_tp = None
        for tp, term, doc, freq in conn.execute(
            "SELECT term_pos, term, doc, freq FROM postings ORDER BY term_pos, pos"
        ):
            if tp != last_tp:
                postings.append({"term": term, "entries": []})
                last_tp = tp
            postings[-1]["entries"].append({"doc": doc, "freq": freq})

        documents = [
            {"doc": d, "text": t}
            for d, t in conn.execute("SELECT doc, text FROM documents ORDER BY pos")
        ]

        graph = [{"term": t, "edges": []} for (t,) in conn.execute("SELECT term FROM vertices ORDER BY pos")]
        for vp, dest, weight in conn.execute(
            "SELECT vertex_pos, dest, weight FROM adjacency ORDER BY vertex_pos, pos"
        ):
            graph[vp]["edges"].append({"to": dest, "weight": weight})

        uploads = [d for (d,) in conn.execute("SELECT doc FROM uploads ORDER BY pos")]

        return {
            "format": meta.get("format"),
            "version": int(meta.get("version", 0)),
            "terms": terms,
            "postings": postings,
            "documents": documents,
            "graph": graph,
            "uploads": uploads,
        }

    def exists(self) -> bool:
        return self._c().execute("SELECT COUNT(*) FROM meta").fetchone()[0] > 0

    # ---- lifecycle ----
    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
