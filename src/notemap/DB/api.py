# src/notemap/DB/api.py
from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

from .json_store import JsonStore
from .sqlite_store import SQLiteStore
from .memory_store import MemoryStore

Snapshot = Dict[str, Any]


class SnapshotStore(Protocol):
    """Where engine snapshots live. Stores move dicts; they never interpret them."""
    def save(self, snapshot: Snapshot) -> None: ...
    def load(self) -> Optional[Snapshot]: ...     # None when nothing was saved yet
    def exists(self) -> bool: ...
    def close(self) -> None: ...


def make_store(dsn: str) -> SnapshotStore:
    """
    Factory:
      - json:///path/to/state.json     -> JsonStore
      - sqlite:///path/to/state.sqlite -> SQLiteStore
      - memory://                      -> MemoryStore (process-local)
    """
    if dsn.startswith("json:///"):
        return JsonStore(dsn.removeprefix("json:///"))
    if dsn.startswith("sqlite:///"):
        return SQLiteStore(dsn.removeprefix("sqlite:///"))
    if dsn.startswith("memory://"):
        return MemoryStore()
    raise ValueError(f"Unsupported store DSN: {dsn}")
