# src/notemap/DB/memory_store.py
from __future__ import annotations
import copy
from typing import Any, Dict, Optional


class MemoryStore:
    """Keeps a private deep copy of the last snapshot (useful for tests or ephemeral runs)."""
    def __init__(self) -> None:
        self._snapshot: Optional[Dict[str, Any]] = None

    def save(self, snapshot: Dict[str, Any]) -> None:
        self._snapshot = copy.deepcopy(snapshot)

    def load(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._snapshot)

    def exists(self) -> bool:
        return self._snapshot is not None

    def close(self) -> None:
        self._snapshot = None
