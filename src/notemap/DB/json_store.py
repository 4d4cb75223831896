from __future__ import annotations
import json
import os
from typing import Any, Dict, Optional


class JsonStore:
    """Single JSON document on disk; writes go through a temp file + os.replace."""
    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)

    def save(self, snapshot: Dict[str, Any]) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, ensure_ascii=False, indent=1)
        os.replace(tmp, self.path)

    def load(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{self.path} is not a valid snapshot: {e}") from e

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def close(self) -> None:
        pass
