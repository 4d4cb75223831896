"""Keyword index and snapshot stores."""
from .index import DocumentIndex, NOT_AVAILABLE
from .api import SnapshotStore, make_store

__all__ = ["DocumentIndex", "NOT_AVAILABLE", "SnapshotStore", "make_store"]
