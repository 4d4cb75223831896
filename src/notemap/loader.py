"""
Note file collaborator: locating and reading note files from disk.

The engine never opens files itself; it calls read_document() and treats any
OSError/UnicodeDecodeError raised here as a reportable, non-fatal upload failure.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

from . import config as CFG


def read_document(path: str | os.PathLike) -> str:
    """Whole file as text. Raises OSError when unreadable, UnicodeDecodeError on bad bytes."""
    with open(path, "r", encoding=CFG.ENCODING) as f:
        return f.read()


def doc_id_for(path: str | os.PathLike) -> str:
    """Document ids are the source name exactly as the user supplied it."""
    return os.fspath(path)


def iter_note_files(roots: Iterable[str]) -> List[Path]:
    """
    Every note file (NOTE_EXTS) under the given roots, sorted for a stable
    upload order. A root that is itself a file is returned as-is.
    """
    files: List[Path] = []
    for root in roots:
        base = Path(root)
        if base.is_file():
            files.append(base)
            continue
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = [d for d in dirnames if d not in CFG.EXCLUDE_DIRS]
            for fn in filenames:
                if fn.lower().endswith(CFG.NOTE_EXTS):
                    files.append(Path(dirpath) / fn)
    files.sort()
    return files
