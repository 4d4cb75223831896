from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass
class _Node:
    children: Dict[str, "_Node"] = field(default_factory=dict)
    term: Optional[str] = None      # set iff the path from the root spells a complete term


class PrefixIndex:
    """
    Character trie over indexed terms, used for autocomplete.
    Nodes are created lazily on insert and only ever dropped all at once by clear().
    Child order is insertion order, so traversal order is deterministic.
    """
    def __init__(self) -> None:
        self._root = _Node()
        self._size = 0

    # -------- Build-time API --------
    def insert(self, term: str) -> None:
        node = self._root
        for ch in term:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = _Node()
            node = nxt
        if node.term is None:
            self._size += 1
        node.term = term

    def clear(self) -> None:
        # dropping the root releases the whole subtree
        self._root = _Node()
        self._size = 0

    # -------- Query --------
    def contains(self, term: str) -> bool:
        node = self._find(term)
        return node is not None and node.term is not None

    def autocomplete(self, prefix: str) -> List[str]:
        """Every indexed term starting with prefix (pre-order); [] if the prefix path is missing."""
        node = self._find(prefix)
        if node is None:
            return []
        return list(self._walk(node))

    def terms(self) -> List[str]:
        return list(self._walk(self._root))

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and self.contains(term)

    def __len__(self) -> int:
        return self._size

    # -------- internals --------
    def _find(self, path: str) -> Optional[_Node]:
        node = self._root
        for ch in path:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    @staticmethod
    def _walk(start: _Node) -> Iterator[str]:
        # iterative pre-order, children visited in insertion order
        stack = [start]
        while stack:
            node = stack.pop()
            if node.term is not None:
                yield node.term
            stack.extend(reversed(list(node.children.values())))
