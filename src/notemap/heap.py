from __future__ import annotations
from typing import Generic, Iterable, List, Tuple, TypeVar, Callable

from .models import SearchResult

T = TypeVar("T")


class RankedSelector(Generic[T]):
    """
    Binary min-heap keyed by relevance: the root is always the weakest item kept.

    Heap property (after every push/pop): each non-root key >= its parent's key.
    Keys are (relevance, -sequence), so among equal relevance the item pushed
    later counts as weaker; get_top_k() therefore keeps insertion order for ties.
    """
    def __init__(self, key: Callable[[T], float] = lambda r: r.relevance) -> None:
        self._key = key
        self._heap: List[Tuple[Tuple[float, int], T]] = []
        self._seq = 0

    # ---- heap API ----
    def push(self, item: T) -> None:
        self._push_entry(((float(self._key(item)), -self._seq), item))
        self._seq += 1

    def _push_entry(self, entry: Tuple[Tuple[float, int], T]) -> None:
        self._heap.append(entry)
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> T:
        """Remove and return the current minimum."""
        if not self._heap:
            raise IndexError("pop from empty RankedSelector")
        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return root[1]

    def peek(self) -> T:
        if not self._heap:
            raise IndexError("peek at empty RankedSelector")
        return self._heap[0][1]

    def clear(self) -> None:
        self._heap.clear()
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    # ---- top-K ----
    def get_top_k(self, k: int) -> List[T]:
        """
        The k most relevant items, most relevant first. Does not consume self.

        Works on a bounded scratch heap of size k: every entry is offered with
        its original key, the weakest is evicted whenever the scratch heap
        overflows, then the survivors are drained (ascending) and reversed.
        Keys are unique, so the offer order does not change the result.
        """
        if k < 0:
            raise ValueError("k must be >= 0")
        if k == 0 or not self._heap:
            return []
        scratch: RankedSelector[T] = RankedSelector(self._key)
        for entry in self._heap:
            scratch._push_entry(entry)
            if len(scratch) > k:
                scratch.pop()
        out = [scratch.pop() for _ in range(len(scratch))]
        out.reverse()
        return out

    # ---- internals ----
    def _sift_up(self, i: int) -> None:
        h = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if h[i][0] < h[parent][0]:
                h[i], h[parent] = h[parent], h[i]
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        h = self._heap
        n = len(h)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            smallest = i
            if left < n and h[left][0] < h[smallest][0]:
                smallest = left
            if right < n and h[right][0] < h[smallest][0]:
                smallest = right
            if smallest == i:
                return
            h[i], h[smallest] = h[smallest], h[i]
            i = smallest


def select_top_k(candidates: Iterable[SearchResult], k: int) -> List[SearchResult]:
    """Rank search candidates by relevance and keep the best k."""
    sel: RankedSelector[SearchResult] = RankedSelector()
    for c in candidates:
        sel.push(c)
    return sel.get_top_k(k)
