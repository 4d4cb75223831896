# src/e2e/test_ranked_selector.py
import random

import pytest

from notemap.heap import RankedSelector, select_top_k
from notemap.models import SearchResult


def _hit(doc: str, freq: int) -> SearchResult:
    return SearchResult(doc_id=doc, frequency=freq)


def test_top_k_is_most_relevant_first():
    out = select_top_k([_hit("a", 1), _hit("b", 5), _hit("c", 3), _hit("d", 4)], 3)
    assert [r.doc_id for r in out] == ["b", "d", "c"]


def test_top_k_larger_than_population_returns_everything():
    out = select_top_k([_hit("a", 2), _hit("b", 1)], 10)
    assert [r.doc_id for r in out] == ["a", "b"]
    assert select_top_k([], 3) == []
    assert select_top_k([_hit("a", 1)], 0) == []


def test_ties_keep_insertion_order():
    out = select_top_k([_hit("a", 1), _hit("b", 3), _hit("c", 3), _hit("d", 2)], 2)
    assert [r.doc_id for r in out] == ["b", "c"]


def test_pop_drains_in_ascending_relevance():
    rnd = random.Random(7)
    sel: RankedSelector[SearchResult] = RankedSelector()
    values = [rnd.randint(1, 50) for _ in range(60)]
    for i, v in enumerate(values):
        sel.push(_hit(f"d{i}", v))
    assert sel.peek().frequency == min(values)
    drained = [sel.pop().frequency for _ in range(len(values))]
    assert drained == sorted(values)
    assert not sel


def test_get_top_k_does_not_consume():
    sel: RankedSelector[SearchResult] = RankedSelector()
    for i, v in enumerate([4, 9, 1]):
        sel.push(_hit(f"d{i}", v))
    assert [r.frequency for r in sel.get_top_k(2)] == [9, 4]
    assert len(sel) == 3


def test_errors():
    sel: RankedSelector[SearchResult] = RankedSelector()
    with pytest.raises(IndexError):
        sel.pop()
    with pytest.raises(ValueError):
        sel.get_top_k(-1)


def test_explicit_zero_relevance_is_kept():
    assert SearchResult("x", 5, relevance=0.0).relevance == 0.0
    assert SearchResult("x", 5).relevance == 5.0
    out = select_top_k([SearchResult("low", 9, relevance=0.0), _hit("high", 1)], 1)
    assert [r.doc_id for r in out] == ["high"]


def test_ties_survive_heap_reordering():
    values = [5, 1, 5, 1, 5, 9, 1, 5]
    out = select_top_k([_hit(f"d{i}", v) for i, v in enumerate(values)], 4)
    assert [r.doc_id for r in out] == ["d5", "d0", "d2", "d4"]
