# src/e2e/test_topic_graph.py
import pytest

from notemap.graph import TopicGraph
from notemap.models import Edge, RelatedTopic


def _chain() -> TopicGraph:
    g = TopicGraph()
    g.add_edge("aaa", "bbb")
    g.add_edge("aaa", "bbb")
    g.add_edge("bbb", "ccc")
    g.add_edge("ccc", "ddd")
    return g


def test_edges_are_symmetric_and_bumped():
    g = _chain()
    assert g.edge_weight("aaa", "bbb") == 2
    assert g.edge_weight("bbb", "aaa") == 2
    assert g.edge_count() == 3
    assert [e.destination for e in g.neighbors("bbb")] == ["aaa", "ccc"]


def test_self_loop_is_ignored():
    g = TopicGraph()
    g.add_edge("xyz", "xyz")
    assert len(g) == 0
    assert g.edge_weight("xyz", "xyz") == 0


def test_related_topics_respects_depth():
    g = _chain()
    assert g.related_topics("aaa", 0) == []
    assert g.related_topics("aaa", 1) == [RelatedTopic("bbb", 2)]
    assert [r.term for r in g.related_topics("aaa", 2)] == ["bbb", "ccc"]
    assert [r.term for r in g.related_topics("aaa", 3)] == ["bbb", "ccc", "ddd"]


def test_related_topics_unknown_term_is_empty():
    assert _chain().related_topics("nope", 2) == []


def test_related_topics_caps_at_six_sorted_by_weight():
    g = TopicGraph()
    for i in range(8):
        for _ in range(i + 1):
            g.add_edge("hub", f"n{i}")
    out = g.related_topics("hub", 1)
    assert len(out) == 6
    weights = [r.weight for r in out]
    assert weights == sorted(weights, reverse=True)
    assert out[0] == RelatedTopic("n7", 8)


def test_topics_view_lists_every_vertex():
    g = _chain()
    g.add_vertex("lonely")
    assert g.topics_view() == ["aaa", "bbb", "ccc", "ddd", "lonely"]
    g.topics_view().clear()
    assert len(g) == 5


def test_related_topics_reports_a_term_once_with_discovering_weight():
    g = TopicGraph()
    g.add_edge("qqq", "aaa")
    for _ in range(5):
        g.add_edge("aaa", "zzz")
    g.add_edge("qqq", "zzz")
    assert g.related_topics("qqq", 2) == [RelatedTopic("aaa", 1), RelatedTopic("zzz", 1)]


def test_clusters_partition_on_strong_edges():
    g = _chain()
    g.add_edge("eee", "fff")
    g.add_edge("eee", "fff")
    g.add_vertex("lonely")
    assert g.find_clusters(2) == [["aaa", "bbb"], ["eee", "fff"]]
    one = g.find_clusters(1)
    assert one[0] == ["aaa", "bbb", "ccc", "ddd"]
    seen = [t for cl in one for t in cl]
    assert len(seen) == len(set(seen))
    assert "lonely" not in seen


def test_learning_path_invariants():
    g = TopicGraph()
    words = [f"t{i:02d}" for i in range(20)]
    for i, a in enumerate(words):
        for b in words[i + 1:i + 4]:
            g.add_edge(a, b)
    path = g.learning_path("t05", 8)
    assert path[0] == "t05"
    assert len(path) <= 8
    assert len(path) == len(set(path))
    assert g.learning_path("missing", 8) == []
    assert g.learning_path("t05", 0) == []


def test_learning_path_prefers_heavier_edges():
    g = TopicGraph()
    g.add_edge("start", "light")
    for _ in range(3):
        g.add_edge("start", "heavy")
    assert g.learning_path("start", 5) == ["start", "heavy", "light"]


def test_learning_path_equal_weights_pop_shallower_first():
    g = TopicGraph()
    for _ in range(5):
        g.add_edge("sss", "aaa")
    for _ in range(2):
        g.add_edge("sss", "bbb")
    for _ in range(4):
        g.add_edge("aaa", "ccc")
    g.add_edge("ccc", "zzz")     # depth 3, pushed before yyy
    g.add_edge("bbb", "yyy")     # depth 2, same weight
    assert g.learning_path("sss", 10) == ["sss", "aaa", "ccc", "bbb", "yyy", "zzz"]


def test_dot_export_writes_each_edge_once():
    dot = _chain().to_dot("aaa", max_depth=2)
    assert dot.startswith("digraph MindMap {")
    assert '"aaa" [style="rounded,filled", fillcolor=lightblue];' in dot
    assert '"aaa" -> "bbb" [label="2"];' in dot
    assert '"bbb" -> "aaa"' not in dot
    assert '"ccc" -> "ddd"' not in dot     # beyond depth 2
    assert TopicGraph().to_dot("x").endswith("}")


def test_render_mind_map_is_indented_tree():
    text = _chain().render_mind_map("aaa", 2)
    assert text.splitlines() == [
        "aaa",
        "  |- bbb [weight: 2]",
        "    |- ccc [weight: 1]",
    ]


def test_set_adjacency_rejects_asymmetric_lists():
    g = TopicGraph()
    with pytest.raises(ValueError):
        g.set_adjacency([("aaa", [Edge("bbb", 2)]), ("bbb", [Edge("aaa", 1)])])
    with pytest.raises(ValueError):
        g.set_adjacency([("aaa", [Edge("aaa", 1)])])
    with pytest.raises(ValueError):
        g.set_adjacency([("aaa", [Edge("bbb", 0)]), ("bbb", [Edge("aaa", 0)])])
