# src/e2e/test_integration_alpha_beta.py
from notemap import Engine, RelatedTopic


def _engine() -> Engine:
    eng = Engine(store="memory://")
    eng.ingest("a", "alpha beta gamma.")
    eng.ingest("b", "alpha beta delta.")
    return eng


def test_search_finds_both_documents():
    eng = _engine()
    rows = eng.search("alpha")
    assert sorted((r.doc_id, r.frequency) for r in rows) == [("a", 1), ("b", 1)]
    assert rows[0].snippet.startswith('"alpha')


def test_related_puts_strongest_first():
    rel = _engine().related_topics("alpha", 1)
    assert rel[0] == RelatedTopic("beta", 2)
    assert sorted(r.term for r in rel[1:]) == ["delta", "gamma"]
    assert all(r.weight == 1 for r in rel[1:])


def test_single_cluster_at_weight_one():
    clusters = _engine().clusters(1)
    assert len(clusters) == 1
    assert set(clusters[0]) == {"alpha", "beta", "gamma", "delta"}


def test_learning_path_and_mind_map():
    eng = _engine()
    assert eng.learning_path("Alpha") == ["alpha", "beta", "gamma", "delta"]
    mm = eng.mind_map("alpha")
    assert mm.render().splitlines()[:2] == ["alpha", "  |- beta [weight: 2]"]


def test_autocomplete_and_stats():
    eng = _engine()
    assert eng.autocomplete("") == ["alpha", "beta", "gamma", "delta"]
    assert eng.autocomplete("Al") == ["alpha"]
    assert eng.autocomplete("zzz") == []
    s = eng.stats()
    assert (s["totalFiles"], s["totalKeywords"], s["totalTopics"], s["totalConnections"]) == (2, 4, 4, 5)


def test_unknown_term_queries_are_empty():
    eng = _engine()
    assert eng.search("omega") == []
    assert eng.search("   ") == []
    assert eng.related_topics("omega") == []
    assert eng.learning_path("omega") == []
    assert not eng.has_topic("omega")


def test_search_ranks_by_frequency_and_limits():
    eng = _engine()
    eng.ingest("c", "alpha alpha alpha.")
    rows = eng.search("alpha", top_k=2)
    assert [r.doc_id for r in rows] == ["c", "a"]
    assert rows[0].frequency == 3


def test_reset_empties_everything():
    eng = _engine()
    eng.reset()
    assert eng.stats()["totalFiles"] == 0
    assert eng.autocomplete("") == []
