# src/e2e/test_ingestion_pipeline.py
from notemap.DB.index import DocumentIndex
from notemap.graph import TopicGraph
from notemap.pipeline import IngestionPipeline
from notemap.trie import PrefixIndex


def _pipeline() -> IngestionPipeline:
    return IngestionPipeline(PrefixIndex(), DocumentIndex(), TopicGraph(), [])


def test_repeated_terms_bump_frequency_not_pairs():
    p = _pipeline()
    p.ingest("n.txt", ["alpha", "alpha", "beta"], [["alpha", "alpha", "beta"]], "alpha alpha beta")
    [posting] = p.docs.get_postings("alpha")
    assert (posting.doc_id, posting.frequency) == ("n.txt", 2)
    # duplicates inside a sentence count once for co-occurrence
    assert p.graph.edge_weight("alpha", "beta") == 1
    assert p.uploads == ["n.txt"]
    assert p.prefix.autocomplete("al") == ["alpha"]


def test_every_distinct_pair_in_a_sentence():
    p = _pipeline()
    p.add_cooccurrences(["aaa", "bbb", "ccc", "ddd"])
    assert p.graph.edge_count() == 6


def test_window_limits_pairing():
    p = _pipeline()
    p.add_cooccurrences(["aaa", "bbb", "ccc"], window=2)
    assert p.graph.edge_weight("aaa", "bbb") == 1
    assert p.graph.edge_weight("bbb", "ccc") == 1
    assert p.graph.edge_weight("aaa", "ccc") == 0


def test_single_term_sentence_still_becomes_a_vertex():
    p = _pipeline()
    p.add_cooccurrences(["solo"])
    assert "solo" in p.graph
    assert p.graph.neighbors("solo") == []


def test_reupload_overwrites_text_and_duplicates_upload_log():
    p = _pipeline()
    p.ingest("n.txt", ["alpha"], [["alpha"]], "alpha")
    p.ingest("n.txt", ["alpha"], [["alpha"]], "alpha again")
    assert p.docs.get_document_text("n.txt") == "alpha again"
    assert p.docs.get_postings("alpha")[0].frequency == 2
    assert p.uploads == ["n.txt", "n.txt"]
