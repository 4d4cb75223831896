# src/e2e/test_integration_snapshot_roundtrip.py
import json
from pathlib import Path

import pytest

from notemap import Engine
from notemap.snapshot import SNAPSHOT_FORMAT, SNAPSHOT_VERSION, import_state

TEXTS = {
    "graphs.txt": "Dijkstra finds shortest paths. Dijkstra uses priority queues! BFS explores graphs level by level.",
    "trees.txt": "Heaps are binary trees. Priority queues are built on heaps. Binary search trees keep order.",
    "notes.md": "Graphs and trees: trees are graphs without cycles. BFS works on trees too?",
}


def _engine(store: str = "memory://") -> Engine:
    eng = Engine(store=store)
    for doc, text in TEXTS.items():
        eng.ingest(doc, text)
    return eng


def _answers(eng: Engine) -> dict:
    out = {"complete": eng.autocomplete(""), "docs": eng.list_documents(), "stats": eng.stats()}
    for term in ("dijkstra", "trees", "priority", "bfs", "graphs", "heaps"):
        out[term] = (
            [(r.doc_id, r.frequency, r.snippet) for r in eng.search(term, top_k=None)],
            eng.related_topics(term, 2),
            eng.learning_path(term),
            eng.mind_map_dot(term),
        )
    out["clusters"] = [eng.clusters(w) for w in (1, 2, 3)]
    return out


def test_export_import_reproduces_every_query():
    src = _engine()
    dst = Engine(store="memory://")
    dst.import_state(src.export_state())
    assert _answers(dst) == _answers(src)
    assert dst.export_state() == src.export_state()


def test_snapshot_is_json_compatible_and_tagged():
    snap = _engine().export_state()
    assert snap["format"] == SNAPSHOT_FORMAT and snap["version"] == SNAPSHOT_VERSION
    assert json.loads(json.dumps(snap)) == snap


@pytest.mark.parametrize("scheme,name", [("json", "state.json"), ("sqlite", "state.sqlite")])
def test_store_roundtrip(tmp_path: Path, scheme: str, name: str):
    dsn = f"{scheme}:///{tmp_path / name}"
    src = _engine(dsn)
    assert src.save()
    src.shutdown()

    dst = Engine(store=dsn)
    assert dst.load()
    assert _answers(dst) == _answers(_engine())
    dst.shutdown()


def test_load_without_saved_data_is_false(tmp_path: Path):
    eng = Engine(store=f"json:///{tmp_path / 'nothing.json'}")
    assert not eng.load()
    eng = Engine(store=f"sqlite:///{tmp_path / 'empty.sqlite'}")
    assert not eng.load()
    eng.shutdown()


def test_corrupt_file_leaves_state_untouched(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    eng = _engine(f"json:///{bad}")
    before = eng.export_state()
    assert not eng.load()
    assert eng.export_state() == before


@pytest.mark.parametrize("mutate", [
    lambda s: s.update(format="other"),
    lambda s: s.update(version=99),
    lambda s: s.update(graph="nope"),
    lambda s: s["graph"][0]["edges"][0].update(weight=s["graph"][0]["edges"][0]["weight"] + 5),
    lambda s: s["postings"][0]["entries"][0].pop("doc"),
    lambda s: s["postings"][0]["entries"][0].update(freq=0),
])
def test_invalid_snapshot_is_rejected_atomically(mutate):
    eng = _engine()
    before = eng.export_state()
    snap = eng.export_state()
    mutate(snap)
    with pytest.raises(ValueError):
        import_state(snap)
    with pytest.raises(ValueError):
        eng.import_state(snap)
    assert eng.export_state() == before


def test_save_to_unwritable_location_is_reported(tmp_path: Path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")
    eng = _engine(f"json:///{blocker / 'sub' / 'state.json'}")
    assert eng.save() is False
    assert eng.save(f"sqlite:///{blocker / 'state.sqlite'}") is False
    assert eng.stats()["totalFiles"] == 3


def test_unsupported_dsn_is_reported():
    eng = _engine("ftp://nowhere")
    assert eng.save() is False
    assert eng.load() is False


def test_rejected_dsn_keeps_previous_store():
    eng = _engine("memory://")
    assert eng.save("ftp://nowhere") is False
    assert eng.store_dsn == "memory://"
    assert eng.save() is True
    assert eng.load() is True


@pytest.mark.parametrize("scheme,name", [("json", "s.json"), ("sqlite", "s.sqlite"), ("memory", "")])
def test_store_exists_only_after_save(tmp_path: Path, scheme: str, name: str):
    from notemap.DB import make_store
    store = make_store(f"{scheme}:///{tmp_path / name}" if name else "memory://")
    assert not store.exists()
    assert store.load() is None
    store.save(_engine().export_state())
    assert store.exists()
    store.close()
