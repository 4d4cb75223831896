from __future__ import annotations
import argparse
import threading
from flask import Flask, request, jsonify, Response
from notemap.engine import Engine
from notemap import config as CFG

app = Flask(__name__)
_engine: Engine | None = None
# one lock around the whole engine: Flask serves requests on several threads
_lock = threading.Lock()


def _error(msg: str, status: int):
    return jsonify({"error": msg}), status


def _ready() -> bool:
    return _engine is not None

# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "ready": _ready()})

@app.get("/api/stats")
def api_stats():
    if not _ready():
        return _error("Search engine not initialized", 503)
    with _lock:
        return jsonify(_engine.stats())  # type: ignore

@app.get("/api/search")
def api_search():
    if not _ready():
        return _error("Search engine not initialized", 503)
    q = request.args.get("q", "", type=str).strip()
    k = request.args.get("k", CFG.TOP_K, type=int)
    if not q:
        return jsonify({"query": q, "total": 0, "results": [], "related": []})
    with _lock:
        rows = _engine.search(q, top_k=None)  # type: ignore
        related = _engine.related_topics(q)  # type: ignore
    return jsonify({
        "query": q,
        "total": len(rows),
        "results": [{"filename": r.doc_id, "frequency": r.frequency, "snippet": r.snippet}
                    for r in rows[:max(1, k)]],
        "related": [{"topic": t.term, "weight": t.weight} for t in related],
    })

@app.get("/api/autocomplete")
def api_autocomplete():
    if not _ready():
        return _error("Search engine not initialized", 503)
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", 10, type=int)
    if not q.strip():
        return jsonify([])
    with _lock:
        return jsonify(_engine.autocomplete(q, limit=max(0, k)))  # type: ignore

@app.post("/api/upload")
def api_upload():
    if not _ready():
        return _error("Search engine not initialized", 503)
    f = request.files.get("file")
    if f is not None:
        name = f.filename or "upload.txt"
        try:
            content = f.read().decode(CFG.ENCODING)
        except UnicodeDecodeError as e:
            return _error(f"Cannot decode {name}: {e}", 400)
    else:
        body = request.get_json(silent=True) or {}
        name, content = body.get("filename"), body.get("content")
        if not isinstance(name, str) or not isinstance(content, str) or not name:
            return _error("expected multipart 'file' or JSON {filename, content}", 400)
    with _lock:
        n = _engine.ingest(name, content)  # type: ignore
    return jsonify({"ok": True, "filename": name, "keywords": n})

@app.get("/api/learning-path")
def api_learning_path():
    if not _ready():
        return _error("Search engine not initialized", 503)
    topic = request.args.get("topic", "", type=str).strip()
    max_topics = request.args.get("max", CFG.LEARNING_PATH_TOPICS, type=int)
    with _lock:
        if not topic or not _engine.has_topic(topic):  # type: ignore
            return _error(f"Topic not found: {topic!r}", 404)
        path = _engine.learning_path(topic, max_topics)  # type: ignore
    return jsonify({"topic": topic, "path": [{"order": i, "topic": t} for i, t in enumerate(path, 1)]})

@app.get("/api/mindmap")
def api_mindmap():
    if not _ready():
        return _error("Search engine not initialized", 503)
    topic = request.args.get("topic", "", type=str).strip()
    depth = request.args.get("depth", 1, type=int)
    with _lock:
        if not topic or not _engine.has_topic(topic):  # type: ignore
            return _error(f"Topic not found: {topic!r}", 404)
        mm = _engine.mind_map(topic, depth=max(1, depth))  # type: ignore
        dot = _engine.mind_map_dot(topic, depth=max(1, depth))  # type: ignore
    return jsonify({
        "center": mm.center,
        "connections": [{"topic": c.term, "weight": c.weight} for c in mm.connections],
        "dot": dot,
    })

@app.get("/api/clusters")
def api_clusters():
    if not _ready():
        return _error("Search engine not initialized", 503)
    min_weight = request.args.get("min_weight", CFG.CLUSTER_MIN_WEIGHT, type=int)
    with _lock:
        clusters = _engine.clusters(min_weight)  # type: ignore
    return jsonify({"minWeight": min_weight, "clusters": clusters})

@app.get("/api/documents")
def api_documents():
    if not _ready():
        return _error("Search engine not initialized", 503)
    with _lock:
        return jsonify(_engine.list_documents())  # type: ignore

# ---------- UI ----------
@app.get("/")
def home():
    # Minimal page over the JSON API, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Notemap • Smart Search for Notes</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Arial; }
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; margin-bottom:16px; }
h1{ font-size:20px; margin:0 0 8px 0 }
h2{ font-size:16px; margin:0 0 8px 0; color:var(--muted) }
.controls{ display:flex; gap:12px; flex-wrap:wrap }
input{ flex:1; min-width:200px; padding:10px 12px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink) }
button{ padding:10px 14px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer }
button:hover{ border-color:var(--accent) }
pre{ white-space:pre-wrap; color:var(--ink); font-family: ui-monospace, Menlo, Consolas, monospace; font-size:13px }
.tag{ display:inline-block; padding:2px 8px; margin:2px; border:1px solid var(--border); border-radius:8px; color:var(--accent) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Smart Search for Notes</h1>
      <div id="stats" class="tag">…</div>
    </div>
    <div class="card">
      <h2>Upload note</h2>
      <form id="upload" class="controls">
        <input id="file" type="file" accept=".txt,.md" />
        <button type="submit">Upload</button>
      </form>
    </div>
    <div class="card">
      <h2>Search</h2>
      <div class="controls">
        <input id="q" type="text" placeholder="keyword…" autocomplete="off" list="suggest" />
        <datalist id="suggest"></datalist>
        <button id="go">Search</button>
        <button id="path">Learning path</button>
        <button id="map">Mind map</button>
      </div>
      <pre id="out">Upload notes, then type a keyword.</pre>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const out = $("#out"), q = $("#q");
async function getJSON(url, opts){ const r = await fetch(url, opts); const d = await r.json(); if(!r.ok) throw new Error(d.error || r.status); return d; }
async function stats(){ const s = await getJSON("/api/stats"); $("#stats").textContent = `${s.totalFiles} files • ${s.totalKeywords} keywords • ${s.totalTopics} topics`; }
q.addEventListener("input", async ()=>{
  if(!q.value.trim()) return;
  const words = await getJSON(`/api/autocomplete?q=${encodeURIComponent(q.value)}&k=10`);
  $("#suggest").innerHTML = words.map(w=>`<option value="${w}">`).join("");
});
$("#go").addEventListener("click", async ()=>{
  try{
    const d = await getJSON(`/api/search?q=${encodeURIComponent(q.value)}`);
    const rows = d.results.map((r,i)=>`${i+1}. ${r.filename} (${r.frequency} mentions)\n   ${r.snippet}`);
    const rel = d.related.map(t=>`${t.topic} (${t.weight})`).join(", ");
    out.textContent = `Results for "${d.query}" (${d.total} found)\n\n${rows.join("\n") || "No results."}\n\nRelated: ${rel || "none"}`;
  }catch(e){ out.textContent = `Error: ${e.message}`; }
});
$("#path").addEventListener("click", async ()=>{
  try{
    const d = await getJSON(`/api/learning-path?topic=${encodeURIComponent(q.value)}`);
    out.textContent = `Learning path: ${d.topic}\n\n` + d.path.map(s=>` ${s.order}. ${s.topic}`).join("\n");
  }catch(e){ out.textContent = `Error: ${e.message}`; }
});
$("#map").addEventListener("click", async ()=>{
  try{
    const d = await getJSON(`/api/mindmap?topic=${encodeURIComponent(q.value)}`);
    out.textContent = d.center + "\n" + d.connections.map(c=>`  |- ${c.topic} [weight: ${c.weight}]`).join("\n");
  }catch(e){ out.textContent = `Error: ${e.message}`; }
});
$("#upload").addEventListener("submit", async (ev)=>{
  ev.preventDefault();
  const f = $("#file").files[0]; if(!f) return;
  const fd = new FormData(); fd.append("file", f);
  try{ const d = await getJSON("/api/upload", {method:"POST", body:fd}); out.textContent = `Uploaded ${d.filename}: ${d.keywords} keywords`; stats(); }
  catch(e){ out.textContent = `Upload failed: ${e.message}`; }
});
stats();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--store", default=None, help="Snapshot DSN: json:///path, sqlite:///path or memory://")
    ap.add_argument("--no-load", action="store_true")
    ap.add_argument("--notes", nargs="+", default=[], help="Note files or folders to upload on start")
    ap.add_argument("--save-on-exit", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8080)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine(store=args.store, verbose=args.verbose)
    if not args.no_load:
        _engine.load()
    if args.notes:
        _engine.upload_directory(args.notes)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        if args.save_on_exit:
            _engine.save()
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
