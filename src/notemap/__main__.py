from __future__ import annotations
import argparse, json, os, sys
from typing import Callable, Dict

from . import config as CFG
from .engine import Engine


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"


# ---------- views (shared by one-shot flags and the menu) ----------

def show_search(eng: Engine, keyword: str, as_json: bool = False) -> None:
    rows = eng.search(keyword, top_k=CFG.TOP_K)
    related = eng.related_topics(keyword)
    if as_json:
        print(json.dumps({
            "query": keyword,
            "results": [{"filename": r.doc_id, "frequency": r.frequency, "snippet": r.snippet} for r in rows],
            "related": [{"topic": t.term, "weight": t.weight} for t in related],
        }, ensure_ascii=False, indent=2))
        return
    if not rows:
        print(f"\n[INFO] No results found for: {keyword}")
        return
    print(_c(f"\n=== Search Results: {keyword} ===", "1;37"))
    for i, r in enumerate(rows, 1):
        print(f"{i}. {r.doc_id} ({r.frequency} mentions)")
    print(f"\n--- Snippet from {rows[0].doc_id} ---\n{rows[0].snippet}")
    if related:
        print("\n--- Related topics ---")
        for t in related:
            print(f"- {t.term} (strength: {t.weight})")


def show_learning_path(eng: Engine, topic: str, as_json: bool = False) -> None:
    if not eng.has_topic(topic):
        print("\n[INFO] Topic not found. Upload notes first.")
        return
    path = eng.learning_path(topic)
    if as_json:
        print(json.dumps({"topic": topic, "path": path}, ensure_ascii=False, indent=2))
        return
    if len(path) < CFG.MIN_LEARNING_PATH:
        print("\n[INFO] Insufficient connections to build learning path.")
        return
    print(_c(f"\n=== Learning Path: {topic} ===", "1;37"))
    for i, step in enumerate(path, 1):
        print(f" {i}. {step}")
    print("\n[INFO] Suggested study order based on topic relationships")


def show_mind_map(eng: Engine, topic: str, depth: int = 1, dot_out: str | None = None) -> None:
    if not eng.has_topic(topic):
        print("\n[INFO] Topic not found. Upload notes first.")
        return
    print(_c(f"\n=== Mind Map: {topic} ===", "1;37"))
    if depth <= 1:
        print(eng.mind_map(topic).render())
    else:
        print(eng.render_mind_map(topic, depth))
    if dot_out:
        if eng.export_mind_map_dot(topic, dot_out, depth=max(depth, 1)):
            print(f"[OK] DOT written to {dot_out}")
        else:
            print(f"[ERROR] Could not write {dot_out}")


def show_clusters(eng: Engine, min_weight: int) -> None:
    clusters = eng.clusters(min_weight)
    if not clusters:
        print(f"\n[INFO] No clusters with edge weight >= {min_weight}.")
        return
    print(_c(f"\n=== Topic clusters (weight >= {min_weight}) ===", "1;37"))
    for i, cl in enumerate(clusters, 1):
        print(f"{i}. ({len(cl)}) " + ", ".join(cl))


def show_documents(eng: Engine) -> None:
    docs = eng.list_documents()
    if not docs:
        print("\n(no documents uploaded)")
        return
    for i, d in enumerate(docs, 1):
        print(f"{i}. {d}")


def upload(eng: Engine, path: str) -> None:
    res = eng.upload_note(path)
    if res.ok:
        print(f"\n[OK] Uploaded: {res.doc_id}")
        print(f"    Indexed {res.keywords} keywords in {res.paragraphs} paragraphs")
    else:
        print(f"\n[ERROR] Cannot open file: {res.doc_id} ({res.error})")


# ---------- interactive menu ----------

MENU = """
=====================================
    SMART SEARCH ENGINE
=====================================
1. Upload note
2. Search topic
3. Generate learning path
4. View mind map
5. Topic clusters
6. Autocomplete
7. List documents
8. Save & Exit
====================================="""


def run_menu(eng: Engine) -> None:
    def ask(label: str) -> str:
        return input(f"\n{label}: ").strip()

    def search() -> None:
        q = ask("Search")
        if q:
            show_search(eng, q)

    actions: Dict[str, Callable[[], None]] = {
        "1": lambda: upload(eng, ask("File path")),
        "2": search,
        "3": lambda: show_learning_path(eng, ask("Start topic")),
        "4": lambda: show_mind_map(eng, ask("Center topic")),
        "5": lambda: show_clusters(eng, CFG.CLUSTER_MIN_WEIGHT),
        "6": lambda: print(", ".join(eng.autocomplete(ask("Prefix"), limit=20)) or "(no matches)"),
        "7": lambda: show_documents(eng),
    }
    while True:
        print(MENU)
        try:
            choice = input("Choice: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            choice = "8"
        if choice == "8":
            print("\nSaving data...")
            if not eng.save():
                print(f"Warning: Could not save data to {eng.store_dsn}")
            print("Goodbye!")
            return
        action = actions.get(choice)
        if action is None:
            print("\n[ERROR] Invalid choice. Please enter 1-8.")
            continue
        try:
            action()
        except (EOFError, KeyboardInterrupt):
            print()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Note search engine (index, topics, learning paths)")
    p.add_argument("--store", default=None, help="Snapshot DSN: json:///path, sqlite:///path or memory://")
    p.add_argument("--no-load", action="store_true", help="Start empty instead of loading the store")
    p.add_argument("--notes", nargs="+", default=[], help="Note files or folders to upload on start")
    p.add_argument("--search", default=None, help="Run one search and print results")
    p.add_argument("--related", default=None, help="Print related topics of a term")
    p.add_argument("--depth", type=int, default=None, help="Depth for --related / --mindmap")
    p.add_argument("--path", default=None, help="Print a learning path from a topic")
    p.add_argument("--mindmap", default=None, help="Print the mind map of a topic")
    p.add_argument("--dot", default=None, help="With --mindmap: also write Graphviz DOT here")
    p.add_argument("--clusters", type=int, nargs="?", const=CFG.CLUSTER_MIN_WEIGHT, default=None,
                   help="Print topic clusters (optional min weight)")
    p.add_argument("--complete", default=None, help="Autocomplete a prefix")
    p.add_argument("--list", action="store_true", help="List uploaded documents")
    p.add_argument("--save", action="store_true", help="Save the store after one-shot commands")
    p.add_argument("--menu", action="store_true", help="Interactive menu after init")
    p.add_argument("--json", action="store_true", help="Emit JSON for --search / --path")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    eng = Engine(store=args.store, verbose=args.verbose)
    try:
        if not args.no_load and not eng.load():
            print("No saved data found.")
        for path in args.notes:
            if os.path.isdir(path):
                for res in eng.upload_directory([path]):
                    print(f"[{'OK' if res.ok else 'ERROR'}] {res.doc_id}")
            else:
                upload(eng, path)

        one_shot = False
        if args.search:
            show_search(eng, args.search, as_json=args.json); one_shot = True
        if args.related:
            for t in eng.related_topics(args.related, CFG.RELATED_DEPTH if args.depth is None else args.depth):
                print(f"- {t.term} (strength: {t.weight})")
            one_shot = True
        if args.path:
            show_learning_path(eng, args.path, as_json=args.json); one_shot = True
        if args.mindmap:
            show_mind_map(eng, args.mindmap, 1 if args.depth is None else args.depth, args.dot); one_shot = True
        if args.clusters is not None:
            show_clusters(eng, args.clusters); one_shot = True
        if args.complete is not None:
            print("\n".join(eng.autocomplete(args.complete)) or "(no matches)"); one_shot = True
        if args.list:
            show_documents(eng); one_shot = True

        if args.menu or not (one_shot or args.notes):
            run_menu(eng)
        elif args.save and not eng.save():
            print(f"Warning: Could not save data to {eng.store_dsn}")
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
