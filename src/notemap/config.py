from __future__ import annotations
import os

# search / ranking
TOP_K: int = 5

# relatedness (BFS over the topic graph)
RELATED_LIMIT: int = 6
RELATED_DEPTH: int = 2

# clustering
CLUSTER_MIN_WEIGHT: int = 2

# learning path synthesis
LEARNING_PATH_TOPICS: int = 8
LEARNING_PATH_FANOUT: int = 3     # strongest unvisited neighbors pushed per step
MIN_LEARNING_PATH: int = 3        # below this the CLI reports "insufficient connections"

# terms shorter than this never reach the prefix/keyword index
MIN_TERM_LENGTH: int = 3

# snippets
SNIPPET_CONTEXT_WORDS: int = 8
SNIPPET_MAX_CHARS: int = 200

# note files
NOTE_EXTS = (".txt", ".md")
ENCODING: str = "utf-8"
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

# /* ~~~ co-occurrence window: None = every pair of distinct terms in a sentence,
#        N = each term pairs only with the next N-1 distinct terms ~~~ */
COOCCURRENCE_WINDOW: int | None = None

# persistence (DSN understood by notemap.DB.api.make_store)
DEFAULT_STORE: str = os.environ.get("NOTEMAP_STORE", "json:///search_data.json")

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "as", "is", "was", "are", "were", "be", "been",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "this", "that", "these", "those",
    "it", "its", "they", "them", "their", "what", "which", "who", "whom",
    "when", "where", "why", "how", "all", "any", "both", "each", "few",
    "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "can", "just", "now",
})
