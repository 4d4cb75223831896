"""
Text normalization collaborator.

Turns raw note text into what the index structures consume:

    tokenize(text)              -> lowercase terms, punctuation stripped
                                   (except '_' and '-'), stop words, short
                                   (<= 2 chars) and purely numeric tokens removed
    split_into_sentences(text)  -> raw sentences, terminator included, trimmed
    sentence_term_groups(text)  -> tokenize() applied to every sentence

Plus the snippet helpers the search views use. Nothing here touches engine state.
"""

from __future__ import annotations
import unicodedata
from typing import List

from . import config as CFG

_SENTENCE_END = ".!?"
_KEEP_PUNCT = {"_", "-"}


def _is_punct(ch: str) -> bool:
    return unicodedata.category(ch).startswith(("P", "S"))


def _strip_punct(word: str, keep: set[str] = _KEEP_PUNCT) -> str:
    return "".join(ch for ch in word if ch in keep or not _is_punct(ch))


def is_stop_word(word: str) -> bool:
    return word in CFG.STOP_WORDS


def is_important_word(word: str) -> bool:
    """Long enough to carry meaning and not just a number."""
    return len(word) >= CFG.MIN_TERM_LENGTH and not word.isdigit()


def tokenize(text: str) -> List[str]:
    """
    Split on whitespace and normalize each token.

    Example:
        >>> tokenize("The Graph-theory notes: BFS, DFS and 42 trees!")
        ['graph-theory', 'notes', 'bfs', 'dfs', 'trees']
    """
    tokens: List[str] = []
    for raw in text.split():
        token = _strip_punct(raw).casefold()
        if token and not is_stop_word(token) and is_important_word(token):
            tokens.append(token)
    return tokens


def split_into_sentences(text: str) -> List[str]:
    """
    Cut text after every '.', '!' or '?'. Each sentence keeps its terminator
    and is trimmed; empty pieces are dropped; a trailing unterminated piece is
    kept as the last sentence.
    """
    sentences: List[str] = []
    current: List[str] = []
    for ch in text:
        current.append(ch)
        if ch in _SENTENCE_END:
            s = "".join(current).strip()
            if s:
                sentences.append(s)
            current = []
    tail = "".join(current).strip()
    if tail:
        sentences.append(tail)
    return sentences


def sentence_term_groups(text: str) -> List[List[str]]:
    return [tokenize(s) for s in split_into_sentences(text)]


def normalize_term(query: str) -> str:
    """Normalize a single user-typed search term the same way the tokenizer does."""
    return _strip_punct(query.strip()).casefold()


def extract_snippet(content: str, keyword: str,
                    context_words: int = CFG.SNIPPET_CONTEXT_WORDS,
                    max_chars: int = CFG.SNIPPET_MAX_CHARS) -> str:
    """
    A quoted window of ``context_words`` words on each side of the first word
    that contains ``keyword`` (case-insensitive, punctuation ignored).
    Long windows are cut at ``max_chars`` and end with '...'.
    """
    words = content.split()
    needle = keyword.casefold()
    pos = -1
    if needle:
        for i, w in enumerate(words):
            if needle in _strip_punct(w.casefold(), keep=set()):
                pos = i
                break
    if pos == -1:
        return "Keyword not found in context."

    start = max(0, pos - context_words)
    end = min(len(words), pos + context_words + 1)
    snippet = "".join(w + " " for w in words[start:end])
    if len(snippet) > max_chars:
        snippet = snippet[:max_chars] + "..."
    return f'"{snippet}"'


def extract_paragraphs(content: str, min_chars: int = 10) -> List[str]:
    """Trimmed lines longer than min_chars."""
    out: List[str] = []
    for line in content.split("\n"):
        line = line.strip()
        if line and len(line) > min_chars:
            out.append(line)
    return out
