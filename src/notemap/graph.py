"""
Topic graph: undirected, weighted co-occurrence graph over terms.

Every edge lives in both endpoints' adjacency lists with the same weight.
Weights start at 1 and are only ever bumped. A vertex may exist without
edges (added through add_vertex).

Queries:
    related_topics(term, max_depth)  bounded breadth-first relatedness
    find_clusters(min_weight)        connected components over strong edges
    learning_path(start, max_topics) greedy weight/depth-prioritized walk
    to_dot(start, max_depth)         Graphviz export of a neighborhood

All queries are total: unknown terms give empty results.
"""

from __future__ import annotations
import heapq
import itertools
from collections import deque
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import Edge, RelatedTopic
from . import config as CFG


class TopicGraph:
    def __init__(self) -> None:
        self._adj: Dict[str, List[Edge]] = {}
        # term -> destination -> Edge (same objects as in _adj, for O(1) bumps)
        self._lookup: Dict[str, Dict[str, Edge]] = {}

    # ------------- mutation -------------

    def add_vertex(self, term: str) -> None:
        if term not in self._adj:
            self._adj[term] = []
            self._lookup[term] = {}

    def add_edge(self, a: str, b: str) -> None:
        """Strengthen a<->b by one, creating the weight-1 edge pair if new. Self-loops are ignored."""
        if a == b:
            return
        self.add_vertex(a)
        self.add_vertex(b)
        ab = self._lookup[a].get(b)
        if ab is not None:
            ab.weight += 1
            self._lookup[b][a].weight += 1
            return
        ab, ba = Edge(b, 1), Edge(a, 1)
        self._adj[a].append(ab)
        self._lookup[a][b] = ab
        self._adj[b].append(ba)
        self._lookup[b][a] = ba

    bump_edge = add_edge

    def clear(self) -> None:
        self._adj.clear()
        self._lookup.clear()

    # ------------- inspection -------------

    def contains(self, term: str) -> bool:
        return term in self._adj

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._adj)

    def edge_weight(self, a: str, b: str) -> int:
        """Weight of a<->b, 0 when there is no such edge."""
        e = self._lookup.get(a, {}).get(b)
        return e.weight if e is not None else 0

    def neighbors(self, term: str) -> List[Edge]:
        return [Edge(e.destination, e.weight) for e in self._adj.get(term, ())]

    def topics_view(self) -> List[str]:
        return list(self._adj)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adj.values()) // 2

    # ------------- queries -------------

    def related_topics(self, term: str, max_depth: int = CFG.RELATED_DEPTH,
                       limit: int = CFG.RELATED_LIMIT) -> List[RelatedTopic]:
        """
        Breadth-first walk out to max_depth hops. A term is reported once, when
        it is first discovered, with the weight of the edge that discovered it
        (so a 2-hop term carries its edge weight to the 1-hop parent, not to the
        query term). Sorted by weight descending, ties in discovery order.
        """
        if term not in self._adj or max_depth <= 0:
            return []
        related: List[RelatedTopic] = []
        visited: Set[str] = {term}
        queue = deque([(term, 0)])
        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for edge in self._adj[current]:
                if edge.destination in visited:
                    continue
                visited.add(edge.destination)
                related.append(RelatedTopic(edge.destination, edge.weight))
                queue.append((edge.destination, depth + 1))
        related.sort(key=lambda r: r.weight, reverse=True)
        return related[:limit]

    def find_clusters(self, min_weight: int = CFG.CLUSTER_MIN_WEIGHT) -> List[List[str]]:
        """
        Connected components using only edges with weight >= min_weight.
        Singletons are dropped; largest clusters first. One visited set is
        shared across the whole partition so every vertex lands in at most one.
        """
        visited: Set[str] = set()
        clusters: List[List[str]] = []
        for topic in self.topics_view():
            if topic in visited:
                continue
            cluster = self._dfs_cluster(topic, visited, min_weight)
            if len(cluster) > 1:
                clusters.append(cluster)
        clusters.sort(key=len, reverse=True)
        return clusters

    def learning_path(self, start: str, max_topics: int = 10,
                      fanout: int = CFG.LEARNING_PATH_FANOUT) -> List[str]:
        """
        Greedy study order starting at ``start``.

        The frontier is a heap ordered by edge weight (strongest first), then
        by depth (shallowest first), then by push order. Each popped term is
        appended to the path and its ``fanout`` strongest unvisited neighbors
        are pushed at depth + 1. Terms are marked visited when pushed, so none
        is pushed twice and the path never repeats. No backtracking.
        """
        if start not in self._adj or max_topics <= 0:
            return []
        seq = itertools.count()
        frontier: List[Tuple[float, int, int, str]] = [(float("-inf"), 0, next(seq), start)]
        visited: Set[str] = {start}
        path: List[str] = []
        while frontier and len(path) < max_topics:
            _, depth, _, term = heapq.heappop(frontier)
            path.append(term)
            candidates = [e for e in self._adj[term] if e.destination not in visited]
            candidates.sort(key=lambda e: e.weight, reverse=True)
            for edge in candidates[:fanout]:
                visited.add(edge.destination)
                heapq.heappush(frontier, (-edge.weight, depth + 1, next(seq), edge.destination))
        return path

    # ------------- export -------------

    def to_dot(self, start: str, max_depth: int = 2, name: str = "MindMap") -> str:
        """
        Graphviz description of the neighborhood of ``start``: nodes are the
        terms reached within max_depth hops, each undirected edge is written
        once (from the side that reached it first) and labeled with its weight.
        """
        lines = [f"digraph {name} {{", "  node [shape=box, style=rounded];"]
        if start not in self._adj:
            lines.append("}")
            return "\n".join(lines)

        lines.append(f"  {_quote(start)} [style=\"rounded,filled\", fillcolor=lightblue];")
        visited: Set[str] = {start}
        reached: List[str] = []
        emitted: Set[frozenset] = set()
        edges_out: List[str] = []
        queue = deque([(start, 0)])
        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for edge in self._adj[current]:
                pair = frozenset((current, edge.destination))
                if pair not in emitted:
                    emitted.add(pair)
                    edges_out.append(
                        f"  {_quote(current)} -> {_quote(edge.destination)} [label=\"{edge.weight}\"];"
                    )
                if edge.destination not in visited:
                    visited.add(edge.destination)
                    reached.append(edge.destination)
                    queue.append((edge.destination, depth + 1))
        for term in reached:
            lines.append(f"  {_quote(term)};")
        lines.extend(edges_out)
        lines.append("}")
        return "\n".join(lines)

    def render_mind_map(self, start: str, max_depth: int = 2) -> str:
        """Indented text tree of the breadth-first discovery tree rooted at start."""
        if start not in self._adj:
            return ""
        children: Dict[str, List[Edge]] = {}
        visited: Set[str] = {start}
        queue = deque([(start, 0)])
        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for edge in self._adj[current]:
                if edge.destination not in visited:
                    visited.add(edge.destination)
                    children.setdefault(current, []).append(edge)
                    queue.append((edge.destination, depth + 1))

        out = [start]
        stack: List[Tuple[Edge, int]] = [(e, 1) for e in reversed(children.get(start, []))]
        while stack:
            edge, level = stack.pop()
            out.append(f"{'  ' * level}|- {edge.destination} [weight: {edge.weight}]")
            stack.extend((e, level + 1) for e in reversed(children.get(edge.destination, [])))
        return "\n".join(out)

    # ------------- snapshot helpers -------------

    def iter_adjacency(self) -> Iterable[Tuple[str, List[Edge]]]:
        for term, edges in self._adj.items():
            yield term, [Edge(e.destination, e.weight) for e in edges]

    def set_adjacency(self, adjacency: Iterable[Tuple[str, Iterable[Edge]]]) -> None:
        """
        Replace the graph with the given per-vertex adjacency lists, keeping
        their order. Raises ValueError if the lists are not a valid undirected
        graph (self-loop, weight < 1, duplicate or asymmetric edge).
        """
        adj: Dict[str, List[Edge]] = {}
        lookup: Dict[str, Dict[str, Edge]] = {}
        for term, edges in adjacency:
            if term in adj:
                raise ValueError(f"duplicate vertex {term!r}")
            adj[term] = []
            lookup[term] = {}
            for e in edges:
                weight = int(e.weight)
                if e.destination == term:
                    raise ValueError(f"self-loop on {term!r}")
                if weight < 1:
                    raise ValueError(f"edge {term!r}->{e.destination!r} has weight {weight}")
                if e.destination in lookup[term]:
                    raise ValueError(f"duplicate edge {term!r}->{e.destination!r}")
                edge = Edge(e.destination, weight)
                adj[term].append(edge)
                lookup[term][e.destination] = edge
        for term, by_dest in lookup.items():
            for dest, edge in by_dest.items():
                back: Optional[Edge] = lookup.get(dest, {}).get(term)
                if back is None or back.weight != edge.weight:
                    raise ValueError(f"edge {term!r}<->{dest!r} is not symmetric")
        self._adj = adj
        self._lookup = lookup

    # ------------- internals -------------

    def _dfs_cluster(self, start: str, visited: Set[str], min_weight: int) -> List[str]:
        cluster: List[str] = []
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            cluster.append(node)
            strong = [e.destination for e in self._adj[node]
                      if e.weight >= min_weight and e.destination not in visited]
            stack.extend(reversed(strong))
        return cluster


def _quote(term: str) -> str:
    return '"' + term.replace("\\", "\\\\").replace('"', '\\"') + '"'
