# doublegraph/core/graph.py
from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Deque, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Set, Tuple
import logging

from doublegraph.core.errors import MalformedAdjacencyError, VertexNotFoundError

logger = logging.getLogger(__name__)

Vertex = Hashable
Adjacency = Dict[Vertex, Set[Vertex]]


def stable_key(x: object) -> Tuple[str, str]:
    return (type(x).__name__, str(x))


def sorted_vertices(vertices: Iterable[Vertex]) -> List[Vertex]:
    """Deterministic iteration order for a set of vertices."""
    return sorted(vertices, key=stable_key)


class UndirectedGraph:
    """
    Simple undirected graph over hashable vertices.

    The adjacency relation given at construction may be asymmetric; it is
    symmetrised (u -> v implies v -> u) and every neighbour must itself be a key.
    Connected components are computed once, at construction.

    Instances are not mutated after construction: neighbour sets are frozen,
    and sub-graphs and unions are new graphs.
    """

    def __init__(self, adjacency: Optional[Mapping[Vertex, Iterable[Vertex]]] = None) -> None:
        work: Adjacency = {}
        if adjacency is not None:
            for v, adjs in adjacency.items():
                work[v] = set(adjs)
        _symmetrise(work)
        self._adj: Dict[Vertex, FrozenSet[Vertex]] = {v: frozenset(adjs) for v, adjs in work.items()}
        self._ccs: List[Set[Vertex]] = self._compute_ccs()

    # --- accessors ---

    @property
    def adjacency(self) -> Mapping[Vertex, FrozenSet[Vertex]]:
        return MappingProxyType(self._adj)

    def vertices(self) -> Set[Vertex]:
        return set(self._adj)

    def num_vertices(self) -> int:
        return len(self._adj)

    def neighbours(self, v: Vertex) -> FrozenSet[Vertex]:
        try:
            return self._adj[v]
        except KeyError as e:
            raise VertexNotFoundError(f"Vertex {v!r} is not in the graph") from e

    def degree(self, v: Vertex) -> int:
        return len(self.neighbours(v))

    def contains(self, v: Vertex) -> bool:
        return v in self._adj

    def edges(self) -> List[Tuple[Vertex, Vertex]]:
        """Every undirected edge once, as (u, v) with u seen first in key order."""
        seen: Set[Vertex] = set()
        out: List[Tuple[Vertex, Vertex]] = []
        for u, adjs in self._adj.items():
            seen.add(u)
            for v in sorted_vertices(adjs):
                if v not in seen or v == u:
                    out.append((u, v))
        return out

    def num_edges(self) -> int:
        return len(self.edges())

    # --- connected components ---

    def vertices_of_ccs(self) -> List[Set[Vertex]]:
        return [set(cc) for cc in self._ccs]

    def num_ccs(self) -> int:
        return len(self._ccs)

    def is_connected(self) -> bool:
        return len(self._ccs) == 1

    def ccs(self) -> List["UndirectedGraph"]:
        return [self.make_subgraph(cc) for cc in self._ccs]

    # --- derived graphs ---

    def make_subgraph(self, vertices: Iterable[Vertex]) -> "UndirectedGraph":
        """
        Induced sub-graph: only the given vertices and the edges with both
        endpoints among them.
        """
        keep = set(vertices)
        missing = [v for v in keep if v not in self._adj]
        if missing:
            raise VertexNotFoundError(
                f"Cannot build sub-graph, vertices not in the graph: {sorted_vertices(missing)!r}"
            )
        # preserve the parent's key order
        sub = {v: self._adj[v] & keep for v in self._adj if v in keep}
        return UndirectedGraph(sub)

    def copy(self) -> "UndirectedGraph":
        return UndirectedGraph(self._adj)

    # --- operators ---

    def __add__(self, other: "UndirectedGraph") -> "UndirectedGraph":
        if not isinstance(other, UndirectedGraph):
            return NotImplemented
        merged: Adjacency = {v: set(adjs) for v, adjs in self._adj.items()}
        for v, adjs in other._adj.items():
            merged.setdefault(v, set()).update(adjs)
        return UndirectedGraph(merged)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UndirectedGraph):
            return NotImplemented
        return self._adj == other._adj

    def __contains__(self, v: object) -> bool:
        return v in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return f"UndirectedGraph(n_vertices={len(self._adj)}, n_ccs={len(self._ccs)})"

    def __str__(self) -> str:
        lines = []
        for v, adjs in self._adj.items():
            lines.append(f"{str(v):>10}: " + ", ".join(str(a) for a in sorted_vertices(adjs)))
        return "\n".join(lines)

    # --- helpers ---

    def _compute_ccs(self) -> List[Set[Vertex]]:
        """
        Breadth-first search from every unvisited vertex, in key order.
        """
        visited: Set[Vertex] = set()
        ccs: List[Set[Vertex]] = []
        for src in self._adj:
            if src in visited:
                continue
            visited.add(src)
            comp: Set[Vertex] = {src}
            q: Deque[Vertex] = deque([src])
            while q:
                v = q.popleft()
                for w in self._adj[v]:
                    if w not in visited:
                        visited.add(w)
                        comp.add(w)
                        q.append(w)
            ccs.append(comp)
        logger.debug("Found %d connected component(s) over %d vertices", len(ccs), len(self._adj))
        return ccs


def _symmetrise(adj: Adjacency) -> None:
    for v, adjs in adj.items():
        for a in list(adjs):
            if a not in adj:
                raise MalformedAdjacencyError(
                    f"Vertex {v!r} lists neighbour {a!r}, which is not among the vertices"
                )
            adj[a].add(v)
