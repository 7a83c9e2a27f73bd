# doublegraph/core/double_graph.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Set
import logging

from doublegraph.core.errors import DisconnectedGraphError, MalformedAdjacencyError
from doublegraph.core.graph import Adjacency, UndirectedGraph, Vertex, sorted_vertices
from doublegraph.core import linearisation

logger = logging.getLogger(__name__)


class DoubleGraph:
    """
    Graph whose edges come in two kinds, derived from a directed adjacency
    relation:

      - double edges: u -> v and v -> u both present (mutual),
      - single edges: only one of the two directions present.

    Both kinds are kept as UndirectedGraphs over the same vertex set.
    Connectivity queries look at their union; the components are computed on
    first use and cached.
    """

    def __init__(self, adjacency: Optional[Mapping[Vertex, Iterable[Vertex]]] = None) -> None:
        singles: Adjacency = {}
        doubles: Adjacency = {}
        if adjacency is not None:
            targets: Dict[Vertex, Set[Vertex]] = {v: set(adjs) for v, adjs in adjacency.items()}
            for v, adjs in targets.items():
                singles[v] = set()
                doubles[v] = set()
                for a in adjs:
                    if a not in targets:
                        raise MalformedAdjacencyError(
                            f"Vertex {v!r} lists neighbour {a!r}, which is not among the vertices"
                        )
                    if v in targets[a]:
                        doubles[v].add(a)
                    else:
                        singles[v].add(a)
        self._assemble(UndirectedGraph(singles), UndirectedGraph(doubles))

    @classmethod
    def from_graphs(cls, single_edges: UndirectedGraph, double_edges: UndirectedGraph) -> "DoubleGraph":
        """
        Compose a double graph from already classified edges. Both graphs must
        share one vertex set and have no edge in common.
        """
        if single_edges.vertices() != double_edges.vertices():
            raise MalformedAdjacencyError("Single-edge and double-edge graphs must have the same vertices")
        for v, adjs in single_edges.adjacency.items():
            shared = adjs & double_edges.neighbours(v)
            if shared:
                raise MalformedAdjacencyError(
                    f"Edges {v!r}-{sorted_vertices(shared)!r} are both single and double"
                )
        g = cls()
        g._assemble(single_edges.copy(), double_edges.copy())
        return g

    # --- accessors ---

    @property
    def single_edges(self) -> UndirectedGraph:
        return self._single

    @property
    def double_edges(self) -> UndirectedGraph:
        return self._double

    def vertices(self) -> Set[Vertex]:
        return self._single.vertices()

    def num_vertices(self) -> int:
        return self._single.num_vertices()

    # --- connected components ---

    def vertices_of_ccs(self) -> List[Set[Vertex]]:
        if self._ccs is None:
            self._ccs = (self._single + self._double).vertices_of_ccs()
        return [set(cc) for cc in self._ccs]

    def num_ccs(self) -> int:
        return len(self.vertices_of_ccs())

    def is_connected(self) -> bool:
        return self.num_ccs() == 1

    def ccs(self) -> List["DoubleGraph"]:
        """
        One sub-graph per connected component. Each already knows it is
        connected, so is_connected() on it does no further work.
        """
        out = []
        for cc in self.vertices_of_ccs():
            g = self.make_subgraph(cc)
            g._ccs = [g.vertices()]
            out.append(g)
        return out

    # --- derived graphs ---

    def make_subgraph(self, vertices: Iterable[Vertex]) -> "DoubleGraph":
        keep = set(vertices)
        return DoubleGraph.from_graphs(self._single.make_subgraph(keep), self._double.make_subgraph(keep))

    def copy(self) -> "DoubleGraph":
        g = DoubleGraph.from_graphs(self._single, self._double)
        if self._ccs is not None:
            g._ccs = [set(cc) for cc in self._ccs]
        return g

    # --- linearisation ---

    def linearise(self) -> List[Vertex]:
        """
        Order the vertices on a line so that single edges (weight 1) and double
        edges (weight 2) stay short. Heuristic; a result and its reversal are
        equally good.

        Raises DisconnectedGraphError unless the graph has exactly one
        connected component.
        """
        if not self.is_connected():
            raise DisconnectedGraphError(
                f"The graph must be connected, found {self.num_ccs()} components. "
                "Split the graph with ccs() first."
            )
        order = linearisation.linearise(self._single, self._double)
        logger.debug("Linearised %d vertices", len(order))
        return order

    # --- operators ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoubleGraph):
            return NotImplemented
        return self._single == other._single and self._double == other._double

    def __repr__(self) -> str:
        return (
            f"DoubleGraph(n_vertices={self.num_vertices()}, "
            f"n_single={self._single.num_edges()}, n_double={self._double.num_edges()})"
        )

    def __str__(self) -> str:
        lines = []
        doubles = self._double.adjacency
        for v, adjs in self._single.adjacency.items():
            single_txt = ", ".join(str(a) for a in sorted_vertices(adjs))
            double_txt = ", ".join(str(a) for a in sorted_vertices(doubles[v]))
            lines.append(f"{str(v):>4}   -->single edges: {single_txt:<16}-->double edges: {double_txt}")
        return "\n".join(lines)

    # --- helpers ---

    def _assemble(self, single_edges: UndirectedGraph, double_edges: UndirectedGraph) -> None:
        self._single = single_edges
        self._double = double_edges
        # union components are computed on first use
        self._ccs: Optional[List[Set[Vertex]]] = None


def linearise_adjacency(adjacency: Mapping[Vertex, Iterable[Vertex]]) -> List[Vertex]:
    """
    Linearise every connected component of the double graph built from
    adjacency and concatenate the results in component order.
    """
    out: List[Vertex] = []
    for cc in DoubleGraph(adjacency).ccs():
        out.extend(cc.linearise())
    return out
