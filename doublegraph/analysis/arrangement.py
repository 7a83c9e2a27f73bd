# doublegraph/analysis/arrangement.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple
import random

from doublegraph.core.double_graph import DoubleGraph
from doublegraph.core.errors import InvalidArrangementError
from doublegraph.core.graph import Vertex, sorted_vertices

SINGLE = "single"
DOUBLE = "double"


@dataclass(frozen=True)
class ArrangementWeights:
    """Cost of one unit of span per edge kind."""
    single: int = 1
    double: int = 2

    def of(self, kind: str) -> int:
        return self.double if kind == DOUBLE else self.single


def positions(order: Sequence[Vertex]) -> Dict[Vertex, int]:
    return {v: i for i, v in enumerate(order)}


def is_permutation_of(order: Sequence[Vertex], vertices: Iterable[Vertex]) -> bool:
    expected = set(vertices)
    return len(order) == len(expected) and set(order) == expected


def same_up_to_reversal(a: Sequence[Vertex], b: Sequence[Vertex]) -> bool:
    """Orderings on a line have no preferred direction."""
    a, b = list(a), list(b)
    return a == b or a == b[::-1]


def _checked_positions(graph: DoubleGraph, order: Sequence[Vertex]) -> Dict[Vertex, int]:
    if not is_permutation_of(order, graph.vertices()):
        raise InvalidArrangementError(
            f"Ordering of {len(order)} vertices is not a permutation of the graph's "
            f"{graph.num_vertices()} vertices"
        )
    return positions(order)


def edge_spans(graph: DoubleGraph, order: Sequence[Vertex]) -> List[Tuple[Vertex, Vertex, str, int]]:
    """
    One row (u, v, kind, span) per edge, span = distance of u and v in order.
    """
    pos = _checked_positions(graph, order)
    rows: List[Tuple[Vertex, Vertex, str, int]] = []
    for kind, sub in ((SINGLE, graph.single_edges), (DOUBLE, graph.double_edges)):
        for u, v in sub.edges():
            rows.append((u, v, kind, abs(pos[u] - pos[v])))
    return rows


def arrangement_cost(
    graph: DoubleGraph,
    order: Sequence[Vertex],
    weights: ArrangementWeights = ArrangementWeights(),
) -> int:
    """
    Weighted total edge length of an ordering:

        sum over edges (u, v) of weight(kind) * |pos(u) - pos(v)|.
    """
    return sum(weights.of(kind) * span for _u, _v, kind, span in edge_spans(graph, order))


def random_arrangement_cost(
    graph: DoubleGraph,
    samples: int = 32,
    seed: int = 0,
    weights: ArrangementWeights = ArrangementWeights(),
) -> float:
    """
    Mean cost of uniformly random orderings; the baseline a heuristic should beat.
    """
    if samples <= 0:
        raise ValueError("samples must be > 0")
    rng = random.Random(seed)
    vs = sorted_vertices(graph.vertices())
    total = 0
    for _ in range(samples):
        rng.shuffle(vs)
        total += arrangement_cost(graph, vs, weights)
    return total / samples


def arrangement_report(
    graph: DoubleGraph,
    order: Sequence[Vertex],
    weights: ArrangementWeights = ArrangementWeights(),
) -> Dict[str, float]:
    """
    Summary of an ordering: cost, edge counts and mean/max span per kind.
    """
    rows = edge_spans(graph, order)
    out: Dict[str, float] = {
        "n_vertices": float(graph.num_vertices()),
        "cost": float(sum(weights.of(kind) * span for _u, _v, kind, span in rows)),
    }
    for kind in (SINGLE, DOUBLE):
        spans = [span for _u, _v, k, span in rows if k == kind]
        out[f"n_{kind}"] = float(len(spans))
        out[f"mean_{kind}_span"] = sum(spans) / len(spans) if spans else 0.0
        out[f"max_{kind}_span"] = float(max(spans)) if spans else 0.0
    return out
