# doublegraph/analysis/ensembles.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Set
import random


@dataclass(frozen=True)
class EnsembleConfig:
    n_vertices: int = 16
    edge_prob: float = 0.15     # chance that a pair of vertices is linked at all
    mutual_prob: float = 0.5    # chance that a linked pair points both ways
    connected: bool = False     # seed with a random spanning tree first
    seed: int = 0


def _link(adj: Dict[int, Set[int]], u: int, v: int, rng: random.Random, mutual_prob: float) -> None:
    if rng.random() < mutual_prob:
        adj[u].add(v)
        adj[v].add(u)
    elif rng.random() < 0.5:
        adj[u].add(v)
    else:
        adj[v].add(u)


def random_adjacency(config: EnsembleConfig) -> Dict[int, Set[int]]:
    """
    Seeded random directed adjacency over vertices 0..n-1.

    Every unordered pair is linked with probability edge_prob; a linked pair is
    mutual (a double edge) with probability mutual_prob, otherwise it points one
    way picked uniformly (a single edge).

    With connected=True each vertex v > 0 is first linked to a random earlier
    vertex, so the resulting double graph has one connected component.
    """
    if config.n_vertices < 0:
        raise ValueError("n_vertices must be >= 0")
    for name in ("edge_prob", "mutual_prob"):
        p = getattr(config, name)
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"{name} must be within [0, 1], got {p}")

    rng = random.Random(config.seed)
    n = config.n_vertices
    adj: Dict[int, Set[int]] = {v: set() for v in range(n)}

    if config.connected:
        for v in range(1, n):
            _link(adj, rng.randrange(v), v, rng, config.mutual_prob)

    for u in range(n):
        for v in range(u + 1, n):
            if v in adj[u] or u in adj[v]:
                continue
            if rng.random() < config.edge_prob:
                _link(adj, u, v, rng, config.mutual_prob)
    return adj
