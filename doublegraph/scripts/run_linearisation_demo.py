# doublegraph/scripts/run_linearisation_demo.py
from __future__ import annotations

import json
import logging
from typing import Dict, Set

from doublegraph.core.double_graph import DoubleGraph, linearise_adjacency
from doublegraph.core.graph import sorted_vertices
from doublegraph.analysis.arrangement import arrangement_report, random_arrangement_cost

logger = logging.getLogger(__name__)


def demo_adjacency() -> Dict[str, Set[str]]:
    """
    Fourteen vertices: two mutual clusters {a, b, c, d} and {i, j, k, m}
    hanging off each other through single edges, plus a one-way tail
    e, f, g, h and the loose ends l, n.
    """
    return {
        "a": {"c", "i"},
        "b": {"c"},
        "c": {"a", "b", "d"},
        "d": {"c", "e", "i"},
        "e": {"h", "f", "g"},
        "f": {"h", "g"},
        "g": set(),
        "h": {"e"},
        "i": {"j", "m"},
        "j": {"i", "k", "l"},
        "k": {"j", "l", "m"},
        "l": set(),
        "m": {"k"},
        "n": {"m", "l"},
    }


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    adjacency = demo_adjacency()
    g = DoubleGraph(adjacency)
    logger.info(f"Built double graph with {g.num_vertices()} vertices")
    logger.info(str(g))

    order = linearise_adjacency(adjacency)

    data = {
        "is_connected": g.is_connected(),
        "n_ccs": g.num_ccs(),
        "ccs": [[str(v) for v in sorted_vertices(cc)] for cc in g.vertices_of_ccs()],
        "linear_order": [str(v) for v in order],
        "report": arrangement_report(g, order),
        "random_baseline_cost": random_arrangement_cost(g, samples=64, seed=0),
    }

    print(json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
