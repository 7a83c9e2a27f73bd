# doublegraph/scripts/run_scaling_sweep.py
from __future__ import annotations

import json
import logging
import math
import os
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from doublegraph.analysis.arrangement import arrangement_cost, random_arrangement_cost
from doublegraph.analysis.ensembles import EnsembleConfig, random_adjacency
from doublegraph.core.double_graph import DoubleGraph

logger = logging.getLogger(__name__)


@dataclass
class SweepConfig:
    n_values: List[int] = field(default_factory=lambda: [25, 50, 100, 200])
    seeds_per_n: int = 10
    mean_degree: float = 3.0
    mutual_prob: float = 0.5
    baseline_samples: int = 16


def _mkdir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _mean(xs: List[float]) -> float:
    return sum(xs) / len(xs)


def _stderr(xs: List[float]) -> float:
    if len(xs) < 2:
        return 0.0
    m = _mean(xs)
    v = sum((x - m) ** 2 for x in xs) / (len(xs) - 1)
    return math.sqrt(v / len(xs))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    out_dir = os.path.join("results", "scaling_sweep")
    _mkdir(out_dir)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_jsonl = os.path.join(out_dir, f"sweep_{stamp}.jsonl")
    out_summary = os.path.join(out_dir, f"sweep_{stamp}.summary.json")

    cfg = SweepConfig()
    rows: List[Dict[str, Any]] = []

    for n in cfg.n_values:
        # tree edges already give mean degree ~2
        edge_prob = max(0.0, min(1.0, (cfg.mean_degree - 2.0) / max(1, n - 1)))
        for s in range(cfg.seeds_per_n):
            ens = EnsembleConfig(n_vertices=n, edge_prob=edge_prob, mutual_prob=cfg.mutual_prob, connected=True, seed=s)
            g = DoubleGraph(random_adjacency(ens))

            t0 = time.perf_counter()
            order = g.linearise()
            elapsed = time.perf_counter() - t0

            cost = arrangement_cost(g, order)
            baseline = random_arrangement_cost(g, samples=cfg.baseline_samples, seed=s)
            row = {
                "N": n,
                "seed": s,
                "n_single": g.single_edges.num_edges(),
                "n_double": g.double_edges.num_edges(),
                "cost": cost,
                "random_cost": baseline,
                "ratio": cost / baseline if baseline > 0 else None,
                "seconds": elapsed,
            }
            rows.append(row)
            with open(out_jsonl, "a", encoding="utf-8") as f:
                f.write(json.dumps(row) + "\n")
        logger.info(f"N={n}: {cfg.seeds_per_n} graphs linearised")

    summary: Dict[str, Any] = {
        "timestamp": stamp,
        "sweep_config": asdict(cfg),
        "per_N": {},
    }

    for n in cfg.n_values:
        subset = [r for r in rows if r["N"] == n]
        ratios = [r["ratio"] for r in subset if isinstance(r["ratio"], (int, float))]
        secs = [r["seconds"] for r in subset]
        summary["per_N"][str(n)] = {
            "n": len(subset),
            "ratio_mean": _mean(ratios) if ratios else None,
            "ratio_stderr": _stderr(ratios) if ratios else None,
            "seconds_mean": _mean(secs) if secs else None,
        }

    with open(out_summary, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)

    print(json.dumps(summary, indent=2))
    print(f"Saved JSONL: {out_jsonl}")
    print(f"Saved summary: {out_summary}")


if __name__ == "__main__":
    main()
