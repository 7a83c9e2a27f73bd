# doublegraph/scripts/run_arrangement_plot.py
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Arc

from doublegraph.analysis.arrangement import DOUBLE, arrangement_report, edge_spans, positions
from doublegraph.core.double_graph import DoubleGraph
from doublegraph.core.graph import Vertex
from doublegraph.scripts.run_linearisation_demo import demo_adjacency


def plot_arcs(graph: DoubleGraph, order: Sequence[Vertex], title: str):
    """
    Arc diagram: vertices on the x axis in the given order, single edges as
    arcs above the axis, double edges as (thicker) arcs below it.
    """
    pos = positions(order)
    fig, ax = plt.subplots(figsize=(max(6.0, 0.6 * len(order)), 4.0))
    for u, v, kind, span in edge_spans(graph, order):
        if span == 0:
            continue
        centre = (pos[u] + pos[v]) / 2.0
        if kind == DOUBLE:
            arc = Arc((centre, 0.0), span, span, theta1=180, theta2=360, color="tab:red", lw=2.0)
        else:
            arc = Arc((centre, 0.0), span, span, theta1=0, theta2=180, color="tab:blue", lw=1.0)
        ax.add_patch(arc)

    ax.scatter(range(len(order)), [0.0] * len(order), color="black", zorder=3)
    for i, v in enumerate(order):
        ax.annotate(str(v), (i, 0.0), textcoords="offset points", xytext=(0, 6), ha="center")

    half = max(1.0, len(order) / 2.0)
    ax.set_xlim(-1, len(order))
    ax.set_ylim(-half, half)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def main() -> None:
    outdir = Path("results") / "arrangement_plots"
    outdir.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")

    g = DoubleGraph(demo_adjacency())
    order = g.linearise()
    report = arrangement_report(g, order)

    fig = plot_arcs(g, order, title=f"Linearised demo graph (cost {int(report['cost'])})")
    png_path = outdir / f"arcs_{stamp}.png"
    fig.savefig(png_path, dpi=160)
    plt.close(fig)

    print(json.dumps({"linear_order": [str(v) for v in order], "report": report}, indent=2))
    print("Saved:", str(png_path))


if __name__ == "__main__":
    main()
