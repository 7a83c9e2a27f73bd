# doublegraph/core/linearisation.py
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Tuple
import logging

from doublegraph.core.errors import DisconnectedGraphError
from doublegraph.core.graph import UndirectedGraph, Vertex, sorted_vertices

logger = logging.getLogger(__name__)

# DCC index -> number of single edges towards it
DccRow = Dict[int, int]


# ---------- Stage 1: split on double edges ----------

def split_on_double_edges(
    single_edges: UndirectedGraph,
    double_edges: UndirectedGraph,
) -> Tuple[Dict[Vertex, int], List[List[Vertex]], List[DccRow]]:
    """
    Group the vertices into double-edge-connected components (DCCs).

    Returns (vertex_to_dcc, dcc_members, dcc_adjacency):
      - vertex_to_dcc[v] is the index of v's DCC,
      - dcc_members[i] lists the vertices of DCC i in graph key order,
      - dcc_adjacency[i][j] counts the single edges between DCC i and DCC j
        (i != j).
    """
    groups = double_edges.vertices_of_ccs()
    group_of: Dict[Vertex, int] = {}
    for idx, group in enumerate(groups):
        for v in group:
            group_of[v] = idx

    vertex_to_dcc: Dict[Vertex, int] = {}
    dcc_members: List[List[Vertex]] = [[] for _ in groups]
    for v in double_edges.adjacency:
        idx = group_of[v]
        vertex_to_dcc[v] = idx
        dcc_members[idx].append(v)

    dcc_adjacency: List[DccRow] = [{} for _ in groups]
    for v, adjs in single_edges.adjacency.items():
        own = vertex_to_dcc[v]
        row = dcc_adjacency[own]
        for a in sorted_vertices(adjs):
            other = vertex_to_dcc[a]
            if other == own:
                continue
            row[other] = row.get(other, 0) + 1

    logger.debug("Split %d vertices into %d DCC(s)", len(vertex_to_dcc), len(groups))
    return vertex_to_dcc, dcc_members, dcc_adjacency


# ---------- Stage 2: order the DCCs ----------

def _row_total(row: DccRow) -> int:
    return sum(row.values())


def most_connected_dcc(dcc_adjacency: List[DccRow]) -> int:
    """Index of the DCC with the most cross single edges; first index on ties."""
    best = 0
    best_total = 0
    for idx, row in enumerate(dcc_adjacency):
        total = _row_total(row)
        if total > best_total:
            best_total = total
            best = idx
    return best


def _best_candidate(row: DccRow) -> Tuple[int, int]:
    """(dcc, weight) of the heaviest entry; first entry on ties."""
    return max(row.items(), key=lambda kv: kv[1])


def _nearest_non_empty(rows: List[DccRow], placed: Iterable[int]) -> Tuple[int, DccRow]:
    for idx in placed:
        if rows[idx]:
            return idx, rows[idx]
    raise DisconnectedGraphError("No placed DCC has an unplaced neighbour; the graph is not connected")


def order_dccs(dcc_adjacency: List[DccRow]) -> List[int]:
    """
    Greedy ordering of the DCCs: start from the most connected one, then keep
    extending the sequence at whichever end pulls hardest on an unplaced DCC.

    When only one end still has unplaced neighbours, extend there. When both or
    neither do, take the nearest non-empty row scanning inwards from each end
    and extend at the front only if its best weight is strictly larger;
    otherwise extend at the back.

    dcc_adjacency is left untouched.
    """
    rows: List[DccRow] = [dict(row) for row in dcc_adjacency]
    if not rows:
        return []

    def place(idx: int) -> None:
        for row in rows:
            row.pop(idx, None)

    first = most_connected_dcc(rows)
    order: Deque[int] = deque([first])
    place(first)

    while len(order) < len(rows):
        front_idx, front_row = _nearest_non_empty(rows, order)
        back_idx, back_row = _nearest_non_empty(rows, reversed(order))
        front_dcc, front_weight = _best_candidate(front_row)
        back_dcc, back_weight = _best_candidate(back_row)
        true_front = front_idx == order[0]
        true_back = back_idx == order[-1]

        if true_front == true_back:
            at_front = front_weight > back_weight
        else:
            at_front = true_front

        if at_front:
            idx = front_dcc
            order.appendleft(idx)
        else:
            idx = back_dcc
            order.append(idx)
        place(idx)

    logger.debug("DCC order: %s", list(order))
    return list(order)


def dcc_positions(order: List[int], vertex_to_dcc: Dict[Vertex, int]) -> Dict[Vertex, int]:
    """Map each vertex to the position of its DCC in order."""
    position_of = {dcc: pos for pos, dcc in enumerate(order)}
    return {v: position_of[dcc] for v, dcc in vertex_to_dcc.items()}


# ---------- Stage 3: order the vertices inside one DCC ----------

def vertex_balances(
    members: List[Vertex],
    single_edges: UndirectedGraph,
    positions: Dict[Vertex, int],
) -> Dict[Vertex, int]:
    """
    +1 for every single-edge neighbour in a later DCC, -1 for every one in an
    earlier DCC.
    """
    balances: Dict[Vertex, int] = {}
    for v in members:
        own = positions[v]
        bal = 0
        for a in single_edges.neighbours(v):
            if positions[a] > own:
                bal += 1
            elif positions[a] < own:
                bal -= 1
        balances[v] = bal
    return balances


def seed_vertex(
    members: List[Vertex],
    double_edges: UndirectedGraph,
    balances: Dict[Vertex, int],
) -> Vertex:
    """Most double neighbours; on ties the smallest absolute balance, then the first."""
    seed = members[0]
    for v in members[1:]:
        deg, seed_deg = double_edges.degree(v), double_edges.degree(seed)
        if deg > seed_deg or (deg == seed_deg and abs(balances[v]) < abs(balances[seed])):
            seed = v
    return seed


def build_chains(seed: Vertex, double_edges: UndirectedGraph) -> List[List[Vertex]]:
    """
    One chain per double neighbour of seed, grown round by round as parallel
    breadth-first searches. A vertex belongs to the first chain that reaches it.
    """
    visited = {seed}
    chains: List[List[Vertex]] = []
    frontiers: List[Deque[Vertex]] = []
    for a in sorted_vertices(double_edges.neighbours(seed)):
        if a in visited:
            continue
        visited.add(a)
        chains.append([a])
        frontiers.append(deque([a]))

    while any(frontiers):
        for idx, frontier in enumerate(frontiers):
            if not frontier:
                continue
            v = frontier.popleft()
            for a in sorted_vertices(double_edges.neighbours(v)):
                if a in visited:
                    continue
                visited.add(a)
                chains[idx].append(a)
                frontier.append(a)
    return chains


def chain_balances(chains: List[List[Vertex]], balances: Dict[Vertex, int]) -> List[Tuple[int, int]]:
    """(chain index, summed balance) pairs, sorted by balance ascending (stable)."""
    out = [(idx, sum(balances[v] for v in chain)) for idx, chain in enumerate(chains)]
    return sorted(out, key=lambda kv: kv[1])


def assign_chains(
    chains: List[List[Vertex]],
    ordered_balances: List[Tuple[int, int]],
) -> Tuple[List[int], List[int]]:
    """
    Split chains into a left and a right group around the seed.

    The left group takes the most negative remaining chain, the right group the
    most positive one, and the side with fewer vertices so far goes next. On
    equal sizes the right side goes if its candidate is positive or outweighs
    the left candidate.
    """
    remaining: Deque[Tuple[int, int]] = deque(ordered_balances)
    left: List[int] = []
    right: List[int] = []
    count_left = 0
    count_right = 0
    while remaining:
        low, high = remaining[0], remaining[-1]
        high_outweighs = abs(high[1]) > abs(low[1])
        do_right = count_left > count_right or (
            count_left == count_right and (high_outweighs or high[1] > 0)
        )
        if do_right:
            remaining.pop()
            right.append(high[0])
            count_right += len(chains[high[0]])
        else:
            remaining.popleft()
            left.append(low[0])
            count_left += len(chains[low[0]])
    return left, right


def zip_chains(
    seed: Vertex,
    chains: List[List[Vertex]],
    left: List[int],
    right: List[int],
) -> List[Vertex]:
    """
    Interleave the chains around seed: each round moves the head of every left
    chain (last group first) to the front and the head of every right chain to
    the back.
    """
    pending = [deque(chain) for chain in chains]
    ordered: Deque[Vertex] = deque([seed])
    while any(pending):
        for idx in reversed(left):
            if pending[idx]:
                ordered.appendleft(pending[idx].popleft())
        for idx in right:
            if pending[idx]:
                ordered.append(pending[idx].popleft())
    return list(ordered)


def order_dcc(
    members: List[Vertex],
    single_edges: UndirectedGraph,
    double_edges: UndirectedGraph,
    positions: Dict[Vertex, int],
) -> List[Vertex]:
    if len(members) == 1:
        return list(members)
    balances = vertex_balances(members, single_edges, positions)
    seed = seed_vertex(members, double_edges, balances)
    chains = build_chains(seed, double_edges)
    left, right = assign_chains(chains, chain_balances(chains, balances))
    logger.debug("DCC seeded at %r: %d chain(s), %d left / %d right", seed, len(chains), len(left), len(right))
    return zip_chains(seed, chains, left, right)


# ---------- Pipeline ----------

def linearise(single_edges: UndirectedGraph, double_edges: UndirectedGraph) -> List[Vertex]:
    """
    Heuristic linear arrangement of a connected double graph given as its
    single-edge and double-edge parts. Connectivity is the caller's concern.
    """
    vertex_to_dcc, dcc_members, dcc_adjacency = split_on_double_edges(single_edges, double_edges)
    order = order_dccs(dcc_adjacency)
    positions = dcc_positions(order, vertex_to_dcc)

    out: List[Vertex] = []
    for dcc in order:
        out.extend(order_dcc(dcc_members[dcc], single_edges, double_edges, positions))
    return out
