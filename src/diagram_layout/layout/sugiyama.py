"""Sugiyama-style layered graph layout engine.

Phases:
  1. Cycle removal (DFS back-edge reversal)
  2. Rank assignment (fixed per node type, or longest path)
  3. Dummy node insertion
  4. Crossing minimization (barycenter)
  5. Coordinate assignment
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

import networkx as nx

from diagram_layout.config import LayoutOptions
from diagram_layout.ir.graph import LayoutGraph
from diagram_layout.layout.types import DUMMY_PREFIX, LayoutNode, LayoutResult
from diagram_layout.types import LayerAssignment

logger = logging.getLogger(__name__)

MAX_ORDERING_PASSES: int = 24

_ON_STACK = 1
_DONE = 2


# ─── Cycle Removal (DFS back edges) ──────────────────────────────────────────


def _dfs_roots(graph: nx.DiGraph) -> Iterator[str]:
    """Sources first, then every other node, both in insertion order."""
    yield from (n for n in graph.nodes if graph.in_degree(n) == 0)
    yield from (n for n in graph.nodes if graph.in_degree(n) != 0)


def find_back_edges(graph: nx.DiGraph) -> set[tuple[str, str]]:
    """Return the edges that close a cycle during a depth-first traversal.

    Self loops are always back edges. The traversal is iterative and visits
    nodes and successors in insertion order, so the result is deterministic.
    """
    state: dict[str, int] = {}
    back_edges: set[tuple[str, str]] = set()

    for root in _dfs_roots(graph):
        if root in state:
            continue
        state[root] = _ON_STACK
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(graph.successors(root)))]
        while stack:
            node, children = stack[-1]
            for child in children:
                seen = state.get(child)
                if seen is None:
                    state[child] = _ON_STACK
                    stack.append((child, iter(graph.successors(child))))
                    break
                if seen == _ON_STACK:
                    back_edges.add((node, child))
            else:
                state[node] = _DONE
                stack.pop()

    return back_edges


def remove_cycles(graph: nx.DiGraph) -> tuple[nx.DiGraph, set[tuple[str, str]]]:
    """Reverse back edges on a copy of the graph. Returns (dag, reversed_edges).

    Self loops are reported as reversed and dropped from the DAG.
    """
    reversed_edges = find_back_edges(graph)

    dag: nx.DiGraph = nx.DiGraph()
    for node_id in graph.nodes:
        dag.add_node(node_id, **graph.nodes[node_id])

    for src, tgt, edge_attrs in graph.edges(data=True):
        if src == tgt:
            continue
        if (src, tgt) in reversed_edges:
            dag.add_edge(tgt, src, **edge_attrs)
        else:
            dag.add_edge(src, tgt, **edge_attrs)

    if reversed_edges:
        logger.debug("Reversed %d back edge(s) for ranking: %s", len(reversed_edges), sorted(reversed_edges))
    return dag, reversed_edges


# ─── Rank Assignment ─────────────────────────────────────────────────────────


def longest_path_ranks(dag: nx.DiGraph) -> dict[str, int]:
    """Rank every node by the longest path reaching it from a source."""
    ranks: dict[str, int] = {node_id: 0 for node_id in dag.nodes}
    for node_id in nx.topological_sort(dag):
        for succ in dag.successors(node_id):
            if ranks[succ] < ranks[node_id] + 1:
                ranks[succ] = ranks[node_id] + 1
    return ranks


def assign_ranks(graph: LayoutGraph, dag: nx.DiGraph) -> dict[str, int]:
    """Fixed ranks under manual layering, longest-path ranks otherwise."""
    if graph.mode is LayerAssignment.MANUAL:
        ranks: dict[str, int] = {}
        for node_id in graph.digraph.nodes:
            fixed = graph.fixed_rank_of(node_id)
            ranks[node_id] = fixed if fixed is not None else 0
        return ranks
    return longest_path_ranks(dag)


# ─── Dummy Node Insertion ────────────────────────────────────────────────────


@dataclass
class AugmentedGraph:
    graph: nx.DiGraph
    ranks: dict[str, int]
    rank_count: int
    dummy_chains: dict[tuple[str, str], list[str]] = field(default_factory=dict)


def insert_dummy_nodes(dag: nx.DiGraph, ranks: dict[str, int]) -> AugmentedGraph:
    """Orient every edge down the ranks and split edges spanning several ranks.

    Edges between nodes of the same rank do not take part in ordering and are
    left out of the augmented graph.
    """
    g: nx.DiGraph = nx.DiGraph()
    for node_id in dag.nodes:
        g.add_node(node_id, dummy=False)

    aug_ranks: dict[str, int] = dict(ranks)
    chains: dict[tuple[str, str], list[str]] = {}
    counter = 0

    for src, tgt in dag.edges():
        if ranks[src] == ranks[tgt]:
            continue
        upper, lower = (src, tgt) if ranks[src] < ranks[tgt] else (tgt, src)
        span = ranks[lower] - ranks[upper]
        if span == 1:
            g.add_edge(upper, lower)
            continue

        chain: list[str] = []
        prev = upper
        for step in range(1, span):
            dummy_id = f"{DUMMY_PREFIX}{counter}_{step - 1}"
            while dummy_id in g:
                dummy_id += "_"
            g.add_node(dummy_id, dummy=True)
            aug_ranks[dummy_id] = ranks[upper] + step
            g.add_edge(prev, dummy_id)
            chain.append(dummy_id)
            prev = dummy_id
        g.add_edge(prev, lower)
        chains[(upper, lower)] = chain
        counter += 1

    rank_count = (max(aug_ranks.values()) + 1) if aug_ranks else 0
    return AugmentedGraph(graph=g, ranks=aug_ranks, rank_count=rank_count, dummy_chains=chains)


# ─── Crossing Minimization ───────────────────────────────────────────────────


def initial_ordering(aug: AugmentedGraph) -> list[list[str]]:
    ordering: list[list[str]] = [[] for _ in range(aug.rank_count)]
    for node_id in aug.graph.nodes:
        ordering[aug.ranks[node_id]].append(node_id)
    return ordering


def minimise_crossings(aug: AugmentedGraph, max_passes: int = MAX_ORDERING_PASSES) -> list[list[str]]:
    """Order nodes within each rank using alternating barycenter sweeps.

    Stops at the first pass that does not reduce the crossing count and
    returns the best ordering seen.
    """
    ordering = initial_ordering(aug)
    best = copy.deepcopy(ordering)
    best_crossings = count_crossings(ordering, aug.graph)

    for _pass in range(max_passes):
        if best_crossings == 0:
            break
        for rank in range(1, aug.rank_count):
            _sort_by_barycenter(ordering[rank], ordering[rank - 1], aug.graph, "incoming")
        for rank in range(aug.rank_count - 2, -1, -1):
            _sort_by_barycenter(ordering[rank], ordering[rank + 1], aug.graph, "outgoing")

        crossings = count_crossings(ordering, aug.graph)
        if crossings >= best_crossings:
            break
        best_crossings = crossings
        best = copy.deepcopy(ordering)

    return best


def _sort_by_barycenter(layer: list[str], fixed: list[str], graph: nx.DiGraph, direction: str) -> None:
    fixed_pos: dict[str, float] = {nid: float(i) for i, nid in enumerate(fixed)}
    keys = {nid: _barycenter(nid, graph, fixed_pos, direction, float(i)) for i, nid in enumerate(layer)}
    layer.sort(key=lambda nid: keys[nid])


def _barycenter(
    node_id: str,
    graph: nx.DiGraph,
    neighbor_pos: dict[str, float],
    direction: str,
    current: float,
) -> float:
    neighbors = graph.predecessors(node_id) if direction == "incoming" else graph.successors(node_id)
    positions = [neighbor_pos[nb] for nb in neighbors if nb in neighbor_pos]
    if not positions:
        return current
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    total = 0
    for rank in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[rank + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[rank]):
            for nb in graph.successors(src_id):
                if nb in tgt_pos:
                    edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_coordinates(
    ordering: list[list[str]],
    aug: AugmentedGraph,
    graph: LayoutGraph,
    options: LayoutOptions,
) -> list[LayoutNode]:
    """Assign top-left (x, y) coordinates to every node, dummies included.

    Works in (rank axis, cross axis) space and maps to (x, y) at the end:
    ranks are rows for TB and columns for LR.
    """
    horizontal = options.is_horizontal

    def extents(node_id: str) -> tuple[float, float]:
        """(extent along the rank axis, extent across it)."""
        if aug.graph.nodes[node_id].get("dummy"):
            return (0.0, float(options.edge_spacing))
        size = graph.size_of(node_id)
        return (size.width, size.height) if horizontal else (size.height, size.width)

    real_ids = [nid for nid in aug.graph.nodes if not aug.graph.nodes[nid].get("dummy")]
    average_extent = sum(extents(nid)[0] for nid in real_ids) / len(real_ids) if real_ids else 0.0
    rank_step = options.rank_separation + average_extent

    rank_widths: list[float] = []
    for layer in ordering:
        total = sum(extents(nid)[1] for nid in layer)
        rank_widths.append(total + max(0, len(layer) - 1) * options.node_separation)
    widest = max(rank_widths, default=0.0)

    cross: dict[str, float] = {}
    for rank, layer in enumerate(ordering):
        pos = (widest - rank_widths[rank]) / 2
        for node_id in layer:
            cross[node_id] = pos
            pos += extents(node_id)[1] + options.node_separation

    def centre(node_id: str) -> float:
        return cross[node_id] + extents(node_id)[1] / 2

    _shift_ranks_toward_neighbours(ordering, aug.graph, centre, cross, options.node_separation)
    _align_single_neighbours(ordering, aug.graph, extents, cross, options.node_separation)

    if real_ids:
        offset = options.padding - min(cross[nid] for nid in real_ids)
        for node_id in cross:
            cross[node_id] += offset

    nodes: list[LayoutNode] = []
    for rank, layer in enumerate(ordering):
        along = rank * rank_step + options.padding
        for order, node_id in enumerate(layer):
            along_extent, cross_extent = extents(node_id)
            width, height = (along_extent, cross_extent) if horizontal else (cross_extent, along_extent)
            x, y = (along, cross[node_id]) if horizontal else (cross[node_id], along)
            nodes.append(LayoutNode(id=node_id, rank=rank, order=order, x=x, y=y, width=width, height=height))
    return nodes


def _shift_ranks_toward_neighbours(
    ordering: list[list[str]],
    graph: nx.DiGraph,
    centre: Callable[[str], float],
    cross: dict[str, float],
    limit: float,
) -> None:
    """Slide whole ranks so their edges are, on average, straighter.

    A down sweep moves each rank toward its parents, then an up sweep moves
    each rank toward its children. Shifts larger than ``limit`` are skipped.
    """
    for rank in range(1, len(ordering)):
        deltas = [centre(src) - centre(nid) for nid in ordering[rank] for src in graph.predecessors(nid)]
        _apply_rank_shift(ordering[rank], deltas, cross, limit)

    for rank in range(len(ordering) - 2, -1, -1):
        deltas = [centre(tgt) - centre(nid) for nid in ordering[rank] for tgt in graph.successors(nid)]
        _apply_rank_shift(ordering[rank], deltas, cross, limit)


def _apply_rank_shift(layer: list[str], deltas: list[float], cross: dict[str, float], limit: float) -> None:
    if not deltas:
        return
    shift = sum(deltas) / len(deltas)
    if abs(shift) > limit:
        return
    for node_id in layer:
        cross[node_id] += shift


def _align_single_neighbours(
    ordering: list[list[str]],
    graph: nx.DiGraph,
    extents: Callable[[str], tuple[float, float]],
    cross: dict[str, float],
    gap: float,
) -> None:
    """Centre a node on its only parent as far as its rank neighbours allow."""
    for rank in range(1, len(ordering)):
        layer = ordering[rank]
        for i, node_id in enumerate(layer):
            parents = list(graph.predecessors(node_id))
            if len(parents) != 1:
                continue
            parent = parents[0]
            own = extents(node_id)[1]
            target = cross[parent] + extents(parent)[1] / 2 - own / 2
            if i > 0:
                left = layer[i - 1]
                target = max(target, cross[left] + extents(left)[1] + gap)
            if i < len(layer) - 1:
                right = layer[i + 1]
                target = min(target, cross[right] - gap - own)
            cross[node_id] = target


# ─── SugiyamaLayout Engine ───────────────────────────────────────────────────


class SugiyamaLayout:
    """Sugiyama layered layout engine.

    Holds no state between calls; every ``layout`` call builds its own
    working graphs.
    """

    def __init__(self, max_passes: int = MAX_ORDERING_PASSES) -> None:
        self.max_passes = max_passes

    def layout(self, graph: LayoutGraph, options: LayoutOptions) -> LayoutResult:
        if graph.mode is LayerAssignment.MANUAL:
            dag, reversed_edges = graph.digraph, set()
        else:
            dag, reversed_edges = remove_cycles(graph.digraph)

        ranks = assign_ranks(graph, dag)
        aug = insert_dummy_nodes(dag, ranks)
        ordering = minimise_crossings(aug, self.max_passes)
        positioned = assign_coordinates(ordering, aug, graph, options)

        return LayoutResult(
            nodes=[n for n in positioned if n.id in graph.digraph],
            rank_count=aug.rank_count,
            reversed_edges=reversed_edges,
            skipped_edges=list(graph.skipped_edges),
        )
