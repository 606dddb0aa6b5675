"""Layout graph: wraps caller records in a networkx DiGraph annotated for layout.

Every node carries its resolved box size and, under manual layering, the
rank its type is pinned to. Edges whose endpoints are not in the node set are
left out of the graph and reported so the caller can see what was ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

from diagram_layout.ir.records import EdgeRecord, NodeRecord, Size
from diagram_layout.types import LayerAssignment

if TYPE_CHECKING:
    from diagram_layout.dimensions import DimensionTable, LayerTable

logger = logging.getLogger(__name__)


@dataclass
class NodeData:
    id: str
    type: str
    size: Size
    fixed_rank: int | None = None


class LayoutGraph:
    """The graph handed to a layout engine.

    Node insertion order follows the caller's node list, which keeps every
    traversal over ``digraph`` deterministic.
    """

    def __init__(self, digraph: nx.DiGraph, mode: LayerAssignment, skipped_edges: list[EdgeRecord]) -> None:
        self.digraph = digraph
        self.mode = mode
        self.skipped_edges = skipped_edges

    @classmethod
    def build(
        cls,
        nodes: Iterable[NodeRecord],
        edges: Iterable[EdgeRecord],
        dimensions: DimensionTable,
        layers: LayerTable,
        mode: LayerAssignment = LayerAssignment.MANUAL,
    ) -> LayoutGraph:
        """Build a LayoutGraph from node and edge records."""
        digraph: nx.DiGraph = nx.DiGraph()
        for node in nodes:
            if node.id in digraph:
                continue
            fixed_rank = layers.resolve(node.type) if mode is LayerAssignment.MANUAL else None
            digraph.add_node(
                node.id,
                data=NodeData(id=node.id, type=node.type, size=dimensions.resolve(node.type), fixed_rank=fixed_rank),
            )

        skipped: list[EdgeRecord] = []
        for edge in edges:
            if edge.source not in digraph or edge.target not in digraph:
                logger.debug("Skipping edge %s: %s -> %s references a missing node", edge.id, edge.source, edge.target)
                skipped.append(edge)
                continue
            digraph.add_edge(edge.source, edge.target)

        return cls(digraph=digraph, mode=mode, skipped_edges=skipped)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def node_data(self, node_id: str) -> NodeData:
        return self.digraph.nodes[node_id]["data"]

    def size_of(self, node_id: str) -> Size:
        return self.node_data(node_id).size

    def fixed_rank_of(self, node_id: str) -> int | None:
        return self.node_data(node_id).fixed_rank
