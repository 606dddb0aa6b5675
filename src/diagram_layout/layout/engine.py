"""Record-level entry point for the layout engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from diagram_layout.config import LayoutOptions
from diagram_layout.dimensions import DEFAULT_DIMENSIONS, DEFAULT_LAYERS, DimensionTable, LayerTable
from diagram_layout.ir.graph import LayoutGraph
from diagram_layout.ir.records import EdgeRecord, NodeRecord
from diagram_layout.layout.base import LayoutEngine
from diagram_layout.layout.sugiyama import SugiyamaLayout
from diagram_layout.layout.types import LayoutResult

logger = logging.getLogger(__name__)


def run_layout(
    nodes: Sequence[NodeRecord],
    edges: Sequence[EdgeRecord],
    options: LayoutOptions,
    dimensions: DimensionTable = DEFAULT_DIMENSIONS,
    layers: LayerTable = DEFAULT_LAYERS,
    engine: LayoutEngine | None = None,
) -> LayoutResult:
    """Build the layout graph and run an engine (Sugiyama by default) on it."""
    graph = LayoutGraph.build(nodes, edges, dimensions, layers, options.layer_assignment)
    if engine is None:
        engine = SugiyamaLayout()
    return engine.layout(graph, options)


def apply_automatic_layout(
    nodes: Sequence[NodeRecord],
    edges: Sequence[EdgeRecord],
    options: LayoutOptions,
    dimensions: DimensionTable = DEFAULT_DIMENSIONS,
    layers: LayerTable = DEFAULT_LAYERS,
    engine: LayoutEngine | None = None,
) -> list[NodeRecord]:
    """Return new node records positioned by the layout engine.

    Nodes the engine did not position are returned unchanged.
    """
    result = run_layout(nodes, edges, options, dimensions, layers, engine)
    placed = result.node_map()

    positioned: list[NodeRecord] = []
    for node in nodes:
        layout_node = placed.get(node.id)
        if layout_node is None:
            logger.debug("Node %s was not positioned by the layout engine; keeping its position", node.id)
            positioned.append(node)
            continue
        positioned.append(node.with_position(layout_node.x, layout_node.y))
    return positioned
