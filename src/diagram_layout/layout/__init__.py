"""Layout engine registry and public API."""

from __future__ import annotations

from diagram_layout.layout.base import LayoutEngine
from diagram_layout.layout.engine import apply_automatic_layout, run_layout
from diagram_layout.layout.sugiyama import (
    MAX_ORDERING_PASSES,
    AugmentedGraph,
    SugiyamaLayout,
    assign_coordinates,
    assign_ranks,
    count_crossings,
    find_back_edges,
    insert_dummy_nodes,
    longest_path_ranks,
    minimise_crossings,
    remove_cycles,
)
from diagram_layout.layout.types import DUMMY_PREFIX, LayoutNode, LayoutResult

__all__ = [
    "DUMMY_PREFIX",
    "MAX_ORDERING_PASSES",
    "AugmentedGraph",
    "LayoutEngine",
    "LayoutNode",
    "LayoutResult",
    "SugiyamaLayout",
    "apply_automatic_layout",
    "assign_coordinates",
    "assign_ranks",
    "count_crossings",
    "find_back_edges",
    "insert_dummy_nodes",
    "longest_path_ranks",
    "minimise_crossings",
    "remove_cycles",
    "run_layout",
]
