"""diagram-layout: layered automatic layout for architecture diagrams.

Nodes arrive without meaningful coordinates; ``layout_diagram`` ranks them
along the edges, orders each rank to reduce crossings, pushes apart any
boxes that still overlap and snaps the result to a grid.
"""

from diagram_layout.config import LayoutOptions
from diagram_layout.dimensions import DEFAULT_DIMENSIONS, DEFAULT_LAYERS, DimensionTable, LayerTable
from diagram_layout.grid import snap_to_grid, snap_value
from diagram_layout.ir.records import EdgeRecord, NodeRecord, Point, Size
from diagram_layout.overlap import find_overlaps, resolve_overlaps
from diagram_layout.pipeline import layout_diagram
from diagram_layout.types import Direction, LayerAssignment

__all__ = [
    "DEFAULT_DIMENSIONS",
    "DEFAULT_LAYERS",
    "DimensionTable",
    "Direction",
    "EdgeRecord",
    "LayerAssignment",
    "LayerTable",
    "LayoutOptions",
    "NodeRecord",
    "Point",
    "Size",
    "find_overlaps",
    "layout_diagram",
    "resolve_overlaps",
    "snap_to_grid",
    "snap_value",
]
