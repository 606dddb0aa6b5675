"""Intermediate representation: caller records and the layout graph."""

from diagram_layout.ir.graph import LayoutGraph
from diagram_layout.ir.records import DEFAULT_TYPE, EdgeRecord, NodeRecord, Point, Size

__all__ = [
    "DEFAULT_TYPE",
    "EdgeRecord",
    "LayoutGraph",
    "NodeRecord",
    "Point",
    "Size",
]
