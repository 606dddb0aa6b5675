"""Base layout engine protocol."""

from __future__ import annotations

from typing import Protocol

from diagram_layout.config import LayoutOptions
from diagram_layout.ir.graph import LayoutGraph
from diagram_layout.layout.types import LayoutResult


class LayoutEngine(Protocol):
    """Protocol that all layout engines must implement."""

    def layout(self, graph: LayoutGraph, options: LayoutOptions) -> LayoutResult:
        """Assign a rank, an in-rank order and a position to every graph node."""
        ...
