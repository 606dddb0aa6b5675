"""Layout types shared between layout engines and the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from diagram_layout.ir.records import EdgeRecord


@dataclass
class LayoutNode:
    """A positioned node. ``x``/``y`` is the top-left corner of its box."""

    id: str
    rank: int
    order: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class LayoutResult:
    """Engine output: real nodes only, plus what the engine did to the edges."""

    nodes: list[LayoutNode]
    rank_count: int
    reversed_edges: set[tuple[str, str]] = field(default_factory=set)
    skipped_edges: list[EdgeRecord] = field(default_factory=list)

    def node_map(self) -> dict[str, LayoutNode]:
        return {n.id: n for n in self.nodes}


# Virtual nodes that long edges are split into.
DUMMY_PREFIX = "__dummy_"
