"""Grid snapping: the last pipeline stage."""

from __future__ import annotations

import math
from collections.abc import Sequence

from diagram_layout.ir.records import NodeRecord

DEFAULT_GRID_SIZE: float = 20


def snap_value(value: float, grid_size: float = DEFAULT_GRID_SIZE) -> float:
    """Round to the nearest multiple of grid_size; halves round up."""
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size!r}")
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_to_grid(nodes: Sequence[NodeRecord], grid_size: float = DEFAULT_GRID_SIZE) -> list[NodeRecord]:
    return [
        node.with_position(snap_value(node.position.x, grid_size), snap_value(node.position.y, grid_size))
        for node in nodes
    ]
