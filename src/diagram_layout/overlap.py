"""Overlap repair: a geometric pass run after layout.

For every pair (i, j) with i < j whose padded boxes intersect, node j is
pushed right, left, down or up, whichever moves it least. The pass is
greedy and order dependent: fixing (i, j) can create a new conflict with a
pair that was already visited. ``max_passes`` repeats the pass until one
finds nothing to fix, which still is not guaranteed to converge.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from diagram_layout.dimensions import DEFAULT_DIMENSIONS, DimensionTable
from diagram_layout.ir.records import NodeRecord, Size

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_PADDING: float = 20


def _boxes_conflict(ax: float, ay: float, a: Size, bx: float, by: float, b: Size, padding: float) -> bool:
    overlap_x = ax < bx + b.width + padding and ax + a.width + padding > bx
    overlap_y = ay < by + b.height + padding and ay + a.height + padding > by
    return overlap_x and overlap_y


def find_overlaps(
    nodes: Sequence[NodeRecord],
    dimensions: DimensionTable = DEFAULT_DIMENSIONS,
    padding: float = DEFAULT_OVERLAP_PADDING,
) -> list[tuple[int, int]]:
    """Index pairs (i, j), i < j, whose padded bounding boxes intersect."""
    sizes = [dimensions.resolve(n.type) for n in nodes]
    conflicts: list[tuple[int, int]] = []
    for i, a in enumerate(nodes):
        for j in range(i + 1, len(nodes)):
            b = nodes[j]
            if _boxes_conflict(a.position.x, a.position.y, sizes[i], b.position.x, b.position.y, sizes[j], padding):
                conflicts.append((i, j))
    return conflicts


def _resolve_pass(positions: list[list[float]], sizes: list[Size], padding: float) -> int:
    moved = 0
    for i in range(len(positions)):
        ax, ay = positions[i]
        a = sizes[i]
        for j in range(i + 1, len(positions)):
            bx, by = positions[j]
            b = sizes[j]
            if not _boxes_conflict(ax, ay, a, bx, by, b, padding):
                continue

            right = ax + a.width + padding - bx
            left = bx + b.width + padding - ax
            down = ay + a.height + padding - by
            up = by + b.height + padding - ay
            shortest = min(right, left, down, up)

            if shortest == right:
                positions[j][0] = ax + a.width + padding
            elif shortest == left:
                positions[j][0] = ax - b.width - padding
            elif shortest == down:
                positions[j][1] = ay + a.height + padding
            else:
                positions[j][1] = ay - b.height - padding
            moved += 1
    return moved


def resolve_overlaps(
    nodes: Sequence[NodeRecord],
    dimensions: DimensionTable = DEFAULT_DIMENSIONS,
    padding: float = DEFAULT_OVERLAP_PADDING,
    max_passes: int = 1,
) -> list[NodeRecord]:
    """Return new records with overlapping nodes pushed apart.

    Nodes that never took part in a conflict are returned as-is.
    """
    positions = [[n.position.x, n.position.y] for n in nodes]
    sizes = [dimensions.resolve(n.type) for n in nodes]

    for pass_no in range(max_passes):
        moved = _resolve_pass(positions, sizes, padding)
        if moved:
            logger.debug("Overlap pass %d moved %d node(s)", pass_no + 1, moved)
        if not moved:
            break

    result: list[NodeRecord] = []
    for node, (x, y) in zip(nodes, positions):
        if (x, y) == (node.position.x, node.position.y):
            result.append(node)
        else:
            result.append(node.with_position(x, y))
    return result
