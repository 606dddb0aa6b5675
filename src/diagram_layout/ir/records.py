"""Node and edge records exchanged with callers.

Records are immutable values: every stage of the pipeline returns new
records instead of rewriting the ones it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_TYPE = "default"


@dataclass(frozen=True)
class Point:
    """A 2D point in canvas coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class NodeRecord:
    """A diagram node. ``position`` is the top-left corner of its box."""

    id: str
    type: str = DEFAULT_TYPE
    position: Point = Point(0, 0)
    data: dict[str, Any] = field(default_factory=dict)

    def with_position(self, x: float, y: float) -> NodeRecord:
        return replace(self, position=Point(x, y))


@dataclass(frozen=True)
class EdgeRecord:
    """A directed edge referencing two nodes by id."""

    id: str
    source: str
    target: str
    data: dict[str, Any] = field(default_factory=dict)
