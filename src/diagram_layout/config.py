"""Centralized configuration for diagram-layout."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields

from diagram_layout.types import Direction, LayerAssignment

logger = logging.getLogger(__name__)

# camelCase option names used by the diagram editor front end.
_ALIASES: dict[str, str] = {
    "nodeSeparation": "node_separation",
    "nodesep": "node_separation",
    "rankSeparation": "rank_separation",
    "ranksep": "rank_separation",
    "edgeSpacing": "edge_spacing",
    "gridSize": "grid_size",
    "layerAssignment": "layer_assignment",
    "layerAssignmentMode": "layer_assignment",
    "overlapPadding": "overlap_padding",
    "overlapPasses": "overlap_passes",
    "rankdir": "direction",
}


@dataclass(frozen=True)
class LayoutOptions:
    """Configuration for one run of the layout pipeline."""

    direction: Direction = Direction.TB
    node_separation: float = 80
    rank_separation: float = 120
    edge_spacing: float = 10
    padding: float = 50
    layer_assignment: LayerAssignment = LayerAssignment.MANUAL
    grid_size: float = 20
    overlap_padding: float = 20
    overlap_passes: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", Direction.parse(self.direction))
        object.__setattr__(self, "layer_assignment", LayerAssignment.parse(self.layer_assignment))
        for name in ("node_separation", "rank_separation", "edge_spacing", "padding", "overlap_padding"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        if isinstance(self.grid_size, bool) or not isinstance(self.grid_size, (int, float)) or self.grid_size <= 0:
            raise ValueError(f"grid_size must be a positive number, got {self.grid_size!r}")
        if isinstance(self.overlap_passes, bool) or not isinstance(self.overlap_passes, int) or self.overlap_passes < 1:
            raise ValueError(f"overlap_passes must be an integer >= 1, got {self.overlap_passes!r}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None) -> LayoutOptions:
        """Build options from a partial mapping of snake_case or camelCase names.

        Missing keys keep their defaults; unknown keys are ignored.
        """
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, object] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.debug("Ignoring unknown layout option %r", key)
                continue
            if value is None:
                continue
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def is_horizontal(self) -> bool:
        return self.direction.is_horizontal

    @property
    def is_manual(self) -> bool:
        return self.layer_assignment is LayerAssignment.MANUAL
