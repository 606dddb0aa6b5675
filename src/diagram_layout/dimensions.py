"""Node type lookups: box size per type and, for manual layering, rank per type.

Both tables are total: an unknown type tag resolves to the table's default
entry. Tables are plain values passed into the pipeline, so a deployment can
add node kinds without touching the layout code.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from diagram_layout.ir.records import DEFAULT_TYPE, Size

FALLBACK_RANK: int = 3


@dataclass(frozen=True)
class DimensionTable:
    """Type tag -> box size. Must contain a ``default`` entry."""

    sizes: Mapping[str, Size]

    def __post_init__(self) -> None:
        if DEFAULT_TYPE not in self.sizes:
            raise ValueError(f"DimensionTable requires a '{DEFAULT_TYPE}' entry")

    @classmethod
    def from_pairs(cls, sizes: Mapping[str, tuple[float, float]]) -> DimensionTable:
        """Build a table from ``{type: (width, height)}``."""
        return cls({tag: Size(w, h) for tag, (w, h) in sizes.items()})

    def resolve(self, type_tag: str) -> Size:
        return self.sizes.get(type_tag, self.sizes[DEFAULT_TYPE])

    @property
    def default(self) -> Size:
        return self.sizes[DEFAULT_TYPE]


@dataclass(frozen=True)
class LayerTable:
    """Type tag -> fixed rank, used when layer assignment is manual."""

    ranks: Mapping[str, int]
    fallback: int = FALLBACK_RANK

    def __post_init__(self) -> None:
        bad = {tag: rank for tag, rank in self.ranks.items() if rank < 0}
        if bad or self.fallback < 0:
            raise ValueError(f"LayerTable ranks must be non-negative, got {bad or self.fallback}")

    def resolve(self, type_tag: str) -> int:
        return self.ranks.get(type_tag, self.fallback)


DEFAULT_DIMENSIONS = DimensionTable.from_pairs(
    {
        DEFAULT_TYPE: (180, 80),
        "frontend": (200, 100),
        "server": (180, 90),
        "database": (180, 90),
        "api": (180, 80),
        "loadBalancer": (180, 80),
        "security": (160, 80),
        "storage": (180, 90),
        "media": (180, 90),
        "cdn": (180, 80),
        "processing": (200, 90),
        "player": (180, 90),
    }
)

DEFAULT_LAYERS = LayerTable(
    ranks={
        "frontend": 0,
        "loadBalancer": 1,
        "api": 2,
        "security": 2,
        "server": 3,
        "processing": 3,
        "media": 3,
        "cdn": 4,
        "player": 4,
        "storage": 5,
        "database": 6,
    },
    fallback=FALLBACK_RANK,
)

__all__ = [
    "DEFAULT_DIMENSIONS",
    "DEFAULT_LAYERS",
    "FALLBACK_RANK",
    "DimensionTable",
    "LayerTable",
]
