"""Shared type definitions for diagram-layout.

Enums used across the graph IR, the layout engine and the pipeline options.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Direction(Enum):
    TB = "TB"  # ranks are rows, flow goes down
    LR = "LR"  # ranks are columns, flow goes right

    @classmethod
    def default(cls) -> Direction:
        return cls.TB

    @classmethod
    def parse(cls, value: object) -> Direction:
        """Resolve a direction name; unknown values fall back to the default."""
        if isinstance(value, cls):
            return value
        key = str(value).upper()
        if key == "TD":
            key = "TB"
        try:
            return cls(key)
        except ValueError:
            logger.warning("Unknown direction %r; using %s", value, cls.default().value)
            return cls.default()

    @property
    def is_horizontal(self) -> bool:
        return self is Direction.LR


class LayerAssignment(Enum):
    AUTO = "auto"
    MANUAL = "manual"

    @classmethod
    def default(cls) -> LayerAssignment:
        return cls.MANUAL

    @classmethod
    def parse(cls, value: object) -> LayerAssignment:
        """Resolve a layering mode name; unknown values fall back to the default."""
        if isinstance(value, cls):
            return value
        key = str(value).lower()
        if key == "automatic":
            key = "auto"
        try:
            return cls(key)
        except ValueError:
            logger.warning("Unknown layer assignment mode %r; using %s", value, cls.default().value)
            return cls.default()
