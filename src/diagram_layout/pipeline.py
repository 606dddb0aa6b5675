"""The layout pipeline: layered layout, then overlap repair, then grid snapping."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from diagram_layout.config import LayoutOptions
from diagram_layout.dimensions import DEFAULT_DIMENSIONS, DEFAULT_LAYERS, DimensionTable, LayerTable
from diagram_layout.grid import snap_to_grid
from diagram_layout.ir.records import EdgeRecord, NodeRecord
from diagram_layout.layout.base import LayoutEngine
from diagram_layout.layout.engine import apply_automatic_layout
from diagram_layout.overlap import resolve_overlaps

logger = logging.getLogger(__name__)


def resolve_options(options: LayoutOptions | Mapping[str, object] | None) -> LayoutOptions:
    """Accept full options, a partial mapping of overrides, or None."""
    if isinstance(options, LayoutOptions):
        return options
    if options is None or isinstance(options, Mapping):
        return LayoutOptions.from_mapping(options)
    raise TypeError(f"options must be LayoutOptions, a mapping or None, not {type(options).__name__}")


def _require_sequence(name: str, value: object) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"{name} must be a list of records, not {type(value).__name__}")


def layout_diagram(
    nodes: Sequence[NodeRecord],
    edges: Sequence[EdgeRecord],
    options: LayoutOptions | Mapping[str, object] | None = None,
    *,
    dimensions: DimensionTable = DEFAULT_DIMENSIONS,
    layers: LayerTable = DEFAULT_LAYERS,
    engine: LayoutEngine | None = None,
) -> list[NodeRecord]:
    """Compute positions for every node of a diagram.

    Args:
        nodes: Node records; positions on input are ignored by the layout.
        edges: Edge records; edges pointing at unknown node ids are ignored.
        options: LayoutOptions, a partial mapping of option overrides, or None.
        dimensions: Box size per node type.
        layers: Fixed rank per node type, used under manual layer assignment.
        engine: Layout engine to run; Sugiyama by default.

    Returns:
        New node records in input order with updated positions. Everything
        except ``position`` is carried over unchanged.

    Raises:
        TypeError: If nodes or edges is not a sequence, or options has the wrong type.
        ValueError: If an option value is out of range.
    """
    _require_sequence("nodes", nodes)
    _require_sequence("edges", edges)
    opts = resolve_options(options)
    if not nodes:
        return []

    positioned = apply_automatic_layout(nodes, edges, opts, dimensions, layers, engine)
    separated = resolve_overlaps(positioned, dimensions, opts.overlap_padding, opts.overlap_passes)
    snapped = snap_to_grid(separated, opts.grid_size)
    logger.debug(
        "Laid out %d node(s), %d edge(s): direction=%s layering=%s grid=%s",
        len(nodes),
        len(edges),
        opts.direction.value,
        opts.layer_assignment.value,
        opts.grid_size,
    )
    return snapped
