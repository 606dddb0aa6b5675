"""End-to-end properties of layout_diagram: shape, determinism, grid alignment, layering, tolerance."""

from __future__ import annotations

import math

import pytest

from diagram_layout import (
    DimensionTable,
    EdgeRecord,
    LayerTable,
    LayoutOptions,
    NodeRecord,
    Point,
    find_overlaps,
    layout_diagram,
)
from diagram_layout.dimensions import DEFAULT_DIMENSIONS, DEFAULT_LAYERS
from diagram_layout.layout.engine import run_layout
from diagram_layout.layout.sugiyama import SugiyamaLayout
from diagram_layout.layout.types import LayoutResult

# ─── Helpers ──────────────────────────────────────────────────────────────────


def _node(id: str, type: str = "default", **data) -> NodeRecord:
    return NodeRecord(id=id, type=type, position=Point(0, 0), data=data)


def _edge(source: str, target: str) -> EdgeRecord:
    return EdgeRecord(id=f"{source}-{target}", source=source, target=target)


def three_tier() -> tuple[list[NodeRecord], list[EdgeRecord]]:
    """A generated architecture diagram: every node parked at the origin."""
    nodes = [
        _node("db", "database", label="Postgres"),
        _node("web", "frontend", label="Web App"),
        _node("lb", "loadBalancer"),
        _node("api", "api"),
        _node("auth", "security"),
        _node("svc1", "server"),
        _node("svc2", "server"),
        _node("cache", "redis"),
        _node("cdn", "cdn"),
        _node("files", "storage"),
    ]
    edges = [
        _edge("web", "lb"),
        _edge("web", "cdn"),
        _edge("lb", "api"),
        _edge("api", "auth"),
        _edge("api", "svc1"),
        _edge("api", "svc2"),
        _edge("svc1", "db"),
        _edge("svc2", "db"),
        _edge("svc1", "cache"),
        _edge("cdn", "files"),
        _edge("svc2", "files"),
    ]
    return nodes, edges


def by_id(nodes: list[NodeRecord]) -> dict[str, NodeRecord]:
    return {n.id: n for n in nodes}


# ─── Shape and determinism ────────────────────────────────────────────────────


class TestShape:
    def test_empty_input(self):
        assert layout_diagram([], []) == []

    def test_empty_nodes_with_edges(self):
        assert layout_diagram([], [_edge("a", "b")]) == []

    def test_length_and_order_preserved(self):
        nodes, edges = three_tier()
        result = layout_diagram(nodes, edges)
        assert [n.id for n in result] == [n.id for n in nodes]

    def test_only_position_changes(self):
        nodes, edges = three_tier()
        for before, after in zip(nodes, layout_diagram(nodes, edges)):
            assert after.type == before.type
            assert after.data == before.data

    def test_inputs_not_mutated(self):
        nodes, edges = three_tier()
        layout_diagram(nodes, edges)
        assert all(n.position == Point(0, 0) for n in nodes)

    def test_positions_finite(self):
        nodes, edges = three_tier()
        for node in layout_diagram(nodes, edges, {"layerAssignment": "auto"}):
            assert math.isfinite(node.position.x)
            assert math.isfinite(node.position.y)


class TestDeterminism:
    @pytest.mark.parametrize("options", [None, {"layer_assignment": "auto"}, {"direction": "LR"}])
    def test_identical_runs(self, options):
        nodes, edges = three_tier()
        assert layout_diagram(nodes, edges, options) == layout_diagram(nodes, edges, options)

    def test_engine_reuse_keeps_no_state(self):
        """Laying out another diagram in between does not change the result."""
        nodes, edges = three_tier()
        first = layout_diagram(nodes, edges)
        layout_diagram([_node("x"), _node("y")], [_edge("x", "y")])
        assert layout_diagram(nodes, edges) == first

    def test_defaults_are_builtin_tables_and_sugiyama(self):
        nodes, edges = three_tier()
        explicit = layout_diagram(
            nodes, edges, dimensions=DEFAULT_DIMENSIONS, layers=DEFAULT_LAYERS, engine=SugiyamaLayout()
        )
        assert layout_diagram(nodes, edges) == explicit


# ─── Grid and overlap ─────────────────────────────────────────────────────────


class TestGridAlignment:
    @pytest.mark.parametrize("grid", [20, 25, 8])
    def test_every_position_on_grid(self, grid):
        nodes, edges = three_tier()
        for node in layout_diagram(nodes, edges, {"gridSize": grid}):
            assert node.position.x % grid == pytest.approx(0, abs=1e-9)
            assert node.position.y % grid == pytest.approx(0, abs=1e-9)


class TestOverlap:
    def test_no_overlapping_boxes(self):
        nodes, edges = three_tier()
        result = layout_diagram(nodes, edges)
        assert find_overlaps(result, padding=0) == []

    def test_same_rank_nodes_do_not_overlap(self):
        nodes = [_node(f"s{i}", "server") for i in range(4)]
        result = layout_diagram(nodes, [])
        assert len({n.position.y for n in result}) == 1
        assert find_overlaps(result, padding=20) == []


# ─── Layering ─────────────────────────────────────────────────────────────────


class TestManualLayering:
    def test_rank_zero_above_rank_two_against_edge_direction(self):
        layers = LayerTable({"client": 0, "store": 2})
        nodes = [_node("s", "store"), _node("c", "client")]
        result = by_id(layout_diagram(nodes, [_edge("s", "c")], layers=layers))
        assert result["c"].position.y < result["s"].position.y

    def test_default_tiers(self):
        nodes, edges = three_tier()
        result = by_id(layout_diagram(nodes, edges))
        assert result["web"].position.y < result["lb"].position.y < result["api"].position.y
        assert result["api"].position.y < result["svc1"].position.y < result["db"].position.y

    def test_left_to_right(self):
        nodes, edges = three_tier()
        result = by_id(layout_diagram(nodes, edges, {"direction": "LR"}))
        assert result["web"].position.x < result["api"].position.x < result["db"].position.x


class TestAutomaticLayering:
    def test_chain_flows_down(self):
        nodes = [_node("a"), _node("b"), _node("c")]
        result = by_id(layout_diagram(nodes, [_edge("a", "b"), _edge("b", "c")], {"layerAssignment": "auto"}))
        assert result["a"].position.y < result["b"].position.y < result["c"].position.y
        assert result["a"].position.x == result["b"].position.x == result["c"].position.x

    def test_type_does_not_pin_rank(self):
        """A database feeding a frontend goes on top once ranks come from edges."""
        nodes = [_node("web", "frontend"), _node("db", "database")]
        result = by_id(layout_diagram(nodes, [_edge("db", "web")], {"layerAssignment": "auto"}))
        assert result["db"].position.y < result["web"].position.y

    def test_no_edges_single_row(self):
        nodes = [_node("a"), _node("b"), _node("c")]
        result = layout_diagram(nodes, [], {"layerAssignment": "auto"})
        assert len({n.position.y for n in result}) == 1
        assert len({n.position.x for n in result}) == 3

    def test_cycle_ranks(self):
        nodes = [_node("A"), _node("B"), _node("C")]
        edges = [_edge("A", "B"), _edge("B", "C"), _edge("C", "A")]
        result: LayoutResult = run_layout(nodes, edges, LayoutOptions(layer_assignment="auto"))
        ranks = sorted(n.rank for n in result.nodes)
        assert ranks == [0, 1, 2]
        positioned = layout_diagram(nodes, edges, {"layerAssignment": "auto"})
        assert len({n.position.y for n in positioned}) == 3


# ─── Malformed input ──────────────────────────────────────────────────────────


class TestTolerance:
    def test_dangling_edge_ignored(self):
        nodes = [_node("A"), _node("B")]
        options = {"layerAssignment": "auto"}
        with_dangling = layout_diagram(nodes, [_edge("B", "A"), _edge("A", "Z")], options)
        without = layout_diagram(nodes, [_edge("B", "A")], options)
        assert with_dangling == without

    def test_dangling_edge_reported(self):
        result = run_layout([_node("A")], [_edge("A", "Z")], LayoutOptions(layer_assignment="auto"))
        assert [e.target for e in result.skipped_edges] == ["Z"]
        assert result.nodes[0].rank == 0

    def test_unknown_types(self):
        nodes = [_node("a", "quantum"), _node("b", "blockchain")]
        result = layout_diagram(nodes, [_edge("a", "b")])
        assert len(result) == 2

    def test_unknown_option_values(self):
        nodes = [_node("a"), _node("b")]
        result = layout_diagram(nodes, [], {"direction": "sideways", "layerAssignment": "psychic", "colour": "red"})
        assert len(result) == 2

    def test_custom_dimensions(self):
        dims = DimensionTable.from_pairs({"default": (40, 40)})
        nodes = [_node("a"), _node("b")]
        result = layout_diagram(nodes, [], {"padding": 0, "nodeSeparation": 0, "gridSize": 1}, dimensions=dims)
        xs = sorted(n.position.x for n in result)
        assert xs == [0, 60]

    def test_node_missing_from_layout_keeps_position(self):
        class PartialEngine:
            def layout(self, graph, options):
                return LayoutResult(nodes=[], rank_count=0)

        nodes = [NodeRecord(id="a", position=Point(40, 60))]
        result = layout_diagram(nodes, [], engine=PartialEngine())
        assert result[0].position == Point(40, 60)

    @pytest.mark.parametrize(("nodes", "edges"), [("abc", []), ([], None), (None, [])])
    def test_structurally_invalid_arguments(self, nodes, edges):
        with pytest.raises(TypeError):
            layout_diagram(nodes, edges)

    def test_invalid_options_type(self):
        with pytest.raises(TypeError):
            layout_diagram([], [], options=42)  # type: ignore[arg-type]
