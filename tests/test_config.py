"""Tests for LayoutOptions and the Direction / LayerAssignment enums."""

import dataclasses

import pytest

from diagram_layout.config import LayoutOptions
from diagram_layout.types import Direction, LayerAssignment


class TestDefaults:
    def test_defaults(self):
        opts = LayoutOptions()
        assert opts.direction is Direction.TB
        assert opts.node_separation == 80
        assert opts.rank_separation == 120
        assert opts.edge_spacing == 10
        assert opts.padding == 50
        assert opts.layer_assignment is LayerAssignment.MANUAL
        assert opts.grid_size == 20
        assert opts.overlap_padding == 20
        assert opts.overlap_passes == 1

    def test_frozen(self):
        opts = LayoutOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.padding = 0  # type: ignore[misc]

    def test_strings_converted_to_enums(self):
        opts = LayoutOptions(direction="lr", layer_assignment="AUTO")
        assert opts.direction is Direction.LR
        assert opts.layer_assignment is LayerAssignment.AUTO
        assert opts.is_horizontal
        assert not opts.is_manual


class TestFromMapping:
    def test_none_gives_defaults(self):
        assert LayoutOptions.from_mapping(None) == LayoutOptions()

    def test_partial_snake_case(self):
        opts = LayoutOptions.from_mapping({"padding": 10})
        assert opts.padding == 10
        assert opts.rank_separation == 120

    def test_camel_case_aliases(self):
        opts = LayoutOptions.from_mapping(
            {"nodeSeparation": 40, "rankSeparation": 60, "gridSize": 10, "layerAssignment": "auto", "direction": "LR"}
        )
        assert opts.node_separation == 40
        assert opts.rank_separation == 60
        assert opts.grid_size == 10
        assert opts.layer_assignment is LayerAssignment.AUTO
        assert opts.direction is Direction.LR

    def test_unknown_keys_ignored(self):
        assert LayoutOptions.from_mapping({"edgeRouting": "ortho"}) == LayoutOptions()

    def test_none_values_keep_defaults(self):
        assert LayoutOptions.from_mapping({"padding": None}).padding == 50

    def test_unknown_enum_values_fall_back(self):
        opts = LayoutOptions.from_mapping({"direction": "diagonal", "layerAssignmentMode": "random"})
        assert opts.direction is Direction.TB
        assert opts.layer_assignment is LayerAssignment.MANUAL


class TestValidation:
    @pytest.mark.parametrize("name", ["node_separation", "rank_separation", "edge_spacing", "padding"])
    def test_negative_spacing_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            LayoutOptions(**{name: -1})

    @pytest.mark.parametrize("grid", [0, -20])
    def test_grid_size_must_be_positive(self, grid):
        with pytest.raises(ValueError, match="grid_size"):
            LayoutOptions(grid_size=grid)

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError):
            LayoutOptions(padding="wide")  # type: ignore[arg-type]

    def test_overlap_passes_at_least_one(self):
        with pytest.raises(ValueError, match="overlap_passes"):
            LayoutOptions(overlap_passes=0)


class TestEnums:
    def test_direction_aliases(self):
        assert Direction.parse("TD") is Direction.TB
        assert Direction.parse("tb") is Direction.TB
        assert Direction.parse(Direction.LR) is Direction.LR

    def test_layering_aliases(self):
        assert LayerAssignment.parse("automatic") is LayerAssignment.AUTO
        assert LayerAssignment.parse("manual") is LayerAssignment.MANUAL

    def test_unknown_direction_warns(self, caplog):
        assert Direction.parse("BT") is Direction.default()
        assert "Unknown direction" in caplog.text
