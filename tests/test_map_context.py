"""Tests for the map context used by serving layers."""

import pytest

from py_delphi.api import GENERATORS, MapContext, MapPayload
from py_delphi.api.context import get_generator_class
from py_delphi.core.baseline_generator import BaselineMapGenerator, BaselineOptions
from py_delphi.core.drunken_walk import DrunkenWalkMapGenerator
from py_delphi.core.terrain import HexColor, Terrain, TerrainTargets


class TestGeneratorRegistry:
    """Test generator lookup."""

    def test_registered_generators(self):
        assert GENERATORS == {
            "baseline": BaselineMapGenerator,
            "drunken_walk": DrunkenWalkMapGenerator,
        }

    def test_unknown_generator(self):
        with pytest.raises(ValueError):
            get_generator_class("perlin")
        with pytest.raises(ValueError):
            MapContext(default_generator="perlin")


class TestMapContext:
    """Test the current-board lifecycle."""

    @pytest.fixture
    def context(self):
        return MapContext(default_generator="drunken_walk")

    def test_starts_empty(self, context):
        assert context.current_map is None

    def test_lazy_generation(self, context):
        current = context.get_current_map()
        assert isinstance(current, DrunkenWalkMapGenerator)
        assert context.get_current_map() is current

    def test_generate_new_map(self, context):
        first = context.generate_new_map(seed="one")
        second = context.generate_new_map(generator="baseline", seed="two")
        assert first is not second
        assert context.current_map is second
        assert isinstance(second, BaselineMapGenerator)

    def test_options_are_passed_through(self, context):
        options = BaselineOptions(targets=TerrainTargets(clouds=0))
        current = context.generate_new_map(generator="baseline", seed="calm", options=options)
        assert current.grid.count_terrain(Terrain.CLOUDS) == 0

    def test_get_map(self, context):
        context.generate_new_map(seed="payload")
        payload = context.get_map()
        assert isinstance(payload, MapPayload)
        assert payload.dimensions.width == 13
        assert payload.dimensions.height == 13
        assert payload.generator == "drunken_walk"
        assert payload.seed == "payload"
        assert sum(len(row) for row in payload.map) == 127
        dumped = payload.model_dump()
        assert dumped["map"][6][6]["terrain"] == "zeus"

    def test_statistics(self, context):
        context.generate_new_map(seed="stats")
        stats = context.get_statistics()
        assert stats.total_cells == 127
        assert sum(stats.terrain_counts.values()) == 127
        assert stats.terrain_counts["zeus"] == 1
        assert stats.unreachable_sea_cells == 0

    def test_set_cell_color(self, context):
        context.generate_new_map(seed="paint")
        context.set_cell_color(1, 1, "pink")
        assert context.get_current_map().get_cell(1, 1).color == HexColor.PINK

    def test_load_map(self, context):
        original = context.generate_new_map(seed="stored")
        data = original.serialize()

        other = MapContext()
        loaded = other.load_map(data, generator="drunken_walk")

        assert other.current_map is loaded
        assert loaded.serialize() == data

    def test_radius(self):
        context = MapContext(default_generator="baseline", radius=3)
        assert len(context.get_current_map().grid) == 37
