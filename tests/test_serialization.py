"""Tests for board serialization and restoring boards without regeneration."""

import copy

import pytest

from py_delphi.core.baseline_generator import BaselineMapGenerator
from py_delphi.core.drunken_walk import DrunkenWalkMapGenerator
from py_delphi.core.hex_grid import HexGrid
from py_delphi.core.terrain import HexColor, Terrain


class TestSerialize:
    """Test the serialized form."""

    @pytest.fixture
    def generator(self):
        return DrunkenWalkMapGenerator(seed="serialize")

    def test_shape(self, generator):
        data = generator.serialize()
        assert len(data) == 13
        assert sum(len(row) for row in data) == 127
        assert set(data[0][0]) == {"q", "r", "terrain", "color"}

    def test_plain_values(self, generator):
        for row in generator.serialize():
            for record in row:
                assert type(record["terrain"]) is str
                assert type(record["color"]) is str
                assert Terrain(record["terrain"])

    def test_is_a_copy(self, generator):
        data = generator.serialize()
        data[6][6]["terrain"] = "city"
        assert generator.get_cell(0, 0).terrain == Terrain.ZEUS


class TestDeserialize:
    """Test restoring boards."""

    def test_round_trip_keeps_colors(self):
        generator = BaselineMapGenerator(seed="colors")
        generator.set_cell_color(2, -1, HexColor.RED)
        generator.set_cell_color(-3, 3, "yellow")

        restored = BaselineMapGenerator.deserialize(generator.serialize())

        assert restored.serialize() == generator.serialize()
        assert restored.get_cell(2, -1).color == HexColor.RED
        assert restored.get_cell(-3, 3).color == HexColor.YELLOW
        assert restored.seed is None
        assert restored.radius == 6

    def test_restored_grid_is_queryable(self):
        data = HexGrid(2).serialize()
        grid = HexGrid.deserialize(data)
        assert len(grid) == 19
        assert len(grid.get_neighbors(0, 0)) == 6
        assert grid.get_cell(3, 0) is None

    def test_row_order_is_restored(self):
        data = HexGrid(2).serialize()
        shuffled = [list(reversed(row)) for row in data]
        assert HexGrid.deserialize(shuffled).serialize() == data

    @pytest.mark.parametrize("data", [[], [[], []]])
    def test_bad_row_count(self, data):
        with pytest.raises(ValueError):
            HexGrid.deserialize(data)

    def test_missing_cell(self):
        data = HexGrid(2).serialize()
        data[2].pop()
        with pytest.raises(ValueError):
            HexGrid.deserialize(data)

    def test_duplicate_cell(self):
        data = HexGrid(2).serialize()
        data[2][0] = copy.deepcopy(data[2][1])
        with pytest.raises(ValueError):
            HexGrid.deserialize(data)

    def test_out_of_radius(self):
        data = HexGrid(1).serialize()
        data[0][0]["q"] = 5
        with pytest.raises(ValueError):
            HexGrid.deserialize(data)

    @pytest.mark.parametrize("field,value", [("terrain", "lava"), ("color", "purple")])
    def test_unknown_values(self, field, value):
        data = HexGrid(1).serialize()
        data[1][1][field] = value
        with pytest.raises(ValueError):
            HexGrid.deserialize(data)
