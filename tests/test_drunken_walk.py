"""
Tests for the drunken-walk board generator.

Phase functions are tested one at a time where their guarantees hold,
then the whole generator is checked for the properties of a finished board.
"""

import pytest

from py_delphi.core.alea_prng import AleaPRNG
from py_delphi.core.drunken_walk import (
    SCRATCH_LAND,
    DrunkenWalkMapGenerator,
    DrunkenWalkOptions,
    carve_sea,
    convert_residual_land,
    convert_water_adjacent_land,
    count_non_sea,
    initialize_land,
    land_stop_target,
    place_cities,
    repair_landlocked,
    settle_scratch_land,
)
from py_delphi.core.hex_geometry import ORIGIN, get_corner, hex_distance
from py_delphi.core.hex_grid import HexGrid
from py_delphi.core.placement import (
    find_landlocked_cells,
    find_unreachable_sea,
)
from py_delphi.core.terrain import PLACEMENT_ORDER, Terrain, TerrainTargets


class TestDrunkenWalkOptions:
    """Test option defaults."""

    def test_defaults(self):
        options = DrunkenWalkOptions()
        assert options.land_ratio == 0.6
        assert options.stop_short_ratio == 0.85
        assert options.residual_shallow_ratio == 0.5
        assert options.max_extra_shallows == 10
        assert options.city_max_offset == 2

    def test_stop_target(self):
        assert land_stop_target(127) == 64
        assert land_stop_target(127, land_ratio=1.0, stop_short_ratio=1.0) == 127


class TestCarveSea:
    """Test the random-walk sea carving."""

    @pytest.fixture
    def carved_grid(self):
        grid = initialize_land(6)
        carved = carve_sea(grid, AleaPRNG("walk"))
        return grid, carved

    def test_initial_land(self):
        grid = initialize_land(6)
        assert grid.count_terrain(SCRATCH_LAND) == 127

    def test_zeus_and_ring(self, carved_grid):
        grid, _ = carved_grid
        assert grid.get_cell(*ORIGIN).terrain == Terrain.ZEUS
        assert all(n.terrain == Terrain.SEA for n in grid.get_neighbors(*ORIGIN))

    def test_carved_count(self, carved_grid):
        grid, carved = carved_grid
        assert grid.count_terrain(Terrain.SEA) == carved
        assert count_non_sea(grid) == 127 - 1 - carved
        assert count_non_sea(grid) >= 64
        assert grid.count_terrain(SCRATCH_LAND) == count_non_sea(grid)

    def test_sea_is_connected(self, carved_grid):
        grid, _ = carved_grid
        assert find_unreachable_sea(grid) == []

    def test_low_target_keeps_sea_connected(self):
        grid = initialize_land(2)
        carved = carve_sea(grid, AleaPRNG("all"), land_ratio=0.1, stop_short_ratio=0.1)
        assert grid.count_terrain(Terrain.SEA) == carved
        assert carved >= 6
        assert find_unreachable_sea(grid) == []


class TestRepairLandlocked:
    """Test landlocked repair."""

    def test_no_landlocked_after_repair(self):
        for seed in ("a", "b", "c", "d"):
            grid = initialize_land(6)
            carve_sea(grid, AleaPRNG(seed))
            repair_landlocked(grid)
            assert find_landlocked_cells(grid) == []

    def test_hand_built_grid(self):
        grid = HexGrid(2, terrain=SCRATCH_LAND)
        grid.get_cell(2, -2).terrain = Terrain.SEA
        repaired = repair_landlocked(grid)
        assert repaired
        assert all(grid.get_cell(q, r).terrain == Terrain.SHALLOW for q, r in repaired)
        assert find_landlocked_cells(grid) == []
        # cells touching the sea keep their land
        assert grid.get_cell(1, -1).terrain == SCRATCH_LAND


class TestShallowConversion:
    """Test the two land-to-shallow phases."""

    def test_residual_land(self):
        grid = HexGrid(2, terrain=SCRATCH_LAND)
        converted = convert_residual_land(grid, AleaPRNG("half"), ratio=0.5)
        assert converted == 9
        assert grid.count_terrain(Terrain.SHALLOW) == 9
        assert grid.count_terrain(SCRATCH_LAND) == 10

    def test_water_adjacent_limit(self):
        grid = HexGrid(2, terrain=SCRATCH_LAND)
        grid.get_cell(0, 0).terrain = Terrain.SEA
        converted = convert_water_adjacent_land(grid, AleaPRNG("extra"), limit=4)
        assert converted == 4
        for cell in grid.get_cells_by_terrain(Terrain.SHALLOW):
            assert hex_distance(cell.coord, ORIGIN) == 1

    def test_water_adjacent_runs_dry(self):
        grid = HexGrid(2, terrain=SCRATCH_LAND)
        grid.get_cell(0, 0).terrain = Terrain.SEA
        assert convert_water_adjacent_land(grid, AleaPRNG("extra"), limit=10) == 6

    def test_settle_scratch_land(self):
        grid = HexGrid(1, terrain=SCRATCH_LAND)
        scratch = {cell.coord for cell in grid}
        grid.get_cell(0, 0).terrain = Terrain.ZEUS
        assert settle_scratch_land(grid, scratch) == 6
        assert grid.count_terrain(SCRATCH_LAND) == 0
        assert grid.get_cell(0, 0).terrain == Terrain.ZEUS


class TestPlaceCities:
    """Test corner city placement."""

    def test_cities_near_corners(self, shallow_grid):
        cities = place_cities(shallow_grid, AleaPRNG("cities"))
        assert sorted(cities) == list(range(6))
        for direction, city in cities.items():
            assert city is not None
            assert city.terrain == Terrain.CITY
            assert hex_distance(city.coord, get_corner(direction)) <= 2
            assert hex_distance(city.coord, ORIGIN) == 6

    def test_fallback_to_corner(self):
        grid = HexGrid(6, terrain=Terrain.SEA)
        for direction in range(6):
            grid.get_cell(*get_corner(direction)).terrain = Terrain.SHALLOW
        cities = place_cities(grid, AleaPRNG("corners"))
        assert [city.coord for city in cities.values()] == [get_corner(d) for d in range(6)]

    def test_no_shallow_cells(self):
        grid = HexGrid(6, terrain=Terrain.SEA)
        cities = place_cities(grid, AleaPRNG("none"))
        assert cities == {direction: None for direction in range(6)}
        assert grid.count_terrain(Terrain.CITY) == 0

    def test_limit(self, shallow_grid):
        cities = place_cities(shallow_grid, AleaPRNG("cities"), limit=2)
        assert len(cities) == 2
        assert shallow_grid.count_terrain(Terrain.CITY) == 2

    def test_zero_offset_uses_corners(self, shallow_grid):
        cities = place_cities(shallow_grid, AleaPRNG("cities"), max_offset=0)
        assert [city.coord for city in cities.values()] == [get_corner(d) for d in range(6)]


class TestDrunkenWalkMapGenerator:
    """Test full drunken-walk generation."""

    @pytest.fixture(params=["delphi", "oracle", "zeus"])
    def generator(self, request):
        return DrunkenWalkMapGenerator(seed=request.param)

    def test_board_shape(self, generator):
        assert len(generator.grid) == 127
        assert generator.name == "drunken_walk"
        assert len(generator.get_cells_by_terrain(Terrain.ZEUS)) == 1
        assert generator.get_cell(0, 0).terrain == Terrain.ZEUS

    def test_special_counts_within_targets(self, generator):
        targets = generator.options.targets
        for terrain in PLACEMENT_ORDER:
            count = generator.grid.count_terrain(terrain)
            assert count == generator.placed_counts[terrain]
            assert count <= targets.target_for(terrain)

    def test_cities(self, generator):
        assert len(generator.cities) == 6
        placed = [city for city in generator.cities.values() if city is not None]
        assert generator.grid.count_terrain(Terrain.CITY) == len(placed)

    def test_sea_reaches_zeus(self, generator):
        assert find_unreachable_sea(generator.grid) == []

    def test_no_scratch_land_left_over(self, generator):
        foundations = generator.grid.count_terrain(Terrain.FOUNDATIONS)
        assert foundations == generator.placed_counts[Terrain.FOUNDATIONS]

    def test_same_seed_same_board(self):
        first = DrunkenWalkMapGenerator(seed="repeat")
        second = DrunkenWalkMapGenerator(seed="repeat")
        assert first.serialize() == second.serialize()

    def test_city_limit_follows_targets(self):
        options = DrunkenWalkOptions(targets=TerrainTargets(city=3))
        generator = DrunkenWalkMapGenerator(options, seed="few-cities")
        assert generator.grid.count_terrain(Terrain.CITY) <= 3
