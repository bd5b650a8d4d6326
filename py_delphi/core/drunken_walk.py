"""
Drunken-walk board generator.

The sea is grown outward from the ring around zeus by random walkers, so
every sea cell is connected to the centre and no enclosed lakes can form.
The remaining land is then repaired, thinned into shallows and decorated.

Process:
1. initialize_land() - every cell starts as scratch land ("foundations")
2. carve_sea() - zeus at the origin, walkers from the six ring cells turn land into sea
3. repair_landlocked() - land without any water neighbour becomes shallow
4. convert_residual_land() - half of the scratch land becomes shallow
5. convert_water_adjacent_land() - a bounded number of extra shallows
6. place_cities() - one city attempt per hexagon corner
7. place_remaining_terrain() - cubes, temples, foundations, monsters, clouds
8. settle_scratch_land() - leftover scratch land becomes shallow
9. convert_sea_to_shallows() - optional, off unless requested in the options
"""

import math
from typing import Dict, List, Optional, Set

import structlog
from pydantic import Field

from .alea_prng import AleaPRNG
from .hex_geometry import ORIGIN, Coord, get_adjacent, get_corner
from .hex_grid import HexCell, HexGrid
from .map_generator import GeneratorOptions, MapGenerator
from .placement import (
    PlacementValidator,
    convert_sea_to_shallows,
    is_adjacent_to_water,
    is_valid_placement,
    place_special_terrain,
)
from .terrain import Terrain, TerrainTargets

logger = structlog.get_logger()

# Unassigned land during construction
SCRATCH_LAND = Terrain.FOUNDATIONS


class DrunkenWalkOptions(GeneratorOptions):
    """Options for the drunken-walk generator."""

    land_ratio: float = Field(
        default=0.6, gt=0.0, le=1.0, description="Share of cells meant to stay out of the sea"
    )
    stop_short_ratio: float = Field(
        default=0.85,
        gt=0.0,
        le=1.0,
        description="Walkers stop once land drops to this share of the land target",
    )
    residual_shallow_ratio: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Share of scratch land turned into shallows"
    )
    max_extra_shallows: int = Field(
        default=10, ge=0, description="Extra water-adjacent land converted to shallows"
    )
    city_max_offset: int = Field(
        default=2, ge=0, description="How far from its corner a city may be moved"
    )


def initialize_land(radius: int) -> HexGrid:
    return HexGrid(radius, terrain=SCRATCH_LAND)


def count_non_sea(grid: HexGrid) -> int:
    return sum(1 for cell in grid if cell.terrain not in (Terrain.SEA, Terrain.ZEUS))


def land_stop_target(total_cells: int, land_ratio: float = 0.6, stop_short_ratio: float = 0.85) -> int:
    """Land count at or below which the walkers stop carving."""
    target_non_sea = math.floor(total_cells * land_ratio)
    return math.floor(target_non_sea * stop_short_ratio)


def carve_sea(
    grid: HexGrid,
    prng: AleaPRNG,
    land_ratio: float = 0.6,
    stop_short_ratio: float = 0.85,
) -> int:
    """
    Place zeus and grow the sea with one walker per ring cell.

    Each step picks a random live walker and moves it to the first scratch
    neighbour in a shuffled direction order, turning that cell into sea. A
    walker with nowhere to go is retired.

    Returns:
        Number of cells turned into sea
    """
    zeus = grid.get_cell(*ORIGIN)
    zeus.terrain = Terrain.ZEUS

    stop_target = land_stop_target(len(grid), land_ratio, stop_short_ratio)

    walkers: List[List[int]] = []
    carved = 0
    for direction in range(6):
        q, r = get_adjacent(ORIGIN[0], ORIGIN[1], direction)
        cell = grid.get_cell(q, r)
        if cell is not None and cell.terrain == SCRATCH_LAND:
            cell.terrain = Terrain.SEA
            walkers.append([q, r])
            carved += 1

    non_sea = count_non_sea(grid)
    while non_sea > stop_target and walkers:
        walker_index = prng.randrange(len(walkers))
        walker = walkers[walker_index]

        directions = [0, 1, 2, 3, 4, 5]
        prng.shuffle(directions)

        moved = False
        for direction in directions:
            q, r = get_adjacent(walker[0], walker[1], direction)
            cell = grid.get_cell(q, r)
            if cell is not None and cell.terrain == SCRATCH_LAND:
                cell.terrain = Terrain.SEA
                walker[0], walker[1] = q, r
                carved += 1
                non_sea -= 1
                moved = True
                break

        if not moved:
            walkers.pop(walker_index)

    logger.info(
        "Sea carved",
        carved=carved,
        land_remaining=non_sea,
        stop_target=stop_target,
        walkers_left=len(walkers),
    )
    return carved


def repair_landlocked(grid: HexGrid) -> List[Coord]:
    """Turn every land cell without a sea, shallow or zeus neighbour into shallow."""
    candidates = [cell for cell in grid if cell.terrain not in (Terrain.SEA, Terrain.ZEUS)]
    repaired = []
    for cell in candidates:
        if not is_adjacent_to_water(cell, grid):
            cell.terrain = Terrain.SHALLOW
            repaired.append(cell.coord)

    if repaired:
        logger.info("Landlocked tiles repaired", count=len(repaired))
    return repaired


def convert_residual_land(grid: HexGrid, prng: AleaPRNG, ratio: float = 0.5) -> int:
    """Shuffle the scratch land and turn the first ``floor(n * ratio)`` cells into shallows."""
    scratch = grid.get_cells_by_terrain(SCRATCH_LAND)
    prng.shuffle(scratch)
    count = math.floor(len(scratch) * ratio)
    for cell in scratch[:count]:
        cell.terrain = Terrain.SHALLOW
    return count


def convert_water_adjacent_land(grid: HexGrid, prng: AleaPRNG, limit: int = 10) -> int:
    """Turn up to ``limit`` random water-adjacent scratch cells into shallows."""
    eligible = [
        cell for cell in grid.get_cells_by_terrain(SCRATCH_LAND) if is_adjacent_to_water(cell, grid)
    ]
    prng.shuffle(eligible)
    count = min(len(eligible), limit)
    for cell in eligible[:count]:
        cell.terrain = Terrain.SHALLOW
    return count


def place_cities(
    grid: HexGrid, prng: AleaPRNG, max_offset: int = 2, limit: int = 6
) -> Dict[int, Optional[HexCell]]:
    """
    Try to place one city near each of the six hexagon corners.

    From the corner the city is moved 0..``max_offset`` hexes along the
    corner direction rotated by +2 or +4, which runs along the board edge.
    If that cell is not shallow the corner itself is tried; otherwise the
    corner gets no city. Corners are no longer tried once ``limit`` cities
    stand.

    Returns:
        The city cell for each attempted corner direction, None where none was placed
    """
    cities: Dict[int, Optional[HexCell]] = {}

    for corner_direction in range(6):
        if sum(1 for city in cities.values() if city is not None) >= limit:
            break
        corner_q, corner_r = get_corner(corner_direction, grid.radius)
        direction_offset = 2 if prng.random() < 0.5 else 4
        placement_direction = (corner_direction + direction_offset) % 6
        distance = prng.randrange(max_offset + 1)

        q, r = corner_q, corner_r
        for _ in range(distance):
            q, r = get_adjacent(q, r, placement_direction)

        city = None
        for cell in (grid.get_cell(q, r), grid.get_cell(corner_q, corner_r)):
            if cell is not None and cell.terrain == Terrain.SHALLOW:
                cell.terrain = Terrain.CITY
                city = cell
                break

        if city is None:
            logger.warning(
                "No shallow cell for city",
                corner=(corner_q, corner_r),
                attempted=(q, r),
            )
        cities[corner_direction] = city

    return cities


def place_remaining_terrain(
    grid: HexGrid,
    prng: AleaPRNG,
    targets: TerrainTargets,
    validator: PlacementValidator = is_valid_placement,
) -> Dict[Terrain, int]:
    """Place every special terrain except cities, which sit at the corners already."""
    return place_special_terrain(
        grid, targets.placements(include_city=False), prng, validator=validator
    )


def settle_scratch_land(grid: HexGrid, scratch: Set[Coord]) -> int:
    """Turn cells still holding scratch land into shallows."""
    settled = 0
    for q, r in scratch:
        cell = grid.get_cell(q, r)
        if cell is not None and cell.terrain == SCRATCH_LAND:
            cell.terrain = Terrain.SHALLOW
            settled += 1
    return settled


class DrunkenWalkMapGenerator(MapGenerator):
    """Sea grown by random walkers, then land repaired and decorated."""

    name = "drunken_walk"
    options_class = DrunkenWalkOptions

    def _build_grid(self) -> HexGrid:
        options = self.options
        grid = initialize_land(self.radius)

        carve_sea(grid, self.prng, options.land_ratio, options.stop_short_ratio)
        repair_landlocked(grid)
        convert_residual_land(grid, self.prng, options.residual_shallow_ratio)
        convert_water_adjacent_land(grid, self.prng, options.max_extra_shallows)

        self.cities = place_cities(
            grid, self.prng, options.city_max_offset, limit=options.targets.city
        )

        # Placed foundations come from shallow cells, so record the scratch land first
        scratch = {cell.coord for cell in grid.get_cells_by_terrain(SCRATCH_LAND)}
        self.placed_counts = place_remaining_terrain(
            grid, self.prng, options.targets, validator=options.placement_validator()
        )
        self.placed_counts[Terrain.CITY] = sum(1 for city in self.cities.values() if city is not None)
        settle_scratch_land(grid, scratch)

        if options.sea_to_shallow_attempts:
            convert_sea_to_shallows(grid, self.prng, options.sea_to_shallow_attempts)

        return grid
