"""
Baseline board generator.

Process:
1. seed_terrain() - zeus at the centre, sea on the six ring cells, shallow elsewhere
2. place_special_terrain() - shuffled greedy placement of cubes, temples,
   foundations, monsters, clouds and cities under the placement policy
3. convert_sea_to_shallows() - optional, off unless requested in the options
"""

from typing import Dict

import structlog

from .alea_prng import AleaPRNG
from .hex_geometry import ORIGIN, ring_coords
from .hex_grid import HexGrid
from .map_generator import GeneratorOptions, MapGenerator
from .placement import convert_sea_to_shallows, place_special_terrain
from .terrain import Terrain

logger = structlog.get_logger()


class BaselineOptions(GeneratorOptions):
    """Options for the baseline generator."""


def seed_terrain(grid: HexGrid) -> None:
    """Zeus at the origin, sea on the ring around it, shallow everywhere else."""
    ring = set(ring_coords(1))
    for cell in grid:
        if cell.coord == ORIGIN:
            cell.terrain = Terrain.ZEUS
        elif cell.coord in ring:
            cell.terrain = Terrain.SEA
        else:
            cell.terrain = Terrain.SHALLOW


def place_baseline_terrain(
    grid: HexGrid, prng: AleaPRNG, options: BaselineOptions
) -> Dict[Terrain, int]:
    return place_special_terrain(
        grid,
        options.targets.placements(include_city=True),
        prng,
        validator=options.placement_validator(),
    )


class BaselineMapGenerator(MapGenerator):
    """Distance-based seeding followed by randomized special-terrain placement."""

    name = "baseline"
    options_class = BaselineOptions

    def _build_grid(self) -> HexGrid:
        grid = HexGrid(self.radius, terrain=Terrain.SHALLOW)

        seed_terrain(grid)
        logger.info("Seeded baseline terrain", shallow=grid.count_terrain(Terrain.SHALLOW))

        self.placed_counts = place_baseline_terrain(grid, self.prng, self.options)

        if self.options.sea_to_shallow_attempts:
            convert_sea_to_shallows(grid, self.prng, self.options.sea_to_shallow_attempts)

        return grid
