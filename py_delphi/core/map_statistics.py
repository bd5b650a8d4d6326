"""
Read-only statistics over a generated board, for diagnostics and dashboards.
"""

from typing import Dict

from pydantic import BaseModel, Field

from .hex_grid import HexGrid
from .placement import find_landlocked_cells, find_unreachable_sea


class MapDimensions(BaseModel):
    """Bounding box of the board in cells."""

    width: int = Field(description="Cells across the q axis")
    height: int = Field(description="Cells across the r axis")


class MapStatistics(BaseModel):
    """Aggregate counts for a board."""

    dimensions: MapDimensions
    total_cells: int = Field(description="Number of cells on the board")
    terrain_counts: Dict[str, int] = Field(description="Cell count per terrain type")
    landlocked_cells: int = Field(
        default=0, description="Land cells without a sea, shallow or zeus neighbour"
    )
    unreachable_sea_cells: int = Field(
        default=0, description="Sea cells with no sea path back to zeus"
    )


def compute_map_statistics(grid: HexGrid) -> MapStatistics:
    return MapStatistics(
        dimensions=MapDimensions(width=grid.width, height=grid.height),
        total_cells=len(grid),
        terrain_counts={terrain.value: n for terrain, n in grid.terrain_counts().items()},
        landlocked_cells=len(find_landlocked_cells(grid)),
        unreachable_sea_cells=len(find_unreachable_sea(grid)),
    )
