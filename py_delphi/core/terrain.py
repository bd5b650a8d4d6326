"""
Terrain and colour vocabularies plus the special-terrain placement targets.
"""

from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, Field


class Terrain(str, Enum):
    """Terrain types a board cell can carry."""

    ZEUS = "zeus"
    SEA = "sea"
    SHALLOW = "shallow"
    MONSTERS = "monsters"
    CUBES = "cubes"
    TEMPLE = "temple"
    CLOUDS = "clouds"
    CITY = "city"
    FOUNDATIONS = "foundations"


class HexColor(str, Enum):
    """Player marking colours. Not used by generation."""

    NONE = "none"
    RED = "red"
    PINK = "pink"
    BLUE = "blue"
    BLACK = "black"
    GREEN = "green"
    YELLOW = "yellow"


# Terrains that count as water for adjacency and connectivity checks
WATER_TERRAINS = frozenset({Terrain.SEA, Terrain.SHALLOW, Terrain.ZEUS})

# Order in which special terrain is handed out from the shuffled pool
PLACEMENT_ORDER: Tuple[Terrain, ...] = (
    Terrain.CUBES,
    Terrain.TEMPLE,
    Terrain.FOUNDATIONS,
    Terrain.MONSTERS,
    Terrain.CLOUDS,
    Terrain.CITY,
)


class TerrainTargets(BaseModel):
    """How many cells of each special terrain a board should receive."""

    cubes: int = Field(default=6, ge=0, description="Offering cube locations")
    temple: int = Field(default=6, ge=0, description="Temple locations")
    foundations: int = Field(default=6, ge=0, description="Statue foundation locations")
    monsters: int = Field(default=9, ge=0, description="Monster locations")
    clouds: int = Field(default=12, ge=0, description="Cloud locations")
    city: int = Field(default=6, ge=0, description="City locations")

    def target_for(self, terrain: Terrain) -> int:
        return getattr(self, terrain.value, 0)

    def placements(self, include_city: bool = True) -> List[Tuple[Terrain, int]]:
        """(terrain, count) pairs in placement order."""
        return [
            (terrain, self.target_for(terrain))
            for terrain in PLACEMENT_ORDER
            if include_city or terrain is not Terrain.CITY
        ]
