"""
Base class shared by the board generators.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import structlog
from pydantic import BaseModel, Field

from ..utils import random as random_utils
from .alea_prng import AleaPRNG
from .hex_geometry import MAP_RADIUS
from .hex_grid import HexCell, HexGrid
from .placement import PlacementValidator, make_placement_validator
from .terrain import HexColor, Terrain, TerrainTargets

logger = structlog.get_logger()


class GeneratorOptions(BaseModel):
    """Options common to every generator."""

    targets: TerrainTargets = Field(
        default_factory=TerrainTargets, description="Special terrain counts to aim for"
    )
    sea_to_shallow_attempts: int = Field(
        default=0,
        ge=0,
        description="Random sea cells to try turning back into shallows (0 = off)",
    )
    max_landmass_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Reject placements that join a landmass larger than this",
    )

    def placement_validator(self) -> PlacementValidator:
        return make_placement_validator(self.max_landmass_size)


class MapGenerator:
    """
    Builds one board in its constructor and answers queries about it.

    Subclasses implement ``_build_grid``. The grid shape never changes after
    construction; terrain and colour may still be edited through setters.
    """

    name = "base"
    options_class = GeneratorOptions

    def __init__(
        self,
        options: Optional[GeneratorOptions] = None,
        seed: Optional[str] = None,
        prng: Optional[AleaPRNG] = None,
        radius: int = MAP_RADIUS,
    ):
        """
        Generate a board.

        Args:
            options: Generator options, defaults to ``options_class()``
            seed: Seed for a private PRNG, making the board reproducible
            prng: PRNG to draw from instead (takes precedence over ``seed``)
            radius: Board radius in hexes
        """
        self.options = options or self.options_class()
        self.seed = seed
        self.radius = radius
        self.prng = random_utils.resolve_prng(seed, prng)

        logger.info("Generating board", generator=self.name, seed=seed, radius=radius)
        self.grid = self._build_grid()
        logger.info(
            "Board generated",
            generator=self.name,
            terrain_counts={t.value: n for t, n in self.grid.terrain_counts().items() if n},
        )

    def _build_grid(self) -> HexGrid:
        raise NotImplementedError

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def get_grid(self) -> List[List[HexCell]]:
        return self.grid.get_grid()

    def get_cell(self, q, r) -> Optional[HexCell]:
        return self.grid.get_cell(q, r)

    def get_neighbors(self, q: int, r: int) -> List[HexCell]:
        return self.grid.get_neighbors(q, r)

    def get_cells_by_terrain(self, terrain: Union[Terrain, str]) -> List[HexCell]:
        return self.grid.get_cells_by_terrain(terrain)

    def set_cell_color(self, q: int, r: int, color: Union[HexColor, str]) -> None:
        self.grid.set_cell_color(q, r, color)

    def serialize(self) -> List[List[Dict[str, Any]]]:
        return self.grid.serialize()

    @classmethod
    def deserialize(cls, data: Sequence[Sequence[Any]]) -> "MapGenerator":
        """Wrap a stored board in a generator instance without regenerating it."""
        generator = cls.__new__(cls)
        generator.options = cls.options_class()
        generator.seed = None
        generator.prng = None
        generator.grid = HexGrid.deserialize(data)
        generator.radius = generator.grid.radius
        return generator
