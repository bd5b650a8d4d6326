"""
Hexagon-shaped grid container.

Cells are stored q-major in jagged rows: row ``q + radius`` holds every
valid ``r`` for that ``q`` in ascending order. A dense numpy index table maps
``(q + radius, r + radius)`` to a position in the flat cell list so lookups
are O(1).
"""

from collections import Counter
from numbers import Integral
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .hex_geometry import MAP_RADIUS, Coord, cell_count, hexagon_coords, is_within_radius, neighbor_coords
from .terrain import HexColor, Terrain

# Index table marker for coordinates outside the hexagon
NO_CELL = -1


class HexCell:
    """A single board cell. ``q``/``r`` are fixed, terrain and colour are not."""

    __slots__ = ("_q", "_r", "terrain", "color")

    def __init__(
        self,
        q: int,
        r: int,
        terrain: Terrain = Terrain.SHALLOW,
        color: HexColor = HexColor.NONE,
    ):
        self._q = int(q)
        self._r = int(r)
        self.terrain = Terrain(terrain)
        self.color = HexColor(color)

    @property
    def q(self) -> int:
        return self._q

    @property
    def r(self) -> int:
        return self._r

    @property
    def coord(self) -> Coord:
        return self._q, self._r

    def to_record(self) -> Dict[str, Any]:
        return {
            "q": self._q,
            "r": self._r,
            "terrain": self.terrain.value,
            "color": self.color.value,
        }

    def __repr__(self) -> str:
        return f"HexCell(q={self._q}, r={self._r}, terrain={self.terrain.value}, color={self.color.value})"


class CellRecord(BaseModel):
    """Transport form of a cell."""

    model_config = ConfigDict(use_enum_values=True)

    q: int = Field(description="Axial q coordinate")
    r: int = Field(description="Axial r coordinate")
    terrain: Terrain = Field(description="Terrain type")
    color: HexColor = Field(default=HexColor.NONE, description="Player colour")


class HexGrid:
    """Owns every cell of a radius-``radius`` hexagon board."""

    def __init__(self, radius: int = MAP_RADIUS, terrain: Terrain = Terrain.SHALLOW):
        """
        Build a grid where every cell starts with ``terrain``.

        Args:
            radius: Hexagon radius in hexes
            terrain: Initial terrain for every cell
        """
        if radius < 0:
            raise ValueError(f"radius cannot be negative, got {radius}")

        self.radius = radius
        self.width = 2 * radius + 1
        self.height = 2 * radius + 1

        self._cells: List[HexCell] = []
        self._index = np.full((self.width, self.height), NO_CELL, dtype=np.int32)
        self.rows: List[List[HexCell]] = [[] for _ in range(self.width)]

        for q, r in hexagon_coords(radius):
            self._add_cell(HexCell(q, r, terrain))

    def _add_cell(self, cell: HexCell) -> None:
        self._index[cell.q + self.radius, cell.r + self.radius] = len(self._cells)
        self._cells.append(cell)
        self.rows[cell.q + self.radius].append(cell)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[HexCell]:
        return iter(self._cells)

    def __contains__(self, coord) -> bool:
        try:
            q, r = coord
        except (TypeError, ValueError):
            return False
        return self.get_cell(q, r) is not None

    @property
    def dimensions(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}

    def get_grid(self) -> List[List[HexCell]]:
        """The jagged row structure (live cells, not copies)."""
        return self.rows

    def get_cell(self, q, r) -> Optional[HexCell]:
        """Cell at ``(q, r)``, or None for anything that is not on the board."""
        if not isinstance(q, Integral) or not isinstance(r, Integral):
            return None
        i = int(q) + self.radius
        j = int(r) + self.radius
        if not (0 <= i < self.width and 0 <= j < self.height):
            return None
        position = self._index[i, j]
        if position == NO_CELL:
            return None
        return self._cells[position]

    def get_neighbors(self, q: int, r: int) -> List[HexCell]:
        """Existing neighbours in direction order; off-board directions are skipped."""
        neighbors = []
        for nq, nr in neighbor_coords(q, r):
            cell = self.get_cell(nq, nr)
            if cell is not None:
                neighbors.append(cell)
        return neighbors

    def get_cells_by_terrain(self, terrain: Union[Terrain, str]) -> List[HexCell]:
        return [cell for cell in self._cells if cell.terrain == terrain]

    def count_terrain(self, terrain: Union[Terrain, str]) -> int:
        return sum(1 for cell in self._cells if cell.terrain == terrain)

    def terrain_counts(self) -> Dict[Terrain, int]:
        """Cell count for every terrain type, zero included."""
        counts = Counter(cell.terrain for cell in self._cells)
        return {terrain: counts.get(terrain, 0) for terrain in Terrain}

    def set_cell_color(self, q: int, r: int, color: Union[HexColor, str]) -> None:
        """Colour a cell in place; absent cells are ignored."""
        cell = self.get_cell(q, r)
        if cell is not None:
            cell.color = HexColor(color)

    def serialize(self) -> List[List[Dict[str, Any]]]:
        """Deep copy of every cell as plain records, one list per row."""
        return [[cell.to_record() for cell in row] for row in self.rows]

    @classmethod
    def deserialize(cls, data: Sequence[Sequence[Any]]) -> "HexGrid":
        """
        Rebuild a grid from ``serialize()`` output without running generation.

        The radius is inferred from the number of rows. Records are validated
        with CellRecord; duplicate, missing or out-of-radius cells raise
        ValueError.
        """
        if not data or len(data) % 2 == 0:
            raise ValueError(f"expected an odd, non-zero number of rows, got {len(data)}")

        radius = (len(data) - 1) // 2
        grid = cls.__new__(cls)
        grid.radius = radius
        grid.width = len(data)
        grid.height = len(data)
        grid._cells = []
        grid._index = np.full((grid.width, grid.height), NO_CELL, dtype=np.int32)
        grid.rows = [[] for _ in range(grid.width)]

        for row in data:
            for raw in row:
                record = CellRecord.model_validate(raw)
                if not is_within_radius(record.q, record.r, radius):
                    raise ValueError(f"cell ({record.q}, {record.r}) lies outside radius {radius}")
                if grid.get_cell(record.q, record.r) is not None:
                    raise ValueError(f"duplicate cell ({record.q}, {record.r})")
                grid._add_cell(HexCell(record.q, record.r, record.terrain, record.color))

        expected = cell_count(radius)
        if len(grid._cells) != expected:
            raise ValueError(f"expected {expected} cells for radius {radius}, got {len(grid._cells)}")

        for row in grid.rows:
            row.sort(key=lambda cell: cell.r)

        return grid
