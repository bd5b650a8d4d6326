"""Transport models handed to serving and rendering layers."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.hex_grid import CellRecord
from ..core.map_statistics import MapDimensions


class MapPayload(BaseModel):
    """A serialized board with its dimensions."""

    map: List[List[CellRecord]] = Field(description="Rows of cell records, q-major")
    dimensions: MapDimensions
    generator: str = Field(description="Generator that produced the board")
    seed: Optional[str] = Field(default=None, description="Seed, when the board is reproducible")
