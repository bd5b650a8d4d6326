"""
Map context for serving layers.

A MapContext owns the "current board" that request handlers and renderers
read from. Create one per application (or per test) and pass it to whatever
needs it; the generators never refer to it.
"""

from typing import Any, Dict, Optional, Sequence, Type, Union

import structlog

from ..config import settings
from ..core.baseline_generator import BaselineMapGenerator
from ..core.drunken_walk import DrunkenWalkMapGenerator
from ..core.map_generator import GeneratorOptions, MapGenerator
from ..core.map_statistics import MapDimensions, MapStatistics, compute_map_statistics
from ..core.terrain import HexColor
from ..utils.logging import configure_logging
from .models import MapPayload

# Configure logging
configure_logging()

logger = structlog.get_logger()

GENERATORS: Dict[str, Type[MapGenerator]] = {
    BaselineMapGenerator.name: BaselineMapGenerator,
    DrunkenWalkMapGenerator.name: DrunkenWalkMapGenerator,
}


def get_generator_class(name: str) -> Type[MapGenerator]:
    """Look up a generator by name."""
    try:
        return GENERATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown generator: {name} (expected one of {', '.join(sorted(GENERATORS))})"
        ) from None


class MapContext:
    """Holds the current board and exposes the query surface around it."""

    def __init__(
        self,
        default_generator: Optional[str] = None,
        radius: Optional[int] = None,
    ):
        """
        Args:
            default_generator: Generator name, defaults to ``settings.default_generator``
            radius: Board radius, defaults to ``settings.map_radius``
        """
        self.default_generator = default_generator or settings.default_generator
        get_generator_class(self.default_generator)
        self.radius = radius or settings.map_radius
        self._current: Optional[MapGenerator] = None

    @property
    def current_map(self) -> Optional[MapGenerator]:
        return self._current

    def generate_new_map(
        self,
        generator: Optional[str] = None,
        seed: Optional[str] = None,
        options: Optional[GeneratorOptions] = None,
    ) -> MapGenerator:
        """
        Replace the current board with a freshly generated one.

        Args:
            generator: Generator name, defaults to the context default
            seed: Seed for a reproducible board, defaults to ``settings.map_seed``
            options: Options for the chosen generator

        Returns:
            The new board's generator
        """
        name = generator or self.default_generator
        generator_class = get_generator_class(name)
        seed = seed if seed is not None else settings.map_seed

        logger.info("Map generation requested", generator=name, seed=seed)
        self._current = generator_class(options=options, seed=seed, radius=self.radius)
        return self._current

    def get_current_map(self) -> MapGenerator:
        """The current board, generating one first if there is none yet."""
        if self._current is None:
            self.generate_new_map()
        return self._current

    def get_map(self) -> MapPayload:
        current = self.get_current_map()
        return MapPayload(
            map=current.serialize(),
            dimensions=MapDimensions(width=current.width, height=current.height),
            generator=current.name,
            seed=current.seed,
        )

    def get_statistics(self) -> MapStatistics:
        return compute_map_statistics(self.get_current_map().grid)

    def load_map(
        self, data: Sequence[Sequence[Any]], generator: Optional[str] = None
    ) -> MapGenerator:
        """Make a stored board current without regenerating it."""
        generator_class = get_generator_class(generator or self.default_generator)
        self._current = generator_class.deserialize(data)
        logger.info("Map loaded", generator=generator_class.name, cells=len(self._current.grid))
        return self._current

    def set_cell_color(self, q: int, r: int, color: Union[HexColor, str]) -> None:
        self.get_current_map().set_cell_color(q, r, color)
