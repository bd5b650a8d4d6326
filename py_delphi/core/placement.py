"""
Special-terrain placement policy shared by both generators.

The rules here are plain functions of ``(cell, grid)`` so they can be
exercised on hand-built grids:

- a special terrain may only replace a shallow cell
- replacing it must leave every neighbour with some other water neighbour
- candidates are shuffled once and consumed greedily, without backtracking

The module also carries the connectivity diagnostics used to check a board:
landlocked tiles, sea reachability back to zeus, and landmass sizes.
"""

from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from .alea_prng import AleaPRNG
from .hex_grid import HexCell, HexGrid
from .terrain import WATER_TERRAINS, Terrain

logger = structlog.get_logger()

PlacementValidator = Callable[[HexCell, HexGrid], bool]


def is_water(cell: HexCell) -> bool:
    return cell.terrain in WATER_TERRAINS


def is_adjacent_to_water(cell: HexCell, grid: HexGrid) -> bool:
    """True if any neighbour is sea, shallow or zeus."""
    return any(is_water(neighbor) for neighbor in grid.get_neighbors(cell.q, cell.r))


def has_water_neighbor_excluding(cell: HexCell, excluded: HexCell, grid: HexGrid) -> bool:
    """True if ``cell`` has a water neighbour other than ``excluded``."""
    for neighbor in grid.get_neighbors(cell.q, cell.r):
        if neighbor.coord == excluded.coord:
            continue
        if is_water(neighbor):
            return True
    return False


def has_neighbor_of_type(cell: HexCell, grid: HexGrid, terrain: Terrain) -> bool:
    return any(n.terrain == terrain for n in grid.get_neighbors(cell.q, cell.r))


def get_neighbors_of_type(cell: HexCell, grid: HexGrid, terrain: Terrain) -> List[HexCell]:
    return [n for n in grid.get_neighbors(cell.q, cell.r) if n.terrain == terrain]


def landmass_size(start: HexCell, grid: HexGrid) -> int:
    """
    Size of the contiguous non-sea, non-shallow region containing ``start``.

    Zeus counts as land here, matching how the landmass limit was defined
    for the board.
    """
    visited = {start.coord}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in grid.get_neighbors(current.q, current.r):
            if neighbor.coord in visited:
                continue
            if neighbor.terrain in (Terrain.SEA, Terrain.SHALLOW):
                continue
            visited.add(neighbor.coord)
            queue.append(neighbor)

    return len(visited)


def _largest_adjacent_landmass(cell: HexCell, grid: HexGrid, simulated: Terrain) -> int:
    original = cell.terrain
    cell.terrain = simulated
    try:
        sizes = [
            landmass_size(neighbor, grid)
            for neighbor in grid.get_neighbors(cell.q, cell.r)
            if neighbor.terrain not in (Terrain.SEA, Terrain.SHALLOW)
        ]
    finally:
        cell.terrain = original
    return max(sizes, default=0)


def is_valid_placement(
    cell: HexCell, grid: HexGrid, max_landmass_size: Optional[int] = None
) -> bool:
    """
    Check whether special terrain may be placed on ``cell``.

    The cell must be shallow, and every existing neighbour must keep at
    least one sea, shallow or zeus neighbour once the cell is no longer
    water. Evaluated against the grid's current state.

    Args:
        cell: Candidate cell
        grid: Grid the cell belongs to
        max_landmass_size: If set, also reject the cell when the placement
            would join a contiguous landmass larger than this

    Returns:
        True if the cell is eligible
    """
    if cell.terrain != Terrain.SHALLOW:
        return False

    for neighbor in grid.get_neighbors(cell.q, cell.r):
        if not has_water_neighbor_excluding(neighbor, cell, grid):
            return False

    if max_landmass_size is not None:
        if _largest_adjacent_landmass(cell, grid, Terrain.CUBES) > max_landmass_size:
            return False

    return True


def make_placement_validator(max_landmass_size: Optional[int] = None) -> PlacementValidator:
    """Bind the optional landmass limit into a ``(cell, grid)`` predicate."""
    if max_landmass_size is None:
        return is_valid_placement

    def validator(cell: HexCell, grid: HexGrid) -> bool:
        return is_valid_placement(cell, grid, max_landmass_size=max_landmass_size)

    return validator


def place_special_terrain(
    grid: HexGrid,
    placements: Sequence[Tuple[Terrain, int]],
    prng: AleaPRNG,
    validator: PlacementValidator = is_valid_placement,
    candidates: Optional[Iterable[HexCell]] = None,
) -> Dict[Terrain, int]:
    """
    Hand out special terrain from one shuffled pool of shallow cells.

    For each ``(terrain, count)`` in order, cells are taken from the pool
    until ``count`` eligible cells were converted or the pool runs dry. A
    cell that is consumed but rejected is not revisited.

    Args:
        grid: Grid to mutate
        placements: Terrain types and their targets, in placement order
        prng: Random source for the shuffle
        validator: Eligibility predicate, evaluated at assignment time
        candidates: Pool to draw from, defaults to every shallow cell

    Returns:
        Number of cells placed per terrain type
    """
    if candidates is None:
        pool = grid.get_cells_by_terrain(Terrain.SHALLOW)
    else:
        pool = list(candidates)
    prng.shuffle(pool)

    placed_counts: Dict[Terrain, int] = {}
    cell_index = 0

    for terrain, count in placements:
        placed = 0
        while placed < count and cell_index < len(pool):
            cell = pool[cell_index]
            cell_index += 1
            if cell.terrain == Terrain.SHALLOW and validator(cell, grid):
                cell.terrain = terrain
                placed += 1

        placed_counts[terrain] = placed
        if placed < count:
            logger.warning(
                "Terrain target not met",
                terrain=terrain.value,
                placed=placed,
                target=count,
            )

    logger.info(
        "Special terrain placed",
        placed={terrain.value: n for terrain, n in placed_counts.items()},
        pool_size=len(pool),
        consumed=cell_index,
    )
    return placed_counts


def find_landlocked_cells(grid: HexGrid) -> List[HexCell]:
    """Non-water cells with no sea, shallow or zeus neighbour."""
    return [
        cell
        for cell in grid
        if not is_water(cell) and not is_adjacent_to_water(cell, grid)
    ]


def can_reach_zeus(
    start: HexCell, grid: HexGrid, excluded: Optional[HexCell] = None
) -> bool:
    """
    Breadth-first search through sea cells from ``start`` to a zeus cell.

    Args:
        start: Cell to search from
        grid: Grid to search
        excluded: Cell treated as impassable, e.g. one about to change

    Returns:
        True if zeus is adjacent to the sea region reachable from ``start``
    """
    if start.terrain == Terrain.ZEUS:
        return True

    excluded_coord = excluded.coord if excluded is not None else None
    visited = {start.coord}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in grid.get_neighbors(current.q, current.r):
            if neighbor.coord == excluded_coord:
                continue
            if neighbor.terrain == Terrain.ZEUS:
                return True
            if neighbor.coord not in visited and neighbor.terrain == Terrain.SEA:
                visited.add(neighbor.coord)
                queue.append(neighbor)

    return False


def find_unreachable_sea(grid: HexGrid) -> List[HexCell]:
    """Sea cells that cannot reach zeus through sea (enclosed lakes)."""
    zeus_cells = grid.get_cells_by_terrain(Terrain.ZEUS)
    reached = set()
    queue = deque(zeus_cells)
    for cell in zeus_cells:
        reached.add(cell.coord)

    while queue:
        current = queue.popleft()
        for neighbor in grid.get_neighbors(current.q, current.r):
            if neighbor.coord not in reached and neighbor.terrain == Terrain.SEA:
                reached.add(neighbor.coord)
                queue.append(neighbor)

    return [cell for cell in grid.get_cells_by_terrain(Terrain.SEA) if cell.coord not in reached]


def convert_sea_to_shallows(grid: HexGrid, prng: AleaPRNG, attempts: int = 10) -> int:
    """
    Turn a few random sea cells back into shallows.

    Up to ``attempts`` shuffled sea cells are tried. A cell next to zeus or a
    city is skipped. Otherwise it is tentatively made shallow and reverted
    unless every one of its sea neighbours can still reach zeus through sea.

    Returns:
        Number of successful conversions
    """
    sea_cells = grid.get_cells_by_terrain(Terrain.SEA)
    if not sea_cells or attempts <= 0:
        return 0

    prng.shuffle(sea_cells)
    tried = sea_cells[:attempts]
    converted = 0

    for candidate in tried:
        if has_neighbor_of_type(candidate, grid, Terrain.ZEUS):
            continue
        if has_neighbor_of_type(candidate, grid, Terrain.CITY):
            continue

        candidate.terrain = Terrain.SHALLOW
        sea_neighbors = get_neighbors_of_type(candidate, grid, Terrain.SEA)
        if all(can_reach_zeus(n, grid, excluded=candidate) for n in sea_neighbors):
            converted += 1
        else:
            candidate.terrain = Terrain.SEA

    logger.info("Sea to shallows conversion", attempts=len(tried), converted=converted)
    return converted
