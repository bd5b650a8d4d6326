"""
Axial hex coordinate helpers.

Directions use a single canonical ordering across the package:

    0: northeast (q+1, r-1)
    1: east      (q+1, r+0)
    2: southeast (q+0, r+1)
    3: southwest (q-1, r+1)
    4: west      (q-1, r+0)
    5: northwest (q+0, r-1)

Opposite directions are three apart.
"""

from typing import List, Optional, Tuple

Coord = Tuple[int, int]

MAP_RADIUS = 6
ORIGIN: Coord = (0, 0)

DIRECTION_VECTORS: Tuple[Coord, ...] = (
    (1, -1),
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
)
DIRECTION_NAMES = ("northeast", "east", "southeast", "southwest", "west", "northwest")


def hex_distance(a: Coord, b: Coord) -> int:
    """Distance between two axial coordinates, in hex steps."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def distance_from_center(q: int, r: int) -> int:
    return hex_distance((q, r), ORIGIN)


def is_within_radius(q: int, r: int, radius: int = MAP_RADIUS) -> bool:
    return distance_from_center(q, r) <= radius


def cell_count(radius: int = MAP_RADIUS) -> int:
    """Number of cells in a hexagon of the given radius."""
    return 3 * radius * (radius + 1) + 1


def get_adjacent(q: int, r: int, direction: int) -> Optional[Coord]:
    """
    Coordinate of the neighbour in ``direction``.

    The result is returned even when it lies off the board; callers check
    membership themselves. Directions outside 0..5 give None.
    """
    if not 0 <= direction <= 5:
        return None
    dq, dr = DIRECTION_VECTORS[direction]
    return q + dq, r + dr


def neighbor_coords(q: int, r: int) -> List[Coord]:
    """All six neighbouring coordinates in direction order."""
    return [(q + dq, r + dr) for dq, dr in DIRECTION_VECTORS]


def get_corner(direction: int, radius: int = MAP_RADIUS) -> Optional[Coord]:
    """Extreme vertex of the hexagon reached by walking ``radius`` steps from the origin."""
    if not 0 <= direction <= 5:
        return None
    q, r = ORIGIN
    for _ in range(radius):
        q, r = get_adjacent(q, r, direction)
    return q, r


def hexagon_coords(radius: int = MAP_RADIUS) -> List[Coord]:
    """Every coordinate of a radius-``radius`` hexagon, q-major, r ascending."""
    coords = []
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            coords.append((q, r))
    return coords


def ring_coords(radius: int) -> List[Coord]:
    """Coordinates at exactly ``radius`` steps from the origin."""
    if radius == 0:
        return [ORIGIN]
    return [c for c in hexagon_coords(radius) if hex_distance(c, ORIGIN) == radius]
