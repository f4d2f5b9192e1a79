"""
Attack Patterns
================
Pure builders that turn arena geometry into sets of fired lasers.

Every builder returns lasers that are already activated. Lines that would
fall outside the arena's inner bounds are left out, so patterns thin out
gracefully on small arenas.
"""

from typing import List

from .arena import Arena
from .config import LINE_SPACING, QUADRANT_LASER_TICKS
from .lasers import Laser, LaserKind

HORIZONTAL = 'horizontal'
VERTICAL = 'vertical'


def _fire(lasers: List[Laser]) -> List[Laser]:
    for laser in lasers:
        laser.activate()
    return lasers


def _horizontal(arena: Arena, y: int) -> Laser:
    return Laser((arena.inner_min_x, y), (arena.inner_max_x, y),
                 LaserKind.HORIZONTAL, arena.inner_bounds)


def _vertical(arena: Arena, x: int) -> Laser:
    return Laser((x, arena.inner_min_y), (x, arena.inner_max_y),
                 LaserKind.VERTICAL, arena.inner_bounds)


def line_sweep(arena: Arena, axis: str, count: int, center: int) -> List[Laser]:
    """
    Parallel full-length lines centered on a row (horizontal) or column
    (vertical), with count // 2 extra lines on each side spaced LINE_SPACING
    apart. The center line is clamped into the arena; side lines that leave
    it are dropped.
    """
    if axis == HORIZONTAL:
        low, high, make = arena.inner_min_y, arena.inner_max_y, _horizontal
    elif axis == VERTICAL:
        low, high, make = arena.inner_min_x, arena.inner_max_x, _vertical
    else:
        raise ValueError(f'Unknown sweep axis: {axis!r}')

    middle = max(low, min(high, center))
    lasers = [make(arena, middle)]

    for i in range(1, count // 2 + 1):
        before = middle - i * LINE_SPACING
        if before >= low:
            lasers.append(make(arena, before))
        after = middle + i * LINE_SPACING
        if after <= high:
            lasers.append(make(arena, after))

    return _fire(lasers)


def grid(arena: Arena) -> List[Laser]:
    """Tic-tac-toe grid: two rows and two columns at the thirds."""
    third_w = arena.width // 3
    third_h = arena.height // 3
    lasers = []

    for y in (arena.inner_min_y + third_h, arena.inner_min_y + 2 * third_h):
        if arena.inner_min_y <= y <= arena.inner_max_y:
            lasers.append(_horizontal(arena, y))

    for x in (arena.inner_min_x + third_w, arena.inner_min_x + 2 * third_w):
        if arena.inner_min_x <= x <= arena.inner_max_x:
            lasers.append(_vertical(arena, x))

    return _fire(lasers)


def cross(arena: Arena) -> List[Laser]:
    """Both full diagonals of the inner rectangle."""
    min_x, min_y, max_x, max_y = arena.inner_bounds
    return _fire([
        Laser((min_x, min_y), (max_x, max_y), LaserKind.DIAGONAL_DOWN, arena.inner_bounds),
        Laser((max_x, min_y), (min_x, max_y), LaserKind.DIAGONAL_UP, arena.inner_bounds),
    ])


def quadrant_sweep(arena: Arena, safe_quadrant: int,
                   duration: int = QUADRANT_LASER_TICKS) -> List[Laser]:
    """
    Sweep every quadrant except the safe one with one laser per row and one
    per column, each clipped to its own quadrant.
    """
    lasers = []
    for quadrant in range(4):
        if quadrant == safe_quadrant:
            continue
        qx0, qy0, qx1, qy1 = arena.quadrant_bounds(quadrant)
        if qx0 > qx1 or qy0 > qy1:
            continue

        for y in range(qy0, qy1 + 1):
            lasers.append(Laser((qx0, y), (qx1, y), LaserKind.HORIZONTAL, arena.inner_bounds))
        for x in range(qx0, qx1 + 1):
            lasers.append(Laser((x, qy0), (x, qy1), LaserKind.VERTICAL, arena.inner_bounds))

    for laser in lasers:
        laser.activate()
        laser.set_active_timer(duration)
    return lasers
