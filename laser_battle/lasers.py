"""
Laser Projectiles
==================
A laser is a directed segment whose head sweeps from start to end in about
a second, leaving a trail of cells that each fade out on their own timer.
Trail cells stay hazardous until they fade, even after the head is gone.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from .config import (
    LASER_STEP, LASER_ACTIVE_TICKS, TRAIL_FADE_TICKS,
    TRAIL_CHAR, TRAIL_FADED_CHAR,
)
from .engine import Sprite, NEON_CYAN, NEON_BLUE, WHITE, GridCell, Glyph, to_cell

Bounds = Tuple[int, int, int, int]


class LaserKind(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()
    DIAGONAL_UP = auto()
    KNIGHT = auto()


# Head marker per kind: rook lines, bishop diagonals, knight hops
HEAD_CHARS = {
    LaserKind.HORIZONTAL: 'R',
    LaserKind.VERTICAL: 'R',
    LaserKind.DIAGONAL_DOWN: 'B',
    LaserKind.DIAGONAL_UP: 'B',
    LaserKind.KNIGHT: 'N',
}


@dataclass
class TrailCell:
    """A cell the head passed over, with frames left before it fades."""
    x: int
    y: int
    frames_remaining: int = TRAIL_FADE_TICKS

    @property
    def cell(self) -> GridCell:
        return self.x, self.y


class Laser(Sprite):
    """Timed directed segment with a moving head and a fading trail."""

    def __init__(self, start: GridCell, end: GridCell, kind: LaserKind, bounds: Bounds):
        super().__init__()
        self.start = start
        self.end = end
        self.kind = kind
        self.bounds = bounds

        self.active = False
        self.progress = 0.0
        self.steps = 0
        self.active_timer = LASER_ACTIVE_TICKS
        self.trail: List[TrailCell] = []

    def __repr__(self):
        return f'Laser({self.start} -> {self.end}, {self.kind.name}, active={self.active})'

    @property
    def path_length(self) -> int:
        """Number of cells between start and end, inclusive."""
        return max(abs(self.end[0] - self.start[0]), abs(self.end[1] - self.start[1])) + 1

    def activate(self):
        """Fire (or re-fire) the laser from its start point."""
        self.active = True
        self.active_timer = LASER_ACTIVE_TICKS
        self.progress = 0.0
        self.steps = 0
        self.trail.clear()

    def set_active_timer(self, frames: int):
        self.active_timer = frames

    def deactivate(self):
        """Retire immediately: head and trail both gone."""
        self.active = False
        self.trail.clear()

    def is_complete(self) -> bool:
        return not self.active and not self.trail

    def point_at(self, t: float) -> GridCell:
        x = to_cell(self.start[0] + t * (self.end[0] - self.start[0]))
        y = to_cell(self.start[1] + t * (self.end[1] - self.start[1]))
        return x, y

    def _in_bounds(self, cell: GridCell) -> bool:
        min_x, min_y, max_x, max_y = self.bounds
        return min_x <= cell[0] <= max_x and min_y <= cell[1] <= max_y

    def head_cell(self) -> Optional[GridCell]:
        """Cell of the flying head, or None once it has stopped or left the arena."""
        if not self.active or self.progress > 1.0:
            return None
        cell = self.point_at(self.progress)
        return cell if self._in_bounds(cell) else None

    def update(self):
        if self.active:
            self.active_timer -= 1
            # Multiply rather than accumulate so t never drifts past 1.0 early
            self.steps += 1
            self.progress = self.steps * LASER_STEP

            if self.progress <= 1.0:
                cell = self.point_at(self.progress)
                if self._in_bounds(cell):
                    if not self.trail or self.trail[-1].cell != cell:
                        self.trail.append(TrailCell(cell[0], cell[1]))

            if self.active_timer <= 0 or self.progress > 1.0:
                self.active = False

        # The trail fades whether or not the head is still flying
        for segment in self.trail:
            segment.frames_remaining -= 1
        self.trail = [s for s in self.trail if s.frames_remaining > 0]

    def check_collision(self, cell: GridCell) -> bool:
        if self.is_complete():
            return False
        for segment in self.trail:
            if segment.cell == cell:
                return True
        return self.head_cell() == cell

    def cells(self) -> Dict[GridCell, Glyph]:
        result: Dict[GridCell, Glyph] = {}
        half = len(self.trail) // 2
        for i, segment in enumerate(self.trail):
            color = NEON_BLUE if i < half else NEON_CYAN
            char = TRAIL_CHAR if segment.frames_remaining > TRAIL_FADE_TICKS // 2 else TRAIL_FADED_CHAR
            result[segment.cell] = (char, color)
        head = self.head_cell()
        if head is not None:
            result[head] = (HEAD_CHARS[self.kind], WHITE)
        return result


def all_complete(lasers: List[Laser]) -> bool:
    return all(laser.is_complete() for laser in lasers)
