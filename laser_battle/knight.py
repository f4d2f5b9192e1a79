"""
Knight
=======
A short-lived enemy: it appears on a random cell and fires a laser along
every knight move that stays inside the arena, then vanishes once those
lasers have burned out.
"""

import random
from typing import Dict, List, Optional

from .arena import Arena
from .config import KNIGHT_MOVES, KNIGHT_CHAR
from .engine import Sprite, WHITE, GridCell, Glyph
from .lasers import Laser, LaserKind, all_complete


class Knight(Sprite):

    def __init__(self, rng=random):
        super().__init__()
        self.rng = rng
        self.position: Optional[GridCell] = None
        self.lasers: List[Laser] = []
        self.active = False

    def spawn(self, arena: Arena):
        """Appear on a random inner cell and fire. Replaces any earlier burst."""
        min_x, min_y, max_x, max_y = arena.inner_bounds
        x = self.rng.randint(min_x, max_x)
        y = self.rng.randint(min_y, max_y)
        self.position = (x, y)

        self.lasers = []
        for dx, dy in KNIGHT_MOVES:
            target = (x + dx, y + dy)
            if arena.contains(*target):
                laser = Laser((x, y), target, LaserKind.KNIGHT, arena.inner_bounds)
                laser.activate()
                self.lasers.append(laser)

        self.active = bool(self.lasers)

    def update(self):
        if not self.active:
            return
        for laser in self.lasers:
            laser.update()
        if all_complete(self.lasers):
            self.active = False
            self.lasers = []

    def check_collision(self, cell: GridCell) -> bool:
        if not self.active:
            return False
        return any(laser.check_collision(cell) for laser in self.lasers)

    def cells(self) -> Dict[GridCell, Glyph]:
        if not self.active:
            return {}
        result: Dict[GridCell, Glyph] = {}
        for laser in self.lasers:
            result.update(laser.cells())
        result[self.position] = (KNIGHT_CHAR, WHITE)
        return result

    def dismiss(self):
        """Vanish at once, lasers and all."""
        self.active = False
        self.lasers = []
