"""
Snake
======
A segmented pursuer that crawls toward the heart, slower than the heart
can move.
"""

import random
from collections import deque
from typing import Deque, Dict, Optional

from .config import (
    SNAKE_LENGTH, SNAKE_MOVE_DELAY, SNAKE_HIT_COOLDOWN,
    SNAKE_HEAD_CHAR, SNAKE_BODY_CHAR,
)
from .engine import Sprite, NEON_GREEN, GridCell, Glyph


class Snake(Sprite):
    """Fixed-length body, head at index 0."""

    def __init__(self, start: GridCell, length: int = SNAKE_LENGTH,
                 move_delay: int = SNAKE_MOVE_DELAY, rng=random):
        super().__init__()
        self.length = length
        self.move_delay = move_delay
        self.rng = rng
        self.segments: Deque[GridCell] = deque()
        self.delay_counter = 0
        self.collision_cooldown = 0
        self.active = False
        self.reset(start)

    @property
    def head(self) -> GridCell:
        return self.segments[0]

    def reset(self, start: GridCell):
        """Coil every segment onto one cell and clear the timers."""
        self.segments = deque([start] * self.length)
        self.delay_counter = 0
        self.collision_cooldown = 0

    def set_active(self, active: bool):
        self.active = active

    def update(self, target: Optional[GridCell] = None):
        if not self.active:
            return

        self.delay_counter += 1
        if self.collision_cooldown > 0:
            self.collision_cooldown -= 1

        if self.delay_counter < self.move_delay or target is None:
            return
        self.delay_counter = 0

        head_x, head_y = self.head
        dx = (target[0] > head_x) - (target[0] < head_x)
        dy = (target[1] > head_y) - (target[1] < head_y)

        # One axis per step, otherwise diagonals would outpace the heart
        if dx != 0 and dy != 0:
            if self.rng.random() < 0.5:
                dy = 0
            else:
                dx = 0

        self.segments.appendleft((head_x + dx, head_y + dy))
        while len(self.segments) > self.length:
            self.segments.pop()

    def check_collision(self, cell: GridCell) -> bool:
        """Hit test against every segment; a hit arms the cooldown."""
        if not self.active or self.collision_cooldown > 0:
            return False
        if cell in self.segments:
            self.collision_cooldown = SNAKE_HIT_COOLDOWN
            return True
        return False

    def cells(self) -> Dict[GridCell, Glyph]:
        if not self.active:
            return {}
        result: Dict[GridCell, Glyph] = {}
        # Paint tail first so the head wins when segments overlap
        for segment in reversed(list(self.segments)[1:]):
            result[segment] = (SNAKE_BODY_CHAR, NEON_GREEN)
        result[self.head] = (SNAKE_HEAD_CHAR, NEON_GREEN)
        return result
