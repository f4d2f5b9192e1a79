"""
Player Module
==============
The heart the player steers, and keyboard handling.
"""

import math
from typing import Dict, List, Tuple

from .arena import Arena
from .config import (
    MAX_HP, HEART_SPEED, ASPECT_RATIO, INVINCIBILITY_TICKS, HEART_CHAR,
)
from .engine import Sprite, NEON_RED, NEON_GREEN, GridCell, Glyph, to_cell


class Heart(Sprite):
    """
    Player avatar.

    Moves continuously along a unit direction. Horizontal motion is scaled
    by the aspect ratio so speed looks the same on both axes in a terminal.
    """

    def __init__(self, x: float, y: float, hp: int = MAX_HP,
                 speed: float = HEART_SPEED, aspect_ratio: float = ASPECT_RATIO):
        super().__init__()
        self.x = float(x)
        self.y = float(y)
        self.direction_x = 0.0
        self.direction_y = 0.0
        self.speed = speed
        self.aspect_ratio = aspect_ratio
        self.moving = False
        self.hp = max(0, min(MAX_HP, hp))
        self.invincible = False
        self.invincible_timer = 0

    @property
    def cell(self) -> GridCell:
        return to_cell(self.x), to_cell(self.y)

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def reset(self, x: float, y: float):
        """Reposition for a fresh start. HP is kept."""
        self.x = float(x)
        self.y = float(y)
        self.direction_x = 0.0
        self.direction_y = 0.0
        self.moving = False
        self.invincible = False
        self.invincible_timer = 0

    def set_direction(self, dx: float, dy: float):
        """Point the heart (normalized) and resume moving. (0, 0) is ignored."""
        if dx == 0 and dy == 0:
            return
        length = math.sqrt(dx * dx + dy * dy)
        self.direction_x = dx / length
        self.direction_y = dy / length
        self.moving = True

    def stop(self):
        self.moving = False

    def start(self):
        self.moving = True

    def toggle(self):
        self.moving = not self.moving

    def update(self):
        if self.moving:
            self.x += self.direction_x * self.speed * self.aspect_ratio
            self.y += self.direction_y * self.speed

        if self.invincible:
            self.invincible_timer -= 1
            if self.invincible_timer <= 0:
                self.invincible = False

    def constrain(self, arena: Arena):
        """Clamp each axis to the arena independently."""
        self.x = arena.clamp_x(self.x)
        self.y = arena.clamp_y(self.y)

    def take_damage(self) -> bool:
        """Lose one HP unless invincible. Returns True if the hit landed."""
        if self.invincible:
            return False
        self.hp = max(0, self.hp - 1)
        self.invincible = True
        self.invincible_timer = INVINCIBILITY_TICKS
        return True

    def cells(self) -> Dict[GridCell, Glyph]:
        color = NEON_GREEN if self.invincible else NEON_RED
        return {self.cell: (HEART_CHAR, color)}


# Commands recorded by InputHandler, replayed in key order
CMD_DIRECTION = 'direction'
CMD_TOGGLE = 'toggle'

DIRECTION_KEYS = {
    'KEY_UP': (0.0, -1.0),
    'KEY_DOWN': (0.0, 1.0),
    'KEY_LEFT': (-1.0, 0.0),
    'KEY_RIGHT': (1.0, 0.0),
}


class InputHandler:
    """
    Collects the keys pressed since the last tick.

    Keys are queued as commands in the order they arrived so a quick
    "left, space" stops facing left rather than the other way round.
    """

    def __init__(self):
        self._commands: List[Tuple[str, Tuple[float, float]]] = []
        self._quit_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''

        if key_str == 'q':
            self._quit_triggered = True
        elif key_str == ' ':
            self._commands.append((CMD_TOGGLE, (0.0, 0.0)))
        elif key.name in DIRECTION_KEYS:
            self._commands.append((CMD_DIRECTION, DIRECTION_KEYS[key.name]))

    def apply(self, heart: Heart) -> None:
        """Replay queued commands onto the heart and empty the queue."""
        for command, (dx, dy) in self._commands:
            if command == CMD_DIRECTION:
                heart.set_direction(dx, dy)
            elif command == CMD_TOGGLE:
                heart.toggle()
        self._commands.clear()

    def reset(self) -> None:
        """Drop queued movement commands without applying them."""
        self._commands.clear()

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered
