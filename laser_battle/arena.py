"""
Arena
======
The bordered rectangle every round is fought in.
"""

from typing import Tuple

from .config import BORDER_CHAR
from .engine import Canvas, GRAY_LIGHT

Bounds = Tuple[int, int, int, int]  # min_x, min_y, max_x, max_y


class Arena:
    """
    Static play-field with a one-cell border.

    Gameplay coordinates live in [origin + 1, origin + dim - 1] on each axis.
    The border itself sits on origin and origin + dim.
    """

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.needs_redraw = True

    @classmethod
    def centered(cls, screen_width: int, screen_height: int,
                 width: int, height: int) -> 'Arena':
        """Arena centered on a screen of the given size."""
        return cls(screen_width // 2 - width // 2, screen_height // 2 - height // 2,
                   width, height)

    # Inner bounds

    @property
    def inner_min_x(self) -> int:
        return self.x + 1

    @property
    def inner_min_y(self) -> int:
        return self.y + 1

    @property
    def inner_max_x(self) -> int:
        return self.x + self.width - 1

    @property
    def inner_max_y(self) -> int:
        return self.y + self.height - 1

    @property
    def inner_bounds(self) -> Bounds:
        return self.inner_min_x, self.inner_min_y, self.inner_max_x, self.inner_max_y

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def contains(self, x: int, y: int) -> bool:
        """True if the cell is inside the inner bounds."""
        return (self.inner_min_x <= x <= self.inner_max_x and
                self.inner_min_y <= y <= self.inner_max_y)

    def clamp_x(self, x: float) -> float:
        return max(float(self.inner_min_x), min(float(self.inner_max_x), x))

    def clamp_y(self, y: float) -> float:
        return max(float(self.inner_min_y), min(float(self.inner_max_y), y))

    # Quadrants: 0 top-left, 1 top-right, 2 bottom-left, 3 bottom-right

    @property
    def mid_x(self) -> int:
        return (self.inner_min_x + self.inner_max_x + 1) // 2

    @property
    def mid_y(self) -> int:
        return (self.inner_min_y + self.inner_max_y + 1) // 2

    def quadrant_bounds(self, quadrant: int) -> Bounds:
        """Inclusive bounds of a quadrant. May be empty on tiny arenas."""
        min_x, min_y, max_x, max_y = self.inner_bounds
        left = quadrant in (0, 2)
        top = quadrant in (0, 1)
        qx0, qx1 = (min_x, self.mid_x - 1) if left else (self.mid_x, max_x)
        qy0, qy1 = (min_y, self.mid_y - 1) if top else (self.mid_y, max_y)
        return qx0, qy0, qx1, qy1

    def quadrant_of(self, x: int, y: int) -> int:
        col = 0 if x < self.mid_x else 1
        row = 0 if y < self.mid_y else 2
        return row + col

    def quadrant_center(self, quadrant: int) -> Tuple[int, int]:
        qx0, qy0, qx1, qy1 = self.quadrant_bounds(quadrant)
        return (qx0 + qx1) // 2, (qy0 + qy1) // 2

    # Rendering

    def draw(self, surface: Canvas):
        """Draw the border if flagged dirty."""
        if not self.needs_redraw:
            return
        surface.draw_box(self.x, self.y, self.width + 1, self.height + 1,
                         GRAY_LIGHT, BORDER_CHAR)
        self.needs_redraw = False

    def set_needs_redraw(self):
        self.needs_redraw = True
