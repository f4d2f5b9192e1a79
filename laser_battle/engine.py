"""
Rendering Engine
=================
Incremental character-grid renderer.

Sprites remember the cells they painted last frame. Each frame they blank
the cells they left, then paint where they are now. The canvas persists
between frames (it is never wiped), and the terminal buffer emits only the
cells whose contents changed since the last present.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")


# ANSI 256 color constants
NEON_CYAN = 51
NEON_BLUE = 33
NEON_YELLOW = 226
NEON_GREEN = 46
NEON_RED = 196

GRAY_LIGHT = 252
GRAY_MED = 245
GRAY_DARK = 238

WHITE = 255
DEFAULT_FG = 7

GridCell = Tuple[int, int]
Glyph = Tuple[str, int]


def to_cell(value: float) -> int:
    """Nearest grid index, halves rounding up (coordinates are never negative)."""
    return int(math.floor(value + 0.5))


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = DEFAULT_FG
    bg_color: int = -1  # -1 = transparent/default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def copy_from(self, other: 'Cell'):
        self.char = other.char
        self.fg_color = other.fg_color
        self.bg_color = other.bg_color

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg_color = DEFAULT_FG
        self.bg_color = -1


class Canvas:
    """
    Persistent character grid.

    Nothing is cleared between frames; whoever painted a cell is
    responsible for blanking it again.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.back: List[List[Cell]] = []
        self._init_grid()

    def _init_grid(self):
        self.back = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put(self, x: int, y: int, char: str, fg_color: int = DEFAULT_FG, bg_color: int = -1):
        """Put a character at exact position. Off-screen writes are dropped."""
        if self.in_bounds(x, y):
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_string(self, x: int, y: int, text: str, fg_color: int = DEFAULT_FG, bg_color: int = -1):
        """Put a string starting at (x, y)."""
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def blank(self, x: int, y: int):
        """Erase a single cell."""
        if self.in_bounds(x, y):
            self.back[y][x].reset()

    def blank_span(self, x: int, y: int, length: int):
        for i in range(length):
            self.blank(x + i, y)

    def char_at(self, x: int, y: int) -> str:
        if self.in_bounds(x, y):
            return self.back[y][x].char
        return ''

    def color_at(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return self.back[y][x].fg_color
        return DEFAULT_FG

    def row_text(self, y: int) -> str:
        """Plain text of a row, handy for assertions and debugging."""
        return ''.join(cell.char for cell in self.back[y])

    def draw_box(self, x: int, y: int, w: int, h: int, color: int = GRAY_DARK,
                 char: str = '#'):
        """Draw a rectangular border."""
        for i in range(w):
            self.put(x + i, y, char, color)
            self.put(x + i, y + h - 1, char, color)
        for j in range(1, h - 1):
            self.put(x, y + j, char, color)
            self.put(x + w - 1, y + j, char, color)


class DoubleBuffer(Canvas):
    """
    Terminal-backed canvas.

    Keeps a front copy of what the terminal currently shows and, on
    present, writes only the cells that differ from it.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.front: List[List[Cell]] = []
        super().__init__(term.width, term.height)
        self._normal = term.normal  # Cache reset sequence

    def _init_grid(self):
        super()._init_grid()
        self.front = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def wipe(self):
        """Blank the whole back grid (used between screens, not between frames)."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def present(self) -> str:
        """
        Generate output for changed cells only, then sync the front copy.
        """
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                front_cell = self.front[y][x]

                if not back_cell.matches(front_cell):
                    output_parts.append(self.term.move_xy(x, y))
                    # Reset colors to prevent bleed
                    output_parts.append(normal)
                    if back_cell.bg_color >= 0:
                        output_parts.append(self.term.on_color(back_cell.bg_color))
                    output_parts.append(self.term.color(back_cell.fg_color))
                    output_parts.append(back_cell.char if back_cell.char else ' ')
                    front_cell.copy_from(back_cell)

        return ''.join(output_parts)


class Sprite(ABC):
    """
    Draw/clear capability shared by every on-screen entity.

    Subclasses describe what they look like right now through cells();
    the bookkeeping of what was painted before lives here.
    """

    def __init__(self):
        self._drawn: Set[GridCell] = set()
        self._pending: Dict[GridCell, Glyph] = {}

    @abstractmethod
    def update(self, *args) -> None:
        """Advance one tick."""

    @abstractmethod
    def cells(self) -> Dict[GridCell, Glyph]:
        """Cells this sprite occupies this frame, mapped to (char, color)."""

    def erase_stale(self, surface: Canvas):
        """Blank cells painted last frame that the sprite no longer occupies."""
        self._pending = self.cells()
        for x, y in self._drawn:
            if (x, y) not in self._pending:
                surface.blank(x, y)

    def paint(self, surface: Canvas):
        for (x, y), (char, color) in self._pending.items():
            surface.put(x, y, char, color)
        self._drawn = set(self._pending)
        self._pending = {}

    def draw(self, surface: Canvas):
        self.erase_stale(surface)
        self.paint(surface)

    def clear(self, surface: Canvas):
        """Blank everything this sprite painted."""
        for x, y in self._drawn:
            surface.blank(x, y)
        self._drawn = set()
        self._pending = {}

    @property
    def drawn_cells(self) -> Set[GridCell]:
        return set(self._drawn)


def render_sprites(surface: Canvas, sprites: Iterable[Sprite]):
    """
    Draw a frame's worth of sprites.

    All stale cells are blanked before anything is painted so one sprite's
    erase never wipes another sprite's fresh paint.
    """
    sprites = list(sprites)
    for sprite in sprites:
        sprite.erase_stale(surface)
    for sprite in sprites:
        sprite.paint(surface)
