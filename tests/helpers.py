"""
Keystrokes and a scripted stand-in for blessed's Terminal.
"""
from collections import deque

from blessed.keyboard import Keystroke


def key(text: str) -> Keystroke:
    """Plain character keystroke."""
    return Keystroke(text)


ENTER = Keystroke('\n', code=343, name='KEY_ENTER')
UP = Keystroke('\x1b[A', code=259, name='KEY_UP')
DOWN = Keystroke('\x1b[B', code=258, name='KEY_DOWN')
LEFT = Keystroke('\x1b[D', code=260, name='KEY_LEFT')
RIGHT = Keystroke('\x1b[C', code=261, name='KEY_RIGHT')
NO_KEY = Keystroke('')


class FakeTerminal:
    """Scripted terminal: hands out queued keys, renders moves as <x,y> markers."""

    def __init__(self, keys=(), width: int = 80, height: int = 24):
        self.width = width
        self.height = height
        self.normal = ''
        self.keys = deque(keys)
        self.blocking_reads = 0

    def inkey(self, timeout=None):
        if timeout is None:
            self.blocking_reads += 1
        if self.keys:
            return self.keys.popleft()
        if timeout is None:
            raise AssertionError('blocking read with no scripted keys left')
        return NO_KEY

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color(self, n):
        return ''

    def on_color(self, n):
        return ''
