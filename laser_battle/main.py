#!/usr/bin/env python3
"""
LASER BATTLE - Terminal Bullet-Dodger
======================================
Steer the heart through seven rounds of lasers, knights and a snake.
HP carries over from round to round.

Controls:
    Arrow keys  - Set direction (and resume moving)
    SPACE       - Stop / start
    Q           - Quit
"""

import logging
import math
import os
import random
import sys
import time
from typing import Optional

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .arena import Arena
from .config import (
    FRAME_TIME, COUNTDOWN_SECONDS, MIN_WIDTH, MIN_HEIGHT,
    ARENA_WIDTH, ARENA_HEIGHT, TOTAL_ROUNDS, MAX_HP, LOG_ENV_VAR,
)
from .engine import (
    Canvas, DoubleBuffer,
    NEON_RED, NEON_CYAN, NEON_YELLOW, NEON_GREEN, GRAY_MED, GRAY_DARK, WHITE,
)
from .player import Heart, InputHandler
from .rounds import RoundController, RoundResult

logger = logging.getLogger(__name__)

CONTROLS_TEXT = 'Arrow keys to set direction, Space to stop/start, Q to quit'
HP_BAR_WIDTH = 20

TITLE_ART = [
    r" _      _   ___ ___ ___   ___   _ _____ _____ _    ___ ",
    r"| |    /_\ / __| __| _ \ | _ ) /_\_   _|_   _| |  | __|",
    r"| |__ / _ \\__ \ _||   / | _ \/ _ \| |   | | | |__| _| ",
    r"|____/_/ \_\___/___|_|_\ |___/_/ \_\_|   |_| |____|___|",
]


# =============================================================================
# OUTPUT HELPERS
# =============================================================================

def flush(buffer: DoubleBuffer):
    """Write changed cells to the terminal."""
    output = buffer.present()
    if output:
        print(output, end='', flush=True)


def drain_input(term: Terminal, input_handler: InputHandler):
    """Read every pending key so the latest press is never left queued."""
    key = term.inkey(timeout=0)
    while key:
        input_handler.process_key(key)
        key = term.inkey(timeout=0)


def centered_x(canvas: Canvas, text: str) -> int:
    return max(0, canvas.width // 2 - len(text) // 2)


def is_enter(key) -> bool:
    return key.name == 'KEY_ENTER' or str(key) in ('\n', '\r')


# =============================================================================
# HUD
# =============================================================================

def render_health_bar(canvas: Canvas, x: int, y: int, current_hp: int,
                      max_hp: int = MAX_HP):
    """Draw 'HP: n/max [====------]'."""
    label = f'HP: {current_hp:>2}/{max_hp} ['
    canvas.put_string(x, y, label, WHITE)

    filled = int((current_hp / max_hp) * HP_BAR_WIDTH)
    bar_x = x + len(label)
    for i in range(HP_BAR_WIDTH):
        if i < filled:
            canvas.put(bar_x + i, y, '=', NEON_RED)
        else:
            canvas.put(bar_x + i, y, '-', GRAY_DARK)
    canvas.put(bar_x + HP_BAR_WIDTH, y, ']', WHITE)


def render_hud(canvas: Canvas, round_number: int, current_hp: int):
    canvas.put_string(2, 1, f'Round: {round_number}/{TOTAL_ROUNDS}', NEON_CYAN)
    render_health_bar(canvas, 2, canvas.height - 2, current_hp)
    canvas.put_string(2, canvas.height - 1, CONTROLS_TEXT, GRAY_MED)


# =============================================================================
# BLOCKING SCREENS
# =============================================================================

def run_countdown(term: Terminal, buffer: DoubleBuffer, input_handler: InputHandler,
                  y: int, seconds: Optional[float] = None) -> bool:
    """
    Show the get-ready banner for a few wall-clock seconds.

    Returns False if the player quit during the countdown.
    """
    if seconds is None:
        seconds = COUNTDOWN_SECONDS
    deadline = time.monotonic() + seconds
    shown = ''

    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break

        drain_input(term, input_handler)
        if input_handler.consume_quit():
            buffer.blank_span(centered_x(buffer, shown), y, len(shown))
            return False
        input_handler.reset()

        text = f'Get ready! Starting in {math.ceil(remaining)} seconds...'
        if text != shown:
            buffer.blank_span(centered_x(buffer, shown), y, len(shown))
            buffer.put_string(centered_x(buffer, text), y, text, NEON_YELLOW)
            shown = text
        flush(buffer)
        time.sleep(FRAME_TIME)

    buffer.blank_span(centered_x(buffer, shown), y, len(shown))
    flush(buffer)
    return True


def is_quit(key) -> bool:
    return not key.is_sequence and key.lower() == 'q'


def wait_for_enter(term: Terminal, buffer: DoubleBuffer, message: str, y: int) -> bool:
    """
    Show a message and block on a single key read until Enter is pressed.

    Returns False if the player quit instead.
    """
    x = centered_x(buffer, message)
    buffer.put_string(x, y, message, NEON_GREEN)
    flush(buffer)

    key = term.inkey()
    while not is_enter(key) and not is_quit(key):
        key = term.inkey()

    buffer.blank_span(x, y, len(message))
    flush(buffer)
    return not is_quit(key)


# =============================================================================
# ROUNDS
# =============================================================================

def run_round(term: Terminal, round_number: int, starting_hp: int,
              buffer: Optional[DoubleBuffer] = None, rng=random) -> RoundResult:
    """
    Play one round at 60 ticks per second and report how it ended.

    Quitting counts as a loss; the heart's HP at that moment is reported.
    """
    if buffer is None:
        buffer = DoubleBuffer(term)
    buffer.wipe()

    arena = Arena.centered(buffer.width, buffer.height, ARENA_WIDTH, ARENA_HEIGHT)
    cx, cy = arena.center
    heart = Heart(cx, cy, hp=starting_hp)
    controller = RoundController(round_number, arena, heart, rng=rng)
    input_handler = InputHandler()

    arena.draw(buffer)
    render_hud(buffer, round_number, heart.hp)
    flush(buffer)

    if not run_countdown(term, buffer, input_handler, cy):
        controller.abort()
        return controller.result()

    controller.start()

    while not controller.finished:
        frame_start = time.perf_counter()

        drain_input(term, input_handler)
        if input_handler.consume_quit():
            controller.abort()
            break
        input_handler.apply(heart)

        controller.tick()

        controller.draw(buffer)
        render_hud(buffer, round_number, heart.hp)
        flush(buffer)

        # Sleep for remaining frame time
        elapsed = time.perf_counter() - frame_start
        sleep_time = FRAME_TIME - elapsed
        if sleep_time > 0.001:
            time.sleep(sleep_time)

    controller.clear(buffer)
    render_hud(buffer, round_number, heart.hp)
    flush(buffer)
    return controller.result()


def play_session(term: Terminal, first_round: int = 1,
                 buffer: Optional[DoubleBuffer] = None) -> bool:
    """
    Play rounds in order from first_round, carrying HP between them.

    Every session starts at full HP. Returns True if the last round is won.
    """
    if buffer is None:
        buffer = DoubleBuffer(term)
    prompt_y = buffer.height - 3
    hp = MAX_HP

    for round_number in range(first_round, TOTAL_ROUNDS + 1):
        result = run_round(term, round_number, hp, buffer)
        hp = result.ending_hp

        if result.aborted:
            logger.info('Session quit during round %d', round_number)
            return False
        if not result.won:
            logger.info('Session lost in round %d', round_number)
            wait_for_enter(term, buffer, 'Your heart shattered... Press Enter to continue',
                           prompt_y)
            return False

        if round_number < TOTAL_ROUNDS:
            if not wait_for_enter(term, buffer,
                                  f'Round {round_number} complete! Press Enter to continue',
                                  prompt_y):
                logger.info('Session quit after round %d', round_number)
                return False

    logger.info('Session won with %d HP left', hp)
    wait_for_enter(term, buffer, 'You survived every round! Press Enter to continue',
                   prompt_y)
    return True


# =============================================================================
# TITLE SCREEN
# =============================================================================

def render_title_screen(canvas: Canvas, frame: int):
    """Render the title screen."""
    height = canvas.height

    art_y = max(0, height // 2 - 6)
    for i, line in enumerate(TITLE_ART):
        color = NEON_RED if i % 2 == 0 else NEON_CYAN
        canvas.put_string(centered_x(canvas, line), art_y + i, line, color)

    sub = 'SURVIVE SEVEN ROUNDS OF LASERS'
    canvas.put_string(centered_x(canvas, sub), art_y + len(TITLE_ART) + 1, sub, GRAY_MED)

    # Blinking prompt
    prompt = '[ PRESS ANY KEY TO START ]'
    prompt_y = art_y + len(TITLE_ART) + 3
    if (frame // 2) % 2 == 0:
        canvas.put_string(centered_x(canvas, prompt), prompt_y, prompt, NEON_GREEN)
    else:
        canvas.blank_span(centered_x(canvas, prompt), prompt_y, len(prompt))

    hints = [
        f'[ 1-{TOTAL_ROUNDS} ] Start at round',
        'Q - Quit',
    ]
    for i, line in enumerate(hints):
        canvas.put_string(centered_x(canvas, line), prompt_y + 2 + i, line, GRAY_MED)


def choose_round(term: Terminal, buffer: DoubleBuffer) -> Optional[int]:
    """Wait on the title screen. Returns the round to start from, or None to quit."""
    buffer.wipe()
    frame = 0
    while True:
        render_title_screen(buffer, frame)
        flush(buffer)
        key = term.inkey(timeout=0.5)
        frame += 1
        if not key:
            continue

        key_str = key.lower() if not key.is_sequence else ''
        if key_str == 'q' or key.name == 'KEY_ESCAPE':
            return None
        if key_str.isdigit() and 1 <= int(key_str) <= TOTAL_ROUNDS:
            return int(key_str)
        return 1


# =============================================================================
# MAIN
# =============================================================================

def configure_logging():
    """Log to the file named by LASER_BATTLE_LOG, if set. The terminal is ours."""
    path = os.environ.get(LOG_ENV_VAR)
    if path:
        logging.basicConfig(
            filename=path,
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )


def main():
    """Entry point. Sets up the terminal and runs title screen and sessions."""
    configure_logging()
    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        buffer = DoubleBuffer(term)

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        while True:
            first_round = choose_round(term, buffer)
            if first_round is None:
                break
            play_session(term, first_round, buffer)

        # Restore terminal
        print(term.normal, end='', flush=True)


if __name__ == '__main__':
    main()
