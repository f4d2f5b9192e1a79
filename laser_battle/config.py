"""
Game Configuration
===================
Tuning constants for the Laser Battle encounter. All timings are in ticks
at TARGET_FPS unless the name says otherwise.
"""

# Loop timing
TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
COUNTDOWN_SECONDS = 3

# Terminal requirements
MIN_WIDTH = 60
MIN_HEIGHT = 24

# Arena
ARENA_WIDTH = 40
ARENA_HEIGHT = 16

# Rounds
TOTAL_ROUNDS = 7
MIN_WAVE_DWELL = 60

# Player
MAX_HP = 10
HEART_SPEED = 0.3
ASPECT_RATIO = 2.0  # terminal cells are roughly twice as tall as wide
INVINCIBILITY_TICKS = 10

# Lasers
LASER_STEP = 1.0 / 60  # head crosses its segment in about one second
LASER_ACTIVE_TICKS = 60
TRAIL_FADE_TICKS = 60
LINE_SPACING = 2

# Round 4 quadrant cycle, indexed by wave
QUADRANT_WARNING_TICKS = (120, 100, 80, 60)
QUADRANT_ACTIVE_TICKS = (180, 160, 140, 120)
QUADRANT_COOLDOWN_TICKS = (60, 50, 40, 30)
QUADRANT_LASER_TICKS = 60

# Snake
SNAKE_LENGTH = 5
SNAKE_MOVE_DELAY = 6
SNAKE_HIT_COOLDOWN = 60

# Knight
KNIGHT_MOVES = (
    (2, 1), (1, 2), (-1, 2), (-2, 1),
    (-2, -1), (-1, -2), (1, -2), (2, -1),
)

# Glyphs
HEART_CHAR = '◆'
SNAKE_HEAD_CHAR = 'O'
SNAKE_BODY_CHAR = '█'
KNIGHT_CHAR = 'N'
TRAIL_CHAR = '*'
TRAIL_FADED_CHAR = '.'
WARNING_TEXT = '!!!'
BORDER_CHAR = '#'

# Environment variable naming a log file (logging is off otherwise)
LOG_ENV_VAR = 'LASER_BATTLE_LOG'
