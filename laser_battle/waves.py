"""
Round Table
============
Declarative description of all seven rounds. Each round is a sequence of
waves; each wave names the attacks fired when it starts, how long it runs
before the next wave is forced, and any attacks fired later in the wave.
The round controller interprets this table; nothing here has behavior.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .patterns import HORIZONTAL, VERTICAL


# =============================================================================
# ATTACKS
# =============================================================================

@dataclass(frozen=True)
class LineSweep:
    """Parallel lines through the heart's row or column."""
    axis: str
    count: int = 3
    offset: int = 0  # shift of the center line relative to the heart


@dataclass(frozen=True)
class Grid:
    """Tic-tac-toe grid."""


@dataclass(frozen=True)
class Cross:
    """Both diagonals."""


@dataclass(frozen=True)
class QuadrantSweep:
    """Telegraphed sweep of three quadrants (runs the warning cycle)."""


@dataclass(frozen=True)
class SnakeToggle:
    active: bool = True


@dataclass(frozen=True)
class KnightSpawn:
    pass


@dataclass(frozen=True)
class OneOf:
    """Pick one option at random when the wave starts."""
    options: Tuple['Attack', ...]


Attack = Union[LineSweep, Grid, Cross, QuadrantSweep, SnakeToggle, KnightSpawn, OneOf]


# =============================================================================
# WAVES AND ROUNDS
# =============================================================================

@dataclass(frozen=True)
class Wave:
    attacks: Tuple[Attack, ...] = ()
    duration: int = 60  # ticks before the next wave is forced
    followups: Tuple[Tuple[int, Tuple[Attack, ...]], ...] = ()  # (wave tick, attacks)

    @property
    def is_quadrant(self) -> bool:
        return any(isinstance(attack, QuadrantSweep) for attack in self.attacks)


@dataclass(frozen=True)
class RoundPlan:
    waves: Tuple[Wave, ...]
    knight_interval: int = 0  # respawn the knight every N ticks, 0 = never

    @property
    def max_waves(self) -> int:
        return len(self.waves)


H3 = LineSweep(HORIZONTAL, 3)
V3 = LineSweep(VERTICAL, 3)
RANDOM_ATTACK = OneOf((Grid(), Cross(), H3, V3))

ROUNDS = {
    1: RoundPlan(waves=(
        Wave((H3,), duration=60),
        Wave((V3,), duration=150),  # cap only: the sweep burns out near tick 120
        Wave((LineSweep(VERTICAL, 5),)),
    )),
    2: RoundPlan(waves=(
        Wave((Grid(),), duration=60),
        Wave((V3,), duration=150),  # cap only: the sweep burns out near tick 120
        Wave((Grid(),), followups=((60, (Cross(),)),)),
    )),
    3: RoundPlan(waves=tuple(Wave((RANDOM_ATTACK,), duration=120) for _ in range(5))),
    4: RoundPlan(waves=tuple(Wave((QuadrantSweep(),)) for _ in range(4))),
    5: RoundPlan(waves=(
        Wave((SnakeToggle(True), RANDOM_ATTACK), duration=120),
    ) + tuple(Wave((RANDOM_ATTACK,), duration=120) for _ in range(3))),
    6: RoundPlan(knight_interval=60, waves=(
        Wave((RANDOM_ATTACK,)),
        Wave((H3, KnightSpawn())),
        Wave((Cross(), KnightSpawn())),
        Wave((LineSweep(HORIZONTAL, 2), LineSweep(VERTICAL, 2), KnightSpawn())),
        Wave(()),
        Wave(()),
    )),
    7: RoundPlan(waves=(
        Wave((H3, SnakeToggle(True), KnightSpawn())),
        Wave((V3,)),
        Wave((H3, V3, KnightSpawn())),
        Wave((Grid(),)),
        Wave((Cross(), KnightSpawn())),
        Wave((LineSweep(HORIZONTAL, 5),)),
        Wave((LineSweep(HORIZONTAL, 3, offset=-2), LineSweep(VERTICAL, 3, offset=-2),
              KnightSpawn())),
        Wave((Cross(), Grid(), KnightSpawn())),
    )),
}
