"""
Round Controller
=================
Runs one round: walks the round's waves from the table in waves.py, fires
their attacks, advances all hazards each tick, applies damage to the heart,
and decides when the round is won or lost.

Round 4 style waves (QuadrantSweep) run their own three-phase cycle:
warning markers, the sweep itself, then a short cooldown, each phase
shorter than the last as the round goes on.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional

from .arena import Arena
from .config import (
    MIN_WAVE_DWELL, WARNING_TEXT,
    QUADRANT_WARNING_TICKS, QUADRANT_ACTIVE_TICKS, QUADRANT_COOLDOWN_TICKS,
)
from .engine import Canvas, Sprite, NEON_YELLOW, GridCell, Glyph, render_sprites
from .knight import Knight
from .lasers import Laser, all_complete
from .patterns import HORIZONTAL, line_sweep, grid, cross, quadrant_sweep
from .player import Heart
from .snake import Snake
from .waves import (
    ROUNDS, RoundPlan, Wave, Attack,
    LineSweep, Grid, Cross, QuadrantSweep, SnakeToggle, KnightSpawn, OneOf,
)

logger = logging.getLogger(__name__)

SNAKE_START_OFFSET = -10


class RoundState(Enum):
    WAITING_TO_START = auto()
    WAVE_ACTIVE = auto()
    ROUND_COMPLETE = auto()
    PLAYER_DEAD = auto()
    ABORTED = auto()


class QuadrantPhase(Enum):
    WARNING = auto()
    ACTIVE = auto()
    COOLDOWN = auto()


@dataclass(frozen=True)
class RoundResult:
    """Outcome of one round, handed to whoever runs the next one."""
    won: bool
    ending_hp: int
    aborted: bool = False  # the player quit rather than lost


class QuadrantWarnings(Sprite):
    """'!!!' markers centered in each quadrant about to be swept."""

    def __init__(self, arena: Arena):
        super().__init__()
        self.arena = arena
        self.safe_quadrant: Optional[int] = None
        self.visible = False

    def show(self, safe_quadrant: int):
        self.safe_quadrant = safe_quadrant
        self.visible = True

    def hide(self):
        self.visible = False

    def update(self):
        pass

    def cells(self) -> Dict[GridCell, Glyph]:
        if not self.visible:
            return {}
        result: Dict[GridCell, Glyph] = {}
        for quadrant in range(4):
            if quadrant == self.safe_quadrant:
                continue
            qx0, qy0, qx1, qy1 = self.arena.quadrant_bounds(quadrant)
            if qx0 > qx1 or qy0 > qy1:
                continue
            cx, cy = self.arena.quadrant_center(quadrant)
            for i, char in enumerate(WARNING_TEXT):
                result[(cx - 1 + i, cy)] = (char, NEON_YELLOW)
        return result


def _phase_ticks(table, wave_index: int) -> int:
    return table[min(wave_index, len(table) - 1)]


class RoundController:
    """
    State machine for a single round.

    tick() order: heart moves and is clamped, the wave schedule runs,
    hazards advance, finished lasers are evicted, collisions are tested,
    then death and completion are decided. Every collision in a tick sees
    the same fully advanced positions.
    """

    def __init__(self, round_number: int, arena: Arena, heart: Heart,
                 rng=random, plan: Optional[RoundPlan] = None):
        if plan is None:
            if round_number not in ROUNDS:
                raise ValueError(f'No such round: {round_number}')
            plan = ROUNDS[round_number]

        self.round_number = round_number
        self.plan = plan
        self.arena = arena
        self.heart = heart
        self.rng = rng

        cx, cy = arena.center
        self.snake = Snake((int(arena.clamp_x(cx + SNAKE_START_OFFSET)), cy), rng=rng)
        self.knight = Knight(rng=rng)
        self.warnings = QuadrantWarnings(arena)

        self.lasers: List[Laser] = []
        self._retired: List[Sprite] = []

        self.state = RoundState.WAITING_TO_START
        self.wave_index = 0
        self.wave_timer = 0
        self.knight_timer = 0
        self.safe_quadrant: Optional[int] = None
        self.quadrant_phase: Optional[QuadrantPhase] = None
        self._cleared = False

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def current_wave(self) -> Wave:
        return self.plan.waves[self.wave_index]

    @property
    def is_final_wave(self) -> bool:
        return self.wave_index >= self.plan.max_waves - 1

    @property
    def finished(self) -> bool:
        return self.state in (
            RoundState.ROUND_COMPLETE, RoundState.PLAYER_DEAD, RoundState.ABORTED
        )

    def result(self) -> RoundResult:
        return RoundResult(won=self.state == RoundState.ROUND_COMPLETE,
                           ending_hp=self.heart.hp,
                           aborted=self.state == RoundState.ABORTED)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self):
        """Leave the waiting state and fire the first wave."""
        if self.state != RoundState.WAITING_TO_START:
            return
        logger.info('Round %d started with %d HP', self.round_number, self.heart.hp)
        self.heart.set_direction(1.0, 0.0)
        self.state = RoundState.WAVE_ACTIVE
        self._enter_wave(0)

    def abort(self):
        logger.info('Round %d aborted by player', self.round_number)
        self.state = RoundState.ABORTED
        self._retire_all()

    def tick(self):
        if self.state != RoundState.WAVE_ACTIVE:
            return

        self.heart.update()
        self.heart.constrain(self.arena)

        self.wave_timer += 1
        if self.current_wave.is_quadrant:
            self._run_quadrant_cycle()
        else:
            self._run_wave_schedule()

        for laser in self.lasers:
            laser.update()
        self.knight.update()
        self.snake.update(self.heart.cell)
        self._evict_complete()

        self._check_collisions()

        if (not self.current_wave.is_quadrant and self.is_final_wave and
                all_complete(self.lasers) and self.wave_timer > MIN_WAVE_DWELL):
            self._cleared = True

        if self.heart.is_dead:
            logger.info('Heart destroyed in round %d, wave %d',
                        self.round_number, self.wave_index)
            self.state = RoundState.PLAYER_DEAD
            self._retire_all()
        elif self._cleared:
            logger.info('Round %d complete with %d HP', self.round_number, self.heart.hp)
            self.state = RoundState.ROUND_COMPLETE
            self._retire_all()

    # -------------------------------------------------------------------------
    # Waves
    # -------------------------------------------------------------------------

    def _enter_wave(self, index: int):
        self._retire_lasers()
        self.wave_index = index
        self.wave_timer = 0
        wave = self.current_wave
        logger.debug('Round %d: wave %d/%d', self.round_number, index + 1, self.plan.max_waves)

        if wave.is_quadrant:
            self._pick_safe_quadrant()
            self.quadrant_phase = QuadrantPhase.WARNING
            self.warnings.show(self.safe_quadrant)

        self._fire(wave.attacks)

    def _run_wave_schedule(self):
        wave = self.current_wave

        if self.plan.knight_interval:
            self.knight_timer += 1
            if self.knight_timer >= self.plan.knight_interval:
                self.knight_timer = 0
                self.knight.spawn(self.arena)

        for at_tick, attacks in wave.followups:
            if self.wave_timer == at_tick:
                self._fire(attacks)

        if self.is_final_wave:
            return

        timed_out = self.wave_timer >= wave.duration
        burned_out = all_complete(self.lasers) and self.wave_timer > MIN_WAVE_DWELL
        if timed_out or burned_out:
            self._enter_wave(self.wave_index + 1)

    def _fire(self, attacks):
        for attack in attacks:
            self._fire_one(attack)

    def _fire_one(self, attack: Attack):
        if isinstance(attack, OneOf):
            self._fire_one(self.rng.choice(attack.options))
        elif isinstance(attack, LineSweep):
            hx, hy = self.heart.cell
            center = hy if attack.axis == HORIZONTAL else hx
            self.lasers.extend(line_sweep(self.arena, attack.axis, attack.count,
                                          center + attack.offset))
        elif isinstance(attack, Grid):
            self.lasers.extend(grid(self.arena))
        elif isinstance(attack, Cross):
            self.lasers.extend(cross(self.arena))
        elif isinstance(attack, SnakeToggle):
            self.snake.set_active(attack.active)
        elif isinstance(attack, KnightSpawn):
            self.knight.spawn(self.arena)
        elif isinstance(attack, QuadrantSweep):
            pass  # fired by the quadrant cycle once the warning runs out

    # -------------------------------------------------------------------------
    # Quadrant cycle
    # -------------------------------------------------------------------------

    def _pick_safe_quadrant(self):
        previous = self.safe_quadrant
        if previous is None:
            self.safe_quadrant = self.rng.randrange(4)
        else:
            self.safe_quadrant = self.rng.choice([q for q in range(4) if q != previous])
        logger.debug('Safe quadrant: %d', self.safe_quadrant)

    def _run_quadrant_cycle(self):
        i = self.wave_index

        if self.quadrant_phase == QuadrantPhase.WARNING:
            if self.wave_timer >= _phase_ticks(QUADRANT_WARNING_TICKS, i):
                self.warnings.hide()
                self.lasers.extend(quadrant_sweep(self.arena, self.safe_quadrant))
                self.quadrant_phase = QuadrantPhase.ACTIVE
                self.wave_timer = 0
                logger.debug('Quadrant sweep fired, %d lasers', len(self.lasers))

        elif self.quadrant_phase == QuadrantPhase.ACTIVE:
            if (all_complete(self.lasers) or
                    self.wave_timer >= _phase_ticks(QUADRANT_ACTIVE_TICKS, i)):
                self._retire_lasers()
                if self.is_final_wave:
                    self._cleared = True
                else:
                    self.quadrant_phase = QuadrantPhase.COOLDOWN
                    self.wave_timer = 0
                    logger.debug('Quadrant cooldown after wave %d', i + 1)

        elif self.quadrant_phase == QuadrantPhase.COOLDOWN:
            if self.wave_timer >= _phase_ticks(QUADRANT_COOLDOWN_TICKS, i):
                self._enter_wave(self.wave_index + 1)

    # -------------------------------------------------------------------------
    # Hazards
    # -------------------------------------------------------------------------

    def _check_collisions(self):
        cell = self.heart.cell
        if any(laser.check_collision(cell) for laser in self.lasers):
            self._hit('laser')
        if self.knight.check_collision(cell):
            self._hit('knight')
        if self.snake.check_collision(cell):
            self._hit('snake')

    def _hit(self, source: str):
        if self.heart.take_damage():
            logger.debug('Hit by %s at %s, HP now %d', source, self.heart.cell, self.heart.hp)

    def _evict_complete(self):
        finished = [laser for laser in self.lasers if laser.is_complete()]
        if finished:
            self._retired.extend(finished)
            self.lasers = [laser for laser in self.lasers if not laser.is_complete()]

    def _retire_lasers(self):
        for laser in self.lasers:
            laser.deactivate()
        self._retired.extend(self.lasers)
        self.lasers = []

    def _retire_all(self):
        self._retire_lasers()
        self.warnings.hide()
        self.snake.set_active(False)
        self.knight.dismiss()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def sprites(self) -> List[Sprite]:
        """Live sprites in paint order (heart last, on top)."""
        return [self.warnings, self.knight, *self.lasers, self.snake, self.heart]

    def draw(self, surface: Canvas):
        for sprite in self._retired:
            sprite.clear(surface)
        self._retired = []
        self.arena.draw(surface)
        render_sprites(surface, self.sprites())

    def clear(self, surface: Canvas):
        """Erase everything the round put on screen except the arena."""
        for sprite in self._retired + self.sprites():
            sprite.clear(surface)
        self._retired = []
