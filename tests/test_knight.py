"""
Tests for the knight burst.
"""
import random

import pytest

from laser_battle.arena import Arena
from laser_battle.knight import Knight
from laser_battle.lasers import LaserKind


class FixedRng:
    """randint that always lands on the low end, the middle, or the high end."""

    def __init__(self, where='low'):
        self.where = where

    def randint(self, a, b):
        if self.where == 'low':
            return a
        if self.where == 'high':
            return b
        return (a + b) // 2


class TestSpawn:
    """Placement and the laser burst."""

    def test_open_cell_fires_eight(self, arena):
        knight = Knight(rng=FixedRng('middle'))
        knight.spawn(arena)
        assert knight.position == (20, 8)
        assert len(knight.lasers) == 8
        assert knight.active
        assert all(laser.active for laser in knight.lasers)
        assert all(laser.kind == LaserKind.KNIGHT for laser in knight.lasers)

    @pytest.mark.parametrize('where', ['low', 'high'])
    def test_corner_fires_two(self, arena, where):
        knight = Knight(rng=FixedRng(where))
        knight.spawn(arena)
        assert len(knight.lasers) == 2
        for laser in knight.lasers:
            assert arena.contains(*laser.end)

    def test_random_spawns_stay_inside(self, arena):
        knight = Knight(rng=random.Random(11))
        for _ in range(50):
            knight.spawn(arena)
            assert arena.contains(*knight.position)
            assert 1 <= len(knight.lasers) <= 8

    def test_no_room_no_burst(self):
        tiny = Arena(0, 0, 2, 2)
        knight = Knight(rng=FixedRng())
        knight.spawn(tiny)
        assert knight.lasers == []
        assert not knight.active
        assert knight.cells() == {}

    def test_respawn_replaces_burst(self, arena):
        knight = Knight(rng=random.Random(5))
        knight.spawn(arena)
        first = knight.lasers
        knight.spawn(arena)
        assert knight.lasers is not first


class TestLifetime:
    """Burn-out, hits and dismissal."""

    def test_vanishes_when_lasers_done(self, arena):
        knight = Knight(rng=FixedRng('middle'))
        knight.spawn(arena)
        ticks = 0
        while knight.active:
            knight.update()
            ticks += 1
            assert ticks < 200
        assert knight.lasers == []

    def test_own_cell_is_hazardous(self, arena):
        knight = Knight(rng=FixedRng('middle'))
        knight.spawn(arena)
        knight.update()
        assert knight.check_collision((20, 8))
        assert not knight.check_collision((1, 1))

    def test_dismiss(self, arena):
        knight = Knight(rng=FixedRng('middle'))
        knight.spawn(arena)
        knight.update()
        knight.dismiss()
        assert not knight.active
        assert not knight.check_collision((20, 8))

    def test_glyph_on_position(self, arena):
        knight = Knight(rng=FixedRng('middle'))
        knight.spawn(arena)
        knight.update()
        assert knight.cells()[(20, 8)][0] == 'N'
