"""
Tests for the heart and keyboard handling.
"""
import pytest

from laser_battle.config import MAX_HP, INVINCIBILITY_TICKS
from laser_battle.player import Heart, InputHandler

from tests.helpers import key, LEFT, RIGHT, UP, NO_KEY


class TestDamage:
    """HP loss and the invincibility window."""

    def test_hit_costs_one_hp(self):
        heart = Heart(10, 10)
        assert heart.take_damage()
        assert heart.hp == MAX_HP - 1
        assert heart.invincible

    def test_second_hit_in_window_ignored(self):
        heart = Heart(10, 10)
        heart.take_damage()
        assert not heart.take_damage()
        assert heart.hp == MAX_HP - 1

    def test_window_expires(self):
        heart = Heart(10, 10)
        heart.take_damage()
        for _ in range(INVINCIBILITY_TICKS):
            heart.update()
        assert not heart.invincible
        assert heart.take_damage()
        assert heart.hp == MAX_HP - 2

    def test_hp_floors_at_zero(self):
        heart = Heart(10, 10, hp=1)
        heart.take_damage()
        assert heart.hp == 0
        assert heart.is_dead

    def test_starting_hp_clamped(self):
        assert Heart(0, 0, hp=99).hp == MAX_HP

    def test_glyph_color_changes_while_invincible(self):
        heart = Heart(3, 4)
        (_, normal), = heart.cells().values()
        heart.take_damage()
        (_, flashing), = heart.cells().values()
        assert normal != flashing


class TestMovement:
    """Direction, speed and arena clamping."""

    def test_horizontal_moves_faster(self):
        heart = Heart(10, 10)
        heart.set_direction(1, 0)
        heart.update()
        assert heart.x == pytest.approx(10.6)
        assert heart.y == pytest.approx(10)

    def test_vertical_speed(self):
        heart = Heart(10, 10)
        heart.set_direction(0, 1)
        heart.update()
        assert heart.y == pytest.approx(10.3)

    def test_direction_normalized(self):
        heart = Heart(0, 0)
        heart.set_direction(3, 4)
        assert heart.direction_x == pytest.approx(0.6)
        assert heart.direction_y == pytest.approx(0.8)

    def test_zero_direction_ignored(self):
        heart = Heart(0, 0)
        heart.set_direction(1, 0)
        heart.stop()
        heart.set_direction(0, 0)
        assert not heart.moving
        assert heart.direction_x == 1

    def test_toggle_keeps_direction(self):
        heart = Heart(10, 10)
        heart.set_direction(0, -1)
        heart.toggle()
        heart.update()
        assert (heart.x, heart.y) == (10, 10)
        heart.toggle()
        heart.update()
        assert heart.y == pytest.approx(9.7)

    def test_constrain_clamps_axes_independently(self, arena):
        heart = Heart(80, 5)
        heart.constrain(arena)
        assert heart.x == arena.inner_max_x
        assert heart.y == 5

    def test_constrain_low_edges(self, arena):
        heart = Heart(-3, -3)
        heart.constrain(arena)
        assert heart.cell == (arena.inner_min_x, arena.inner_min_y)

    def test_reset_keeps_hp(self):
        heart = Heart(1, 1, hp=4)
        heart.set_direction(1, 0)
        heart.reset(7, 8)
        assert heart.cell == (7, 8)
        assert heart.hp == 4
        assert not heart.moving

    def test_half_cells_round_up(self):
        assert Heart(10.5, 9.5).cell == (11, 10)
        assert Heart(10.49, 9.51).cell == (10, 10)


class TestInputHandler:
    """Key queueing and replay order."""

    def test_direction_then_space_stops_facing_new_way(self):
        heart = Heart(10, 10)
        heart.set_direction(1, 0)
        handler = InputHandler()
        handler.process_key(LEFT)
        handler.process_key(key(' '))
        handler.apply(heart)
        assert not heart.moving
        assert heart.direction_x == -1

    def test_space_then_direction_keeps_moving(self):
        heart = Heart(10, 10)
        heart.set_direction(1, 0)
        handler = InputHandler()
        handler.process_key(key(' '))
        handler.process_key(UP)
        handler.apply(heart)
        assert heart.moving
        assert (heart.direction_x, heart.direction_y) == (0, -1)

    def test_apply_empties_queue(self):
        heart = Heart(10, 10)
        handler = InputHandler()
        handler.process_key(RIGHT)
        handler.apply(heart)
        heart.stop()
        handler.apply(heart)
        assert not heart.moving

    def test_reset_drops_commands(self):
        heart = Heart(10, 10)
        handler = InputHandler()
        handler.process_key(RIGHT)
        handler.reset()
        handler.apply(heart)
        assert not heart.moving

    def test_quit_is_consumed_once(self):
        handler = InputHandler()
        handler.process_key(key('Q'))
        assert handler.consume_quit()
        assert not handler.consume_quit()

    def test_empty_and_unknown_keys_ignored(self):
        heart = Heart(10, 10)
        handler = InputHandler()
        handler.process_key(NO_KEY)
        handler.process_key(None)
        handler.process_key(key('x'))
        handler.apply(heart)
        assert not heart.moving
        assert not handler.consume_quit()
