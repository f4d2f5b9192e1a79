"""
Tests for laser timing, trails and hit testing.
"""
import pytest

from laser_battle.lasers import Laser, LaserKind, HEAD_CHARS, all_complete


def run(laser, ticks):
    for _ in range(ticks):
        laser.update()


@pytest.fixture
def row_laser(arena):
    """Horizontal laser across row 5 of the standard arena."""
    laser = Laser((1, 5), (39, 5), LaserKind.HORIZONTAL, arena.inner_bounds)
    laser.activate()
    return laser


class TestLifecycle:
    """Activation, burn-out and completion."""

    def test_fresh_laser_is_complete(self, arena):
        laser = Laser((1, 5), (39, 5), LaserKind.HORIZONTAL, arena.inner_bounds)
        assert laser.is_complete()

    def test_activated_laser_is_not_complete(self, row_laser):
        assert row_laser.active
        assert not row_laser.is_complete()

    def test_head_stops_after_active_ticks(self, row_laser):
        run(row_laser, 59)
        assert row_laser.active
        row_laser.update()
        assert not row_laser.active

    def test_complete_only_after_trail_fades(self, row_laser):
        ticks = 0
        while not row_laser.is_complete():
            assert row_laser.active or row_laser.trail
            row_laser.update()
            ticks += 1
            assert ticks < 200
        assert ticks <= 120

    def test_complete_laser_stays_complete(self, row_laser):
        run(row_laser, 150)
        assert row_laser.is_complete()
        run(row_laser, 10)
        assert row_laser.is_complete()
        assert row_laser.cells() == {}

    def test_deactivate_completes_immediately(self, row_laser):
        run(row_laser, 20)
        row_laser.deactivate()
        assert row_laser.is_complete()
        assert not row_laser.check_collision(row_laser.start)

    def test_custom_active_timer(self, row_laser):
        row_laser.set_active_timer(10)
        run(row_laser, 10)
        assert not row_laser.active
        assert row_laser.trail

    def test_activate_refires_from_start(self, row_laser):
        run(row_laser, 30)
        row_laser.activate()
        assert row_laser.progress == 0.0
        assert row_laser.trail == []
        row_laser.update()
        assert row_laser.trail[0].cell == (2, 5)

    def test_all_complete(self, row_laser, arena):
        idle = Laser((1, 1), (1, 15), LaserKind.VERTICAL, arena.inner_bounds)
        assert all_complete([idle])
        assert not all_complete([idle, row_laser])
        assert all_complete([])


class TestTrail:
    """The head's trail."""

    def test_trail_never_longer_than_path(self, row_laser):
        for _ in range(130):
            row_laser.update()
            assert len(row_laser.trail) <= row_laser.path_length

    def test_no_consecutive_duplicates(self, arena):
        # Short path: the head dwells on each cell for several ticks
        laser = Laser((5, 5), (8, 5), LaserKind.HORIZONTAL, arena.inner_bounds)
        laser.activate()
        run(laser, 60)
        cells = [segment.cell for segment in laser.trail]
        assert all(a != b for a, b in zip(cells, cells[1:]))
        assert len(cells) <= 4

    def test_out_of_bounds_cells_not_recorded(self, arena):
        laser = Laser((30, 5), (50, 5), LaserKind.HORIZONTAL, arena.inner_bounds)
        laser.activate()
        run(laser, 60)
        assert laser.trail
        assert all(segment.x <= arena.inner_max_x for segment in laser.trail)

    def test_trail_cells_fade_individually(self, row_laser):
        run(row_laser, 30)
        remaining = [segment.frames_remaining for segment in row_laser.trail]
        assert remaining == sorted(remaining)
        assert remaining[0] < remaining[-1]


class TestPath:
    """Where the head sits along its segment."""

    def test_half_steps_round_up(self, row_laser):
        # 1 + 38 * 0.25 == 10.5
        assert row_laser.point_at(0.25) == (11, 5)

    def test_endpoints(self, row_laser):
        assert row_laser.point_at(0.0) == (1, 5)
        assert row_laser.point_at(1.0) == (39, 5)


class TestCollision:
    """Hit testing against the head and the trail."""

    def test_head_hits(self, row_laser):
        row_laser.update()
        head = row_laser.head_cell()
        assert head is not None
        assert row_laser.check_collision(head)

    def test_miss_on_other_row(self, row_laser):
        run(row_laser, 30)
        assert not row_laser.check_collision((10, 6))

    def test_trail_still_hits_after_head_stops(self, row_laser):
        run(row_laser, 60)
        assert not row_laser.active
        assert row_laser.head_cell() is None
        assert row_laser.check_collision(row_laser.trail[-1].cell)


class TestGlyphs:
    """What a laser looks like on screen."""

    @pytest.mark.parametrize('kind,char', [
        (LaserKind.HORIZONTAL, 'R'),
        (LaserKind.DIAGONAL_DOWN, 'B'),
        (LaserKind.KNIGHT, 'N'),
    ])
    def test_head_char_by_kind(self, arena, kind, char):
        laser = Laser((1, 1), (15, 15), kind, arena.inner_bounds)
        laser.activate()
        run(laser, 5)
        assert HEAD_CHARS[kind] == char
        assert laser.cells()[laser.head_cell()][0] == char

    def test_faded_trail_char(self, row_laser):
        run(row_laser, 60)
        chars = {char for char, _ in row_laser.cells().values()}
        assert '.' in chars
        assert '*' in chars
