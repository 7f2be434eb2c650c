"""
Tests for the enemy formation controller.

Covers collective movement, wall bounce (reverse, drop, speed-up),
lowest-edge reporting and per-enemy random fire.
"""

import random

import pytest

from neon_invaders.config import (
    ENEMY_BASE_SPEED,
    ENEMY_DROP_DISTANCE,
    ENEMY_SPEED_STEP,
    FIRE_RATE_PER_SECOND,
)
from neon_invaders.models.enemy import Enemy
from neon_invaders.models.formation import FormationController, FormationState
from neon_invaders.models.projectile import Direction


class _FixedRandom(random.Random):
    """Random source that always rolls the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def _quiet_state(**kwargs):
    return FormationState(fire_chance=0.0, **kwargs)


# ── Movement ────────────────────────────────────────────────────────────────


class TestFormationMovement:
    def test_all_active_move_together(self):
        enemies = [Enemy(x=100, y=50, size=30), Enemy(x=150, y=50, size=30)]
        state = _quiet_state()
        FormationController().update(enemies, state, 0.1, 800)
        assert enemies[0].x == pytest.approx(105)
        assert enemies[1].x == pytest.approx(155)

    def test_inactive_enemies_stay_put(self):
        enemies = [Enemy(x=100, y=50, size=30), Enemy(x=150, y=50, size=30)]
        enemies[1].deactivate()
        FormationController().update(enemies, _quiet_state(), 0.1, 800)
        assert enemies[1].x == 150

    def test_moves_left_when_direction_negative(self):
        enemies = [Enemy(x=100, y=50, size=30)]
        FormationController().update(enemies, _quiet_state(direction=-1), 0.1, 800)
        assert enemies[0].x == pytest.approx(95)

    def test_zero_dt_no_motion(self):
        enemies = [Enemy(x=100, y=50, size=30)]
        FormationController().update(enemies, _quiet_state(), 0.0, 800)
        assert enemies[0].x == 100


# ── Wall bounce ─────────────────────────────────────────────────────────────


class TestFormationBounce:
    def test_right_wall_reverses_drops_and_speeds_up(self):
        enemies = [Enemy(x=770, y=50, size=30), Enemy(x=700, y=100, size=30)]
        state = _quiet_state()
        report = FormationController().update(enemies, state, 0.1, 800)

        assert report.bounced
        assert state.direction == -1
        assert state.speed == ENEMY_BASE_SPEED + ENEMY_SPEED_STEP
        assert enemies[0].y == 50 + ENEMY_DROP_DISTANCE
        assert enemies[1].y == 100 + ENEMY_DROP_DISTANCE
        # Moved with the new direction and speed in the same frame
        assert enemies[0].x == pytest.approx(770 - 55 * 0.1)

    def test_left_wall_reverses(self):
        enemies = [Enemy(x=-1, y=50, size=30)]
        state = _quiet_state(direction=-1)
        report = FormationController().update(enemies, state, 0.1, 800)
        assert report.bounced
        assert state.direction == 1

    def test_no_bounce_away_from_wall(self):
        enemies = [Enemy(x=770, y=50, size=30)]
        state = _quiet_state(direction=-1)
        report = FormationController().update(enemies, state, 0.1, 800)
        assert not report.bounced
        assert state.direction == -1
        assert state.speed == ENEMY_BASE_SPEED

    def test_inactive_enemy_at_wall_does_not_bounce(self):
        enemies = [Enemy(x=790, y=50, size=30), Enemy(x=100, y=50, size=30)]
        enemies[0].deactivate()
        state = _quiet_state()
        report = FormationController().update(enemies, state, 0.1, 800)
        assert not report.bounced
        assert enemies[0].y == 50

    def test_inactive_enemies_not_dropped(self):
        enemies = [Enemy(x=770, y=50, size=30), Enemy(x=100, y=200, size=30)]
        enemies[1].deactivate()
        FormationController().update(enemies, _quiet_state(), 0.1, 800)
        assert enemies[1].y == 200

    def test_speed_keeps_growing(self):
        enemies = [Enemy(x=770, y=50, size=30)]
        state = _quiet_state()
        controller = FormationController()
        controller.update(enemies, state, 0.1, 800)
        enemies[0].x = -5
        controller.update(enemies, state, 0.1, 800)
        assert state.speed == ENEMY_BASE_SPEED + 2 * ENEMY_SPEED_STEP
        assert state.direction == 1


# ── Reporting ───────────────────────────────────────────────────────────────


class TestFormationReport:
    def test_lowest_edge_and_count(self):
        enemies = [
            Enemy(x=100, y=50, size=30),
            Enemy(x=100, y=200, size=30),
            Enemy(x=100, y=400, size=30),
        ]
        enemies[2].deactivate()
        report = FormationController().update(enemies, _quiet_state(), 0.1, 800)
        assert report.active_count == 2
        assert report.lowest_edge == 230

    def test_no_active_enemies(self):
        enemies = [Enemy(x=100, y=500, size=30)]
        enemies[0].deactivate()
        report = FormationController().update(enemies, _quiet_state(), 0.1, 800)
        assert report.active_count == 0
        assert report.lowest_edge == 0


# ── Enemy fire ──────────────────────────────────────────────────────────────


class TestFormationFire:
    def test_each_active_enemy_rolls_independently(self):
        enemies = [Enemy(x=100, y=50, size=30), Enemy(x=200, y=50, size=30)]
        enemies[1].deactivate()
        controller = FormationController(_FixedRandom(0.0))
        report = controller.update(enemies, FormationState(), 0.0, 800)
        assert len(report.shots) == 1
        shot = report.shots[0]
        assert shot.direction == Direction.DOWN
        assert shot.x + shot.width / 2 == pytest.approx(115)
        assert shot.y == 80

    def test_no_fire_when_roll_misses(self):
        enemies = [Enemy(x=100, y=50, size=30) for _ in range(5)]
        controller = FormationController(_FixedRandom(0.5))
        report = controller.update(enemies, FormationState(), 0.016, 800)
        assert report.shots == []

    def test_per_second_mode_holds_fire_on_zero_dt(self):
        enemies = [Enemy(x=100, y=50, size=30)]
        state = FormationState(fire_rate_mode=FIRE_RATE_PER_SECOND)
        controller = FormationController(_FixedRandom(0.0))
        report = controller.update(enemies, state, 0.0, 800)
        assert report.shots == []

    def test_fire_rate_roughly_matches_chance(self):
        enemies = [Enemy(x=100, y=50, size=30) for _ in range(100)]
        state = FormationState(fire_chance=0.1)
        controller = FormationController(random.Random(7))
        shots = 0
        for _ in range(100):
            shots += len(controller.update(enemies, state, 0.0, 800).shots)
        assert 800 < shots < 1200
