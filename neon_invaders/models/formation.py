"""
Enemy formation controller for Neon Invaders.

The enemy grid moves as one body: every active enemy shares a single
direction and speed.  When the leading edge reaches a wall the whole
formation reverses, drops one step and speeds up, giving the classic
accelerating descent.  Each enemy also rolls its own chance to fire
every frame, so enemy fire is unsynchronised without any scheduler.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from neon_invaders.config import (
    ENEMY_BASE_SPEED,
    ENEMY_DROP_DISTANCE,
    ENEMY_FIRE_CHANCE,
    ENEMY_SPEED_STEP,
    FIRE_RATE_PER_FRAME,
)
from neon_invaders.models.enemy import Enemy
from neon_invaders.models.projectile import Direction, Projectile
from neon_invaders.utils.functions import frame_fire_chance


# ── Shared formation state ─────────────────────────────────────────────────


@dataclass
class FormationState:
    """Collective motion shared by every enemy in the grid.

    ``direction`` is +1 (right) or -1 (left).  ``speed`` only ever grows
    during a wave.
    """

    direction: int = 1
    speed: float = ENEMY_BASE_SPEED
    drop_distance: float = ENEMY_DROP_DISTANCE
    speed_step: float = ENEMY_SPEED_STEP
    fire_chance: float = ENEMY_FIRE_CHANCE
    fire_rate_mode: str = FIRE_RATE_PER_FRAME

    def reset(self, speed: float) -> None:
        """Start a new wave moving right at *speed*."""
        self.direction = 1
        self.speed = speed


@dataclass
class FormationReport:
    """What the controller observed and produced during one frame.

    ``lowest_edge`` is the bottom edge of the lowest active enemy,
    measured before this frame's movement; 0 when none are active.
    """

    active_count: int = 0
    lowest_edge: float = 0.0
    bounced: bool = False
    shots: list[Projectile] = field(default_factory=list)


# ── Controller ─────────────────────────────────────────────────────────────


class FormationController:
    """Advances an enemy grid one frame using a shared :class:`FormationState`."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def scan(
        self, enemies: list[Enemy], state: FormationState, arena_width: float
    ) -> FormationReport:
        """Count active enemies, find the lowest edge and detect a wall hit."""
        report = FormationReport()
        for enemy in enemies:
            if not enemy.is_active:
                continue
            report.active_count += 1
            report.lowest_edge = max(report.lowest_edge, enemy.bottom)
            if state.direction > 0 and enemy.right >= arena_width:
                report.bounced = True
            elif state.direction < 0 and enemy.x <= 0:
                report.bounced = True
        return report

    def update(
        self,
        enemies: list[Enemy],
        state: FormationState,
        dt: float,
        arena_width: float,
    ) -> FormationReport:
        """Bounce, move and roll enemy fire for one frame."""
        report = self.scan(enemies, state, arena_width)

        if report.bounced:
            state.direction = -state.direction
            state.speed += state.speed_step
            for enemy in enemies:
                if enemy.is_active:
                    enemy.y += state.drop_distance

        step = state.speed * state.direction * dt
        chance = frame_fire_chance(state.fire_chance, dt, state.fire_rate_mode)
        for enemy in enemies:
            if not enemy.is_active:
                continue
            enemy.x += step
            if chance > 0 and self.rng.random() < chance:
                report.shots.append(
                    Projectile.fired_from(
                        enemy.x + enemy.width / 2, enemy.bottom, Direction.DOWN,
                    )
                )
        return report
