"""
Player ship model for Neon Invaders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neon_invaders.config import (
    COLOR_PLAYER,
    PLAYER_BOTTOM_MARGIN,
    PLAYER_FIRE_COOLDOWN,
    PLAYER_SPEED,
)
from neon_invaders.models.arena import Arena
from neon_invaders.models.projectile import Direction, Projectile
from neon_invaders.utils.functions import Rect, clamp


@dataclass
class Player:
    """The player's ship.

    Moves horizontally only and is kept inside the arena every frame.
    A positive ``cooldown`` means the gun is still recharging.
    """

    x: float
    y: float
    width: float
    height: float
    speed: float = PLAYER_SPEED
    cooldown: float = 0.0
    color: tuple[int, int, int] = COLOR_PLAYER

    @classmethod
    def spawn(cls, arena: Arena) -> Player:
        """Create a ship centred at the bottom of *arena*."""
        sizing = arena.sizing
        w, h = sizing.player_width, sizing.player_height
        return cls(
            x=arena.width / 2 - w / 2,
            y=arena.height - h - PLAYER_BOTTOM_MARGIN,
            width=w,
            height=h,
        )

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def ready(self) -> bool:
        return self.cooldown <= 0

    def update(
        self,
        dt: float,
        move_left: bool,
        move_right: bool,
        arena_width: float,
    ) -> None:
        """Apply held movement, clamp to the arena and recharge the gun."""
        if move_left:
            self.x -= self.speed * dt
        if move_right:
            self.x += self.speed * dt
        self.x = clamp(self.x, 0, max(arena_width - self.width, 0))
        if self.cooldown > 0:
            self.cooldown -= dt

    def shoot(self) -> Optional[Projectile]:
        """Fire one shot upward, or return None while cooling down."""
        if not self.ready:
            return None
        self.cooldown = PLAYER_FIRE_COOLDOWN
        return Projectile.fired_from(
            self.x + self.width / 2, self.y, Direction.UP,
        )

    def reposition(self, arena: Arena) -> None:
        """Re-seat the ship after the arena has been resized."""
        self.y = arena.height - self.height - PLAYER_BOTTOM_MARGIN
        self.x = clamp(self.x, 0, max(arena.width - self.width, 0))
