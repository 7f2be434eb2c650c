"""
Projectile model for Neon Invaders.

Player shots travel up, enemy shots travel down.  The direction alone
decides which side a projectile threatens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from neon_invaders.config import (
    COLOR_SHOT_DOWN,
    COLOR_SHOT_UP,
    PROJECTILE_HEIGHT,
    PROJECTILE_SPEED,
    PROJECTILE_WIDTH,
)
from neon_invaders.utils.functions import Rect


class Direction(Enum):
    """Vertical travel direction; the value is the sign applied to y."""
    UP = -1
    DOWN = 1


@dataclass
class Projectile:
    """A single shot.  ``x``/``y`` is the top-left corner."""

    x: float
    y: float
    direction: Direction
    width: float = PROJECTILE_WIDTH
    height: float = PROJECTILE_HEIGHT
    speed: float = PROJECTILE_SPEED
    is_active: bool = True
    color: tuple[int, int, int] = field(default=COLOR_SHOT_UP)

    def __post_init__(self) -> None:
        if self.direction == Direction.DOWN and self.color == COLOR_SHOT_UP:
            self.color = COLOR_SHOT_DOWN

    @classmethod
    def fired_from(
        cls, center_x: float, y: float, direction: Direction
    ) -> Projectile:
        """Create a shot horizontally centred on *center_x*."""
        return cls(x=center_x - PROJECTILE_WIDTH / 2, y=y, direction=direction)

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    @property
    def is_hostile(self) -> bool:
        """True for enemy fire (threatens the player)."""
        return self.direction == Direction.DOWN

    def update(self, dt: float, arena_height: float) -> None:
        """Advance vertically; leave the arena and the shot is spent."""
        if not self.is_active:
            return
        self.y += self.speed * self.direction.value * dt
        if self.y < 0 or self.y > arena_height:
            self.is_active = False

    def deactivate(self) -> None:
        self.is_active = False
