"""
Arena model for Neon Invaders.

The arena is the rectangular play area.  Its width picks a size class
that fixes ship and enemy dimensions for the session, and bounds how many
enemy columns fit on screen.
"""

from __future__ import annotations

from dataclasses import dataclass

from neon_invaders.config import (
    ENEMY_PADDING,
    ENEMY_SIZE,
    GRID_SIDE_MARGIN,
    PLAYER_HEIGHT,
    PLAYER_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SMALL_ENEMY_PADDING,
    SMALL_ENEMY_SIZE,
    SMALL_PLAYER_HEIGHT,
    SMALL_PLAYER_WIDTH,
    SMALL_SCREEN_WIDTH,
)


@dataclass(frozen=True)
class ArenaSizing:
    """Entity dimensions for one size class."""
    player_width: int
    player_height: int
    enemy_size: int
    enemy_padding: int

    @property
    def enemy_pitch(self) -> int:
        """Distance between neighbouring enemy origins."""
        return self.enemy_size + self.enemy_padding


NORMAL_SIZING = ArenaSizing(PLAYER_WIDTH, PLAYER_HEIGHT, ENEMY_SIZE, ENEMY_PADDING)
SMALL_SIZING = ArenaSizing(
    SMALL_PLAYER_WIDTH, SMALL_PLAYER_HEIGHT,
    SMALL_ENEMY_SIZE, SMALL_ENEMY_PADDING,
)


@dataclass
class Arena:
    """Play-area bounds and the size class derived from them."""

    width: float = SCREEN_WIDTH
    height: float = SCREEN_HEIGHT
    small_threshold: float = SMALL_SCREEN_WIDTH

    @property
    def is_small(self) -> bool:
        return self.width < self.small_threshold

    @property
    def sizing(self) -> ArenaSizing:
        return SMALL_SIZING if self.is_small else NORMAL_SIZING

    def grid_columns(self, max_columns: int) -> int:
        """Number of enemy columns that fit, capped at *max_columns*."""
        fit = int((self.width - GRID_SIDE_MARGIN) // self.sizing.enemy_pitch)
        return max(1, min(max_columns, fit))

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
