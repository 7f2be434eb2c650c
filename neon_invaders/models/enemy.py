"""
Enemy model for Neon Invaders.

Enemies are laid out in a centred grid at session start.  A destroyed
enemy is only deactivated, never removed, so grid indices stay stable.
"""

from __future__ import annotations

from dataclasses import dataclass

from neon_invaders.config import (
    COLOR_ENEMY,
    ENEMY_MAX_COLUMNS,
    ENEMY_ROWS,
    ENEMY_TYPES,
    GRID_TOP,
)
from neon_invaders.models.arena import Arena
from neon_invaders.utils.functions import Rect


@dataclass
class Enemy:
    """A single invader.  ``kind`` picks the drawn shape only."""

    x: float
    y: float
    size: float
    kind: int = 0
    is_active: bool = True
    color: tuple[int, int, int] = COLOR_ENEMY

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def bottom(self) -> float:
        return self.y + self.size

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.size / 2, self.y + self.size / 2)

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.size, self.size)

    def deactivate(self) -> None:
        self.is_active = False


def build_enemy_grid(
    arena: Arena,
    rows: int = ENEMY_ROWS,
    max_columns: int = ENEMY_MAX_COLUMNS,
) -> list[Enemy]:
    """Return a fresh grid of enemies centred horizontally in *arena*.

    Rows are ordered top to bottom; shape variants cycle by row.
    """
    sizing = arena.sizing
    pitch = sizing.enemy_pitch
    cols = arena.grid_columns(max_columns)
    grid_width = cols * pitch - sizing.enemy_padding
    start_x = (arena.width - grid_width) / 2

    return [
        Enemy(
            x=start_x + c * pitch,
            y=GRID_TOP + r * pitch,
            size=sizing.enemy_size,
            kind=r % ENEMY_TYPES,
        )
        for r in range(rows)
        for c in range(cols)
    ]
