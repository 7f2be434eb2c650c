"""
Shared utility functions for Neon Invaders.

Provides the axis-aligned rectangle test used by every collision check,
plus small numeric helpers shared by the models.
"""

from __future__ import annotations

from neon_invaders.config import (
    FIRE_RATE_PER_FRAME,
    FIRE_RATE_PER_SECOND,
    REFERENCE_FPS,
)

# (x, y, width, height) with x/y at the top-left corner
Rect = tuple[float, float, float, float]


# ── Geometry ────────────────────────────────────────────────────────────────


def rect_intersect(a: Rect, b: Rect) -> bool:
    """Return True if rectangles *a* and *b* overlap.

    Two rectangles are disjoint only when one lies strictly beyond the
    other along x or y, so touching edges count as a hit.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (
        ax + aw < bx
        or ax > bx + bw
        or ay + ah < by
        or ay > by + bh
    )


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* into ``[lo, hi]``."""
    return lo if value < lo else hi if value > hi else value


# ── Enemy fire ──────────────────────────────────────────────────────────────


def frame_fire_chance(
    chance: float,
    dt: float,
    mode: str = FIRE_RATE_PER_FRAME,
    fps: int = REFERENCE_FPS,
) -> float:
    """Return the probability that one enemy fires during this frame.

    ``per-frame`` keeps the arcade behaviour: *chance* is rolled once per
    frame whatever its length, so fire rate scales with frame rate.
    ``per-second`` converts *chance* (tuned at *fps*) into the equivalent
    probability for a frame lasting *dt* seconds: ``1 - (1 - p)^(dt*fps)``.
    """
    if mode == FIRE_RATE_PER_FRAME:
        return chance
    if mode == FIRE_RATE_PER_SECOND:
        if dt <= 0:
            return 0.0
        return 1.0 - (1.0 - chance) ** (dt * fps)
    raise ValueError(f"unknown fire rate mode: {mode!r}")
