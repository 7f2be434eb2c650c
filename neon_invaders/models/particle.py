"""
Explosion particles for Neon Invaders.

Particles are purely cosmetic: a burst is spawned on every destruction
event and each particle fades out over roughly half a second.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from neon_invaders.config import PARTICLE_BURST, PARTICLE_DECAY, PARTICLE_SPREAD


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: tuple[int, int, int]
    life: float = 1.0

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self, dt: float) -> None:
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.life -= PARTICLE_DECAY * dt


def spawn_burst(
    x: float,
    y: float,
    color: tuple[int, int, int],
    rng: random.Random,
    count: int = PARTICLE_BURST,
) -> list[Particle]:
    """Return *count* particles flying out of (*x*, *y*) in random directions."""
    return [
        Particle(
            x=x,
            y=y,
            vx=(rng.random() - 0.5) * PARTICLE_SPREAD,
            vy=(rng.random() - 0.5) * PARTICLE_SPREAD,
            color=color,
        )
        for _ in range(count)
    ]
