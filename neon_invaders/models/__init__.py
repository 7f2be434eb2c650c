from neon_invaders.models.arena import Arena, ArenaSizing
from neon_invaders.models.player import Player
from neon_invaders.models.projectile import Direction, Projectile
from neon_invaders.models.enemy import Enemy, build_enemy_grid
from neon_invaders.models.particle import Particle, spawn_burst
from neon_invaders.models.formation import (
    FormationController,
    FormationReport,
    FormationState,
)

__all__ = [
    "Arena", "ArenaSizing",
    "Player",
    "Direction", "Projectile",
    "Enemy", "build_enemy_grid",
    "Particle", "spawn_burst",
    "FormationController", "FormationReport", "FormationState",
]
