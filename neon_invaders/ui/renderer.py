"""
pygame renderer for Neon Invaders.

Draws a :class:`~neon_invaders.game.RenderState` onto a surface.  The
simulation never imports this module; the application hands it a
snapshot each frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

import pygame

from neon_invaders.config import (
    COLOR_BACKGROUND,
    COLOR_TEXT,
    PARTICLE_SIZE,
    TRAIL_ALPHA,
)
from neon_invaders.game import GameState, RenderState
from neon_invaders.models.enemy import Enemy
from neon_invaders.models.player import Player


@dataclass
class Renderer:
    """Neon vector-style drawing of the playfield and overlays."""

    surface: Any
    debug: bool = False

    _font: Any = field(default=None, repr=False)
    _small_font: Any = field(default=None, repr=False)
    _trail: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._font = pygame.font.Font(None, 48)
        self._small_font = pygame.font.Font(None, 24)

    # ── Frame ───────────────────────────────────────────────────────────

    def draw(self, frame: RenderState, fps: float = 0.0) -> None:
        self._fade()
        if frame.player is not None:
            self._draw_player(frame.player)
        for shot in frame.projectiles:
            pygame.draw.rect(self.surface, shot.color, pygame.Rect(shot.rect))
        for enemy in frame.enemies:
            self._draw_enemy(enemy)
        for particle in frame.particles:
            self._draw_particle(particle)

        self._text(frame.score_text, (10, 10), self._small_font)
        high = self._small_font.render(frame.high_score_text, True, COLOR_TEXT)
        self.surface.blit(
            high, (self.surface.get_width() - high.get_width() - 10, 10),
        )
        if frame.state == GameState.NOT_STARTED:
            self._overlay("NEON INVADERS", "Press ENTER to start")
        elif frame.state == GameState.GAME_OVER:
            self._overlay("GAME OVER", f"{frame.final_score_text}  -  ENTER to restart")
        elif frame.paused:
            self._overlay("PAUSED", "Press P to resume")
        if self.debug:
            self._draw_debug(frame, fps)

    def _fade(self) -> None:
        """Wash the previous frame with translucent background for trails."""
        size = self.surface.get_size()
        if self._trail is None or self._trail.get_size() != size:
            self._trail = pygame.Surface(size)
            self._trail.fill(COLOR_BACKGROUND)
            self._trail.set_alpha(TRAIL_ALPHA)
        self.surface.blit(self._trail, (0, 0))

    # ── Entities ────────────────────────────────────────────────────────

    def _draw_player(self, player: Player) -> None:
        x, y, w, h = player.rect
        points = [
            (x + w / 2, y),
            (x + w, y + h),
            (x + w / 2, y + h - 10),
            (x, y + h),
        ]
        pygame.draw.polygon(self.surface, player.color, points, 2)

    def _draw_enemy(self, enemy: Enemy) -> None:
        cx, cy = enemy.center
        r = enemy.width / 2
        if enemy.kind == 0:
            # Squid
            points = [(cx - r, cy - r / 2), (cx + r, cy - r / 2),
                      (cx + r, cy + r), (cx - r, cy + r)]
            pygame.draw.polygon(self.surface, enemy.color, points, 2)
        elif enemy.kind == 1:
            # Crab
            points = [(cx, cy - r), (cx + r, cy), (cx, cy + r), (cx - r, cy)]
            pygame.draw.polygon(self.surface, enemy.color, points, 2)
        else:
            # Octopus
            pygame.draw.circle(
                self.surface, enemy.color, (cx, cy), math.ceil(r * 0.8), 2,
            )

    def _draw_particle(self, particle) -> None:
        alpha = int(255 * max(0.0, min(1.0, particle.life)))
        dot = pygame.Surface((PARTICLE_SIZE, PARTICLE_SIZE))
        dot.fill(particle.color)
        dot.set_alpha(alpha)
        self.surface.blit(dot, (particle.x, particle.y))

    # ── Text ────────────────────────────────────────────────────────────

    def _text(
        self, text: str, pos: tuple[float, float], font: Optional[Any] = None,
    ) -> None:
        font = font or self._font
        self.surface.blit(font.render(text, True, COLOR_TEXT), pos)

    def _overlay(self, title: str, subtitle: str) -> None:
        w, h = self.surface.get_size()
        title_surf = self._font.render(title, True, COLOR_TEXT)
        sub_surf = self._small_font.render(subtitle, True, COLOR_TEXT)
        ty = h // 2 - title_surf.get_height()
        self.surface.blit(title_surf, (w // 2 - title_surf.get_width() // 2, ty))
        self.surface.blit(
            sub_surf,
            (w // 2 - sub_surf.get_width() // 2, ty + title_surf.get_height() + 12),
        )

    def _draw_debug(self, frame: RenderState, fps: float) -> None:
        texts = [
            f"FPS: {fps:.1f}",
            f"Wave: {frame.wave_number}",
            f"Enemies: {len(frame.enemies)}",
            f"Shots: {len(frame.projectiles)}",
            f"Particles: {len(frame.particles)}",
        ]
        y = 34
        for text in texts:
            surface = self._small_font.render(text, True, (0, 255, 0))
            self.surface.blit(surface, (10, y))
            y += 18
