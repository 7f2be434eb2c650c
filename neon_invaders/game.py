"""
Core game logic for Neon Invaders.

Owns every entity collection and the session state, and advances them
one variable-length frame at a time: player, projectiles, particles,
formation, loss check, then collisions.  Sound, drawing and input
devices are collaborators; the game only calls the audio triggers and
exposes a render snapshot.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from neon_invaders.config import (
    ENEMY_BASE_SPEED,
    ENEMY_MAX_COLUMNS,
    ENEMY_ROWS,
    FIRE_RATE_PER_FRAME,
    POINTS_PER_ENEMY,
    WAVE_RESPAWN_DELAY,
    WAVE_SPEED_BONUS,
)
from neon_invaders.models.arena import Arena
from neon_invaders.models.enemy import Enemy, build_enemy_grid
from neon_invaders.models.formation import FormationController, FormationState
from neon_invaders.models.particle import Particle, spawn_burst
from neon_invaders.models.player import Player
from neon_invaders.models.projectile import Projectile
from neon_invaders.ui.audio import AudioTriggers, SilentAudio
from neon_invaders.ui.text import ScoreDisplay
from neon_invaders.utils.functions import rect_intersect
from neon_invaders.utils.input_handler import InputState
from neon_invaders.utils.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

GameOverListener = Callable[[int], None]


# ── Game states ─────────────────────────────────────────────────────────────


class GameState(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class RenderState:
    """Everything a renderer needs for one frame.  Lists hold live entities only."""

    player: Optional[Player]
    projectiles: list[Projectile]
    enemies: list[Enemy]
    particles: list[Particle]
    score: int
    high_score: int
    score_text: str
    high_score_text: str
    final_score_text: str
    state: GameState
    wave_number: int
    paused: bool


# ── Game ────────────────────────────────────────────────────────────────────


@dataclass
class Game:
    """Top-level simulation controller.

    One instance lives for the whole process; :meth:`start_session`
    (re)initialises it for play.  Wave respawns are deferred through
    ``scheduler`` and tagged with the session that scheduled them, so a
    respawn left over from an earlier session is ignored.
    """

    arena: Arena = field(default_factory=Arena)
    audio: AudioTriggers = field(default_factory=SilentAudio)
    rng: random.Random = field(default_factory=random.Random)
    scheduler: Scheduler = field(default_factory=Scheduler)
    controls: InputState = field(default_factory=InputState)
    grid_rows: int = ENEMY_ROWS
    grid_max_columns: int = ENEMY_MAX_COLUMNS
    fire_rate_mode: str = FIRE_RATE_PER_FRAME

    # Session state
    state: GameState = GameState.NOT_STARTED
    paused: bool = False
    wave_number: int = 1
    base_speed: float = ENEMY_BASE_SPEED
    session_id: int = 0

    # Entities
    player: Optional[Player] = None
    projectiles: list[Projectile] = field(default_factory=list)
    enemies: list[Enemy] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    formation: FormationState = field(default_factory=FormationState)

    score_display: ScoreDisplay = field(default_factory=ScoreDisplay)
    game_over_listeners: list[GameOverListener] = field(default_factory=list)

    _respawn_task: Optional[ScheduledTask] = field(default=None, repr=False)
    _controller: FormationController = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._controller = FormationController(self.rng)
        self.formation.fire_rate_mode = self.fire_rate_mode
        if self.player is None:
            # Something to show behind the start screen.
            self.player = Player.spawn(self.arena)

    # ── Session lifecycle ───────────────────────────────────────────────

    def start_session(self) -> None:
        """Start (or restart) play from wave 1 with a zero score."""
        self._cancel_respawn()
        self.session_id += 1
        self.wave_number = 1
        self.base_speed = ENEMY_BASE_SPEED
        self._build_wave()
        self.state = GameState.RUNNING
        self.paused = False
        self.score_display.reset()
        logger.info(
            "Session %d started (%dx%d arena, %d enemies)",
            self.session_id, self.arena.width, self.arena.height,
            len(self.enemies),
        )

    def _build_wave(self) -> None:
        self.player = Player.spawn(self.arena)
        self.projectiles = []
        self.particles = []
        self.enemies = build_enemy_grid(
            self.arena, self.grid_rows, self.grid_max_columns,
        )
        self.formation.reset(self.base_speed)

    def _end_session(self) -> None:
        """Enter GAME_OVER.  Repeated calls have no further effect."""
        if self.state == GameState.GAME_OVER:
            return
        self.state = GameState.GAME_OVER
        self._cancel_respawn()
        final = self.score_display.player_score
        logger.info("Game over in wave %d, final score %d", self.wave_number, final)
        self._trigger("on_game_over")
        for listener in self.game_over_listeners:
            listener(final)

    @property
    def is_game_over(self) -> bool:
        return self.state == GameState.GAME_OVER

    def toggle_pause(self) -> bool:
        """Flip the pause flag while running.  Returns the new flag."""
        if self.state == GameState.RUNNING:
            self.paused = not self.paused
        return self.paused

    def resize(self, width: float, height: float) -> None:
        """Adopt new arena bounds.  The enemy grid is left as it is."""
        self.arena.resize(width, height)
        if self.player is not None:
            self.player.reposition(self.arena)

    # ── Wave respawn ────────────────────────────────────────────────────

    @property
    def all_enemies_defeated(self) -> bool:
        return bool(self.enemies) and not any(e.is_active for e in self.enemies)

    @property
    def respawn_pending(self) -> bool:
        return self._respawn_task is not None and self._respawn_task.pending

    def _schedule_respawn(self) -> None:
        if self.respawn_pending:
            return
        session = self.session_id
        self._respawn_task = self.scheduler.call_later(
            WAVE_RESPAWN_DELAY, lambda: self._respawn_wave(session),
        )
        logger.info(
            "Wave %d cleared; next wave in %.1fs",
            self.wave_number, WAVE_RESPAWN_DELAY,
        )

    def _cancel_respawn(self) -> None:
        if self._respawn_task is not None:
            self._respawn_task.cancel()
            self._respawn_task = None

    def _respawn_wave(self, session: int) -> None:
        if session != self.session_id or self.state != GameState.RUNNING:
            logger.debug("Discarding stale respawn from session %d", session)
            return
        self._respawn_task = None
        self.base_speed += WAVE_SPEED_BONUS
        self.wave_number += 1
        self._build_wave()
        self.score_display.reset()
        logger.info(
            "Wave %d spawned at base speed %.0f", self.wave_number, self.base_speed,
        )

    # ── Per-frame update ────────────────────────────────────────────────

    def update(self, dt: float) -> GameState:
        """Advance the game by *dt* seconds.

        Returns the current GameState after the update.
        """
        if self.state != GameState.RUNNING or self.paused:
            return self.state
        dt = max(dt, 0.0)
        player = self.player

        # 1. Player movement and gun cooldown
        player.update(
            dt, self.controls.move_left, self.controls.move_right,
            self.arena.width,
        )

        # 2. Projectiles
        for shot in self.projectiles:
            shot.update(dt, self.arena.height)
        self.projectiles = [s for s in self.projectiles if s.is_active]

        # 3. Particles
        for particle in self.particles:
            particle.update(dt)
        self.particles = [p for p in self.particles if p.alive]

        # 4. Formation: bounce, march, enemy fire
        report = self._controller.update(
            self.enemies, self.formation, dt, self.arena.width,
        )
        self.projectiles.extend(report.shots)

        # 5. Invaders reached the ship's line
        if report.active_count > 0 and report.lowest_edge > player.y:
            self._end_session()
            return self.state

        # 6. Collisions
        self._resolve_collisions()
        return self.state

    def _resolve_collisions(self) -> None:
        # Player shots against invaders; a shot stops at its first hit.
        for shot in self.projectiles:
            if not shot.is_active or shot.is_hostile:
                continue
            for enemy in self.enemies:
                if enemy.is_active and rect_intersect(shot.rect, enemy.rect):
                    self._destroy_enemy(shot, enemy)
                    break

        if self.all_enemies_defeated:
            self._schedule_respawn()

        # Invader shots against the ship
        player = self.player
        for shot in self.projectiles:
            if not shot.is_active or not shot.is_hostile:
                continue
            if rect_intersect(shot.rect, player.rect):
                shot.deactivate()
                self._explode(*player.center, player.color)
                self._end_session()
                return

    def _destroy_enemy(self, shot: Projectile, enemy: Enemy) -> None:
        enemy.deactivate()
        shot.deactivate()
        self._explode(*enemy.center, enemy.color)
        self.score_display.add(POINTS_PER_ENEMY)

    def _explode(self, x: float, y: float, color: tuple[int, int, int]) -> None:
        self.particles.extend(spawn_burst(x, y, color, self.rng))
        self._trigger("on_explosion")

    # ── Player actions ──────────────────────────────────────────────────

    def fire(self) -> bool:
        """Fire the ship's gun.  Returns False if nothing was fired."""
        if self.state != GameState.RUNNING or self.paused:
            return False
        shot = self.player.shoot()
        if shot is None:
            return False
        self.projectiles.append(shot)
        self._trigger("on_shoot")
        return True

    # ── Collaborators ───────────────────────────────────────────────────

    def _trigger(self, name: str) -> None:
        """Call an audio trigger; a failing backend never stops the frame."""
        try:
            getattr(self.audio, name)()
        except Exception:
            logger.warning("Audio trigger %s failed", name, exc_info=True)

    def render_state(self) -> RenderState:
        return RenderState(
            player=self.player,
            projectiles=[s for s in self.projectiles if s.is_active],
            enemies=[e for e in self.enemies if e.is_active],
            particles=[p for p in self.particles if p.alive],
            score=self.score_display.player_score,
            high_score=self.score_display.high_score,
            score_text=self.score_display.format_score(),
            high_score_text=self.score_display.format_high_score(),
            final_score_text=self.score_display.format_final_score(),
            state=self.state,
            wave_number=self.wave_number,
            paused=self.paused,
        )
