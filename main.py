"""
Main entry point for Neon Invaders.

Initializes pygame, drives the frame clock once per display refresh,
and manages the overall application lifecycle.

Usage:
    python neon-invaders.py [OPTIONS]

Options:
    --width N            Initial window width (default: 800)
    --height N           Initial window height (default: 600)
    --fullscreen         Launch in fullscreen mode
    --debug              Enable debug overlay and debug logging
    --mute               Disable sound
    --seed N             Seed the random number generator
    --fire-rate MODE     Enemy fire model: per-frame (default) or per-second
"""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
import time
from dataclasses import dataclass, field
from typing import Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from neon_invaders.clock import FrameClock, FrameQueue  # noqa: E402
from neon_invaders.config import (  # noqa: E402
    FIRE_RATE_MODES,
    FIRE_RATE_PER_FRAME,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    UPDATE_RATE,
)
from neon_invaders.game import Game, GameState  # noqa: E402
from neon_invaders.models.arena import Arena  # noqa: E402
from neon_invaders.ui.audio import AudioManager, SilentAudio  # noqa: E402
from neon_invaders.utils.input_handler import GameAction, InputEvent  # noqa: E402

logger = logging.getLogger("neon_invaders")


# ── Constants ───────────────────────────────────────────────────────────────

FRAME_TIME: float = 1.0 / UPDATE_RATE          # ~16.67 ms
MIN_DIMENSION: int = 200

KEY_ACTIONS: dict[int, GameAction] = {
    pygame.K_LEFT: GameAction.MOVE_LEFT,
    pygame.K_a: GameAction.MOVE_LEFT,
    pygame.K_RIGHT: GameAction.MOVE_RIGHT,
    pygame.K_d: GameAction.MOVE_RIGHT,
    pygame.K_SPACE: GameAction.FIRE,
    pygame.K_p: GameAction.PAUSE,
    pygame.K_RETURN: GameAction.START,
    pygame.K_KP_ENTER: GameAction.START,
    pygame.K_ESCAPE: GameAction.QUIT,
}

# Touch and mouse screen thirds, left to right
ZONE_ACTIONS: tuple[GameAction, ...] = (
    GameAction.MOVE_LEFT, GameAction.FIRE, GameAction.MOVE_RIGHT,
)


# ── Argument parsing ───────────────────────────────────────────────────────


def _dimension(value: str) -> int:
    size = int(value)
    if size < MIN_DIMENSION:
        raise argparse.ArgumentTypeError(f"must be at least {MIN_DIMENSION}")
    return size


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Neon Invaders – a neon-vector arcade shooter",
    )
    parser.add_argument(
        "--width", type=_dimension, default=SCREEN_WIDTH, metavar="N",
        help=f"Initial window width (default: {SCREEN_WIDTH})",
    )
    parser.add_argument(
        "--height", type=_dimension, default=SCREEN_HEIGHT, metavar="N",
        help=f"Initial window height (default: {SCREEN_HEIGHT})",
    )
    parser.add_argument(
        "--fullscreen", action="store_true",
        help="Launch in fullscreen mode",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug overlay (FPS, entity counts) and debug logging",
    )
    parser.add_argument(
        "--mute", action="store_true",
        help="Disable sound",
    )
    parser.add_argument(
        "--seed", type=int, default=None, metavar="N",
        help="Seed the random number generator (for reproducible runs)",
    )
    parser.add_argument(
        "--fire-rate", choices=FIRE_RATE_MODES, default=FIRE_RATE_PER_FRAME,
        help="Enemy fire model (default: %(default)s)",
    )
    return parser.parse_args(argv)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ── Application ─────────────────────────────────────────────────────────────


@dataclass
class NeonInvadersApp:
    """Top-level application wrapper.

    Owns the pygame display, the game, the frame clock and the main loop.
    """

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    fullscreen: bool = False
    debug: bool = False
    mute: bool = False
    seed: Optional[int] = None
    fire_rate: str = FIRE_RATE_PER_FRAME

    # Runtime state (initialized in ``init``)
    screen: object = field(default=None, repr=False)
    clock: object = field(default=None, repr=False)
    renderer: object = field(default=None, repr=False)
    game: Optional[Game] = None
    frames: FrameQueue = field(default_factory=FrameQueue)
    frame_clock: Optional[FrameClock] = None
    audio: object = None
    running: bool = False

    # Performance tracking
    frame_times: list[float] = field(default_factory=list)
    fps: float = 0.0

    # ── Initialisation ──────────────────────────────────────────────────

    def build_game(self) -> Game:
        """Create the game and frame clock (no display required)."""
        if self.audio is None:
            self.audio = SilentAudio() if self.mute else AudioManager()
        self.game = Game(
            arena=Arena(self.width, self.height),
            audio=self.audio,
            rng=random.Random(self.seed),
            fire_rate_mode=self.fire_rate,
        )
        self.game.game_over_listeners.append(self._on_game_over)
        self.frame_clock = FrameClock(
            step=self.game.update,
            frames=self.frames,
            is_paused=lambda: self.game.paused,
        )
        return self.game

    def init(self) -> bool:
        """Initialise pygame and create the display surface.

        Returns True on success, False on failure.
        """
        try:
            pygame.init()
        except pygame.error as exc:
            logger.error("Error initialising pygame: %s", exc)
            return False

        flags = pygame.RESIZABLE
        if self.fullscreen:
            flags |= pygame.FULLSCREEN

        try:
            self.screen = pygame.display.set_mode((self.width, self.height), flags)
        except pygame.error as exc:
            logger.error("Error creating display: %s", exc)
            pygame.quit()
            return False

        pygame.display.set_caption("Neon Invaders")
        self.clock = pygame.time.Clock()
        self.width, self.height = self.screen.get_size()

        self.build_game()
        if isinstance(self.audio, AudioManager):
            self.audio.init()

        # Imported here: the renderer needs an initialised font module.
        from neon_invaders.ui.renderer import Renderer
        self.renderer = Renderer(self.screen, debug=self.debug)

        self.running = True
        return True

    # ── Session control ─────────────────────────────────────────────────

    def start_session(self, timestamp: Optional[float] = None) -> None:
        """Start or restart play; replaces any running frame chain."""
        if timestamp is None:
            timestamp = pygame.time.get_ticks()
        self.game.start_session()
        self.frame_clock.start(timestamp)

    def _on_game_over(self, final_score: int) -> None:
        logger.info("Final score: %d", final_score)

    # ── Main loop ───────────────────────────────────────────────────────

    def run(self) -> None:
        """Execute the main loop, one frame-queue dispatch per refresh."""
        if not self.running:
            return

        last = time.perf_counter()
        try:
            while self.running:
                frame_start = time.perf_counter()

                self._handle_events()
                # Deferred tasks run on wall time, paused or not.
                self.game.scheduler.advance(frame_start - last)
                last = frame_start
                self.frames.dispatch(pygame.time.get_ticks())
                self._render()

                self.clock.tick(UPDATE_RATE)

                # Performance tracking
                elapsed = time.perf_counter() - frame_start
                self.frame_times.append(elapsed)
                if len(self.frame_times) > 60:
                    self.frame_times.pop(0)
                if self.frame_times:
                    avg = sum(self.frame_times) / len(self.frame_times)
                    self.fps = 1.0 / avg if avg > 0 else 0.0
        except KeyboardInterrupt:
            pass
        finally:
            self.shutdown()

    # ── Event handling ──────────────────────────────────────────────────

    def translate_event(self, event) -> list[InputEvent]:
        """Map a pygame event onto logical input events.

        Keyboard controls:
            Arrow Keys / A, D – move
            Space             – fire
            P                 – pause / unpause
            Enter             – start / restart
            ESC               – exit game

        Touch and mouse split the screen in thirds: the outer thirds
        hold movement, the middle third fires.
        """
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            action = KEY_ACTIONS.get(event.key)
            if action is None:
                return []
            return [InputEvent(action, "keyboard", event.type == pygame.KEYDOWN)]

        if event.type in (pygame.FINGERDOWN, pygame.FINGERUP, pygame.FINGERMOTION):
            source = f"touch-{event.finger_id}"
            if event.type == pygame.FINGERUP:
                return self._release_zones(source)
            action = self._zone_action(event.x)
            if event.type == pygame.FINGERMOTION:
                # Only a move into another third changes what is held.
                held = self.game.controls.held_by(source)
                if not held or action in held:
                    return []
                return [
                    InputEvent(a, source, False) for a in ZONE_ACTIONS if a in held
                ] + [InputEvent(action, source, True)]
            return [InputEvent(action, source, True)]

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if event.button != 1 or getattr(event, "touch", False):
                return []
            if event.type == pygame.MOUSEBUTTONUP:
                return self._release_zones("mouse")
            width = self.screen.get_width() if self.screen is not None else self.width
            return [InputEvent(self._zone_action(event.pos[0] / width), "mouse", True)]

        return []

    @staticmethod
    def _release_zones(source: str) -> list[InputEvent]:
        return [InputEvent(action, source, False) for action in ZONE_ACTIONS]

    @staticmethod
    def _zone_action(fraction: float) -> GameAction:
        if fraction < 1 / 3:
            return GameAction.MOVE_LEFT
        if fraction > 2 / 3:
            return GameAction.MOVE_RIGHT
        return GameAction.FIRE

    def handle_input(self, event: InputEvent) -> None:
        """Apply one logical input event to the game."""
        game = self.game
        game.controls.apply(event)
        if not event.pressed:
            return
        if event.action == GameAction.FIRE:
            game.fire()
        elif event.action == GameAction.PAUSE:
            game.toggle_pause()
        elif event.action == GameAction.START:
            if game.state != GameState.RUNNING:
                self.start_session()
        elif event.action == GameAction.QUIT:
            self.running = False

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.width, self.height = event.w, event.h
                self.game.resize(event.w, event.h)
            elif event.type == pygame.WINDOWFOCUSLOST:
                # Keys released while unfocused never reach us.
                self.game.controls.clear()
            else:
                for input_event in self.translate_event(event):
                    self.handle_input(input_event)

    # ── Rendering ───────────────────────────────────────────────────────

    def _render(self) -> None:
        """Execute the rendering pipeline."""
        if self.screen is None:
            return
        self.renderer.draw(self.game.render_state(), self.fps)
        pygame.display.flip()

    # ── Shutdown ────────────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Clean up and quit pygame."""
        self.running = False
        if self.frame_clock is not None:
            self.frame_clock.stop()
        if isinstance(self.audio, AudioManager):
            self.audio.shutdown()
        pygame.quit()


# ── Entry point ─────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Application entry point.  Returns exit code."""
    args = parse_args(argv)
    configure_logging(args.debug)

    app = NeonInvadersApp(
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
        debug=args.debug,
        mute=args.mute,
        seed=args.seed,
        fire_rate=args.fire_rate,
    )

    if not app.init():
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
