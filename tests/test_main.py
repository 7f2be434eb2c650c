"""
Tests for main.py – argument parsing, app wiring and input translation.

None of these open a window: the game and frame clock are built without
initialising the display.
"""

import os

import pygame
import pytest

from main import FRAME_TIME, NeonInvadersApp, parse_args
from neon_invaders.config import FIRE_RATE_PER_SECOND
from neon_invaders.game import GameState
from neon_invaders.ui.audio import SilentAudio
from neon_invaders.utils.input_handler import GameAction, InputEvent


# ── Entry point validation ─────────────────────────────────────────────────


class TestEntryPoint:
    def test_launcher_exists(self):
        """neon-invaders.py must exist as the game launcher."""
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        assert os.path.isfile(os.path.join(root, "neon-invaders.py"))


# ── Argument parsing ───────────────────────────────────────────────────────


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.width == 800
        assert args.height == 600
        assert args.fullscreen is False
        assert args.debug is False
        assert args.mute is False
        assert args.seed is None
        assert args.fire_rate == "per-frame"

    def test_dimensions(self):
        args = parse_args(["--width", "480", "--height", "720"])
        assert (args.width, args.height) == (480, 720)

    def test_too_small_dimension_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--width", "100"])

    def test_fire_rate_mode(self):
        args = parse_args(["--fire-rate", "per-second"])
        assert args.fire_rate == FIRE_RATE_PER_SECOND

    def test_invalid_fire_rate_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--fire-rate", "sometimes"])

    def test_flags(self):
        args = parse_args(["--fullscreen", "--debug", "--mute", "--seed", "42"])
        assert args.fullscreen and args.debug and args.mute
        assert args.seed == 42


# ── NeonInvadersApp (without a display) ────────────────────────────────────


def _app(**kwargs):
    app = NeonInvadersApp(mute=True, seed=3, **kwargs)
    app.build_game()
    return app


class TestNeonInvadersApp:
    def test_app_defaults(self):
        app = NeonInvadersApp()
        assert app.width == 800
        assert app.fullscreen is False
        assert app.debug is False
        assert app.running is False

    def test_frame_time_constant(self):
        assert abs(FRAME_TIME - 1.0 / 60) < 1e-6

    def test_build_game_wires_silent_audio(self):
        app = _app(width=500, height=700, fire_rate=FIRE_RATE_PER_SECOND)
        assert isinstance(app.game.audio, SilentAudio)
        assert app.game.arena.width == 500
        assert app.game.arena.is_small
        assert app.game.formation.fire_rate_mode == FIRE_RATE_PER_SECOND

    def test_start_session_drives_game_from_frames(self):
        app = _app()
        app.start_session(timestamp=0)
        assert app.game.state == GameState.RUNNING
        app.game.controls.press(GameAction.MOVE_RIGHT)
        x = app.game.player.x
        app.frames.dispatch(100)
        assert app.game.player.x == pytest.approx(x + 50)

    def test_restart_keeps_one_frame_chain(self):
        app = _app()
        app.start_session(timestamp=0)
        app.start_session(timestamp=10)
        assert len(app.frames) == 1

    def test_pause_stops_frames_reaching_game(self):
        app = _app()
        app.start_session(timestamp=0)
        app.handle_input(InputEvent(GameAction.PAUSE))
        app.game.controls.press(GameAction.MOVE_RIGHT)
        x = app.game.player.x
        app.frames.dispatch(100)
        assert app.game.player.x == x

    def test_fire_input(self):
        app = _app()
        app.start_session(timestamp=0)
        app.handle_input(InputEvent(GameAction.FIRE))
        assert len(app.game.projectiles) == 1

    def test_start_input_only_when_not_running(self):
        app = _app()
        app.handle_input(InputEvent(GameAction.START))
        assert app.game.state == GameState.RUNNING
        session = app.game.session_id
        app.handle_input(InputEvent(GameAction.START))
        assert app.game.session_id == session

    def test_quit_input(self):
        app = _app()
        app.running = True
        app.handle_input(InputEvent(GameAction.QUIT))
        assert app.running is False


# ── Input translation ──────────────────────────────────────────────────────


class TestTranslateEvent:
    def test_space_fires(self):
        app = _app()
        event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
        assert app.translate_event(event) == [
            InputEvent(GameAction.FIRE, "keyboard", True)
        ]

    def test_key_release(self):
        app = _app()
        event = pygame.event.Event(pygame.KEYUP, key=pygame.K_a)
        assert app.translate_event(event) == [
            InputEvent(GameAction.MOVE_LEFT, "keyboard", False)
        ]

    def test_unmapped_key(self):
        app = _app()
        event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_z)
        assert app.translate_event(event) == []

    @pytest.mark.parametrize("x, action", [
        (0.1, GameAction.MOVE_LEFT),
        (0.5, GameAction.FIRE),
        (0.9, GameAction.MOVE_RIGHT),
    ])
    def test_touch_zones(self, x, action):
        app = _app()
        event = pygame.event.Event(pygame.FINGERDOWN, x=x, y=0.5, finger_id=2)
        assert app.translate_event(event) == [InputEvent(action, "touch-2", True)]

    def test_finger_up_releases_everything_for_that_finger(self):
        app = _app()
        event = pygame.event.Event(pygame.FINGERUP, x=0.1, y=0.5, finger_id=2)
        released = app.translate_event(event)
        assert {e.action for e in released} == {
            GameAction.MOVE_LEFT, GameAction.MOVE_RIGHT, GameAction.FIRE,
        }
        assert all(not e.pressed and e.source == "touch-2" for e in released)

    def test_mouse_zone_uses_window_width(self):
        app = _app()
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(700, 10))
        assert app.translate_event(event) == [
            InputEvent(GameAction.MOVE_RIGHT, "mouse", True)
        ]

    def test_touch_and_keyboard_merge(self):
        app = _app()
        app.start_session(timestamp=0)
        for ev in (
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT),
            pygame.event.Event(pygame.FINGERDOWN, x=0.1, y=0.5, finger_id=1),
            pygame.event.Event(pygame.KEYUP, key=pygame.K_LEFT),
        ):
            for input_event in app.translate_event(ev):
                app.handle_input(input_event)
        assert app.game.controls.move_left

    def test_finger_slide_moves_hold_to_new_zone(self):
        app = _app()
        app.start_session(timestamp=0)
        for ev in (
            pygame.event.Event(pygame.FINGERDOWN, x=0.1, y=0.5, finger_id=1),
            pygame.event.Event(pygame.FINGERMOTION, x=0.9, y=0.5, finger_id=1),
        ):
            for input_event in app.translate_event(ev):
                app.handle_input(input_event)
        assert not app.game.controls.move_left
        assert app.game.controls.move_right

    def test_finger_slide_keeps_other_sources(self):
        app = _app()
        app.start_session(timestamp=0)
        app.handle_input(InputEvent(GameAction.MOVE_LEFT, "keyboard", True))
        for ev in (
            pygame.event.Event(pygame.FINGERDOWN, x=0.1, y=0.5, finger_id=1),
            pygame.event.Event(pygame.FINGERMOTION, x=0.5, y=0.5, finger_id=1),
        ):
            for input_event in app.translate_event(ev):
                app.handle_input(input_event)
        assert app.game.controls.move_left
        assert app.game.controls.held_by("touch-1") == {GameAction.FIRE}

    def test_finger_motion_within_zone_is_ignored(self):
        app = _app()
        app.start_session(timestamp=0)
        down = pygame.event.Event(pygame.FINGERDOWN, x=0.4, y=0.5, finger_id=3)
        for input_event in app.translate_event(down):
            app.handle_input(input_event)
        motion = pygame.event.Event(pygame.FINGERMOTION, x=0.6, y=0.5, finger_id=3)
        assert app.translate_event(motion) == []

    def test_motion_of_untracked_finger_is_ignored(self):
        app = _app()
        motion = pygame.event.Event(pygame.FINGERMOTION, x=0.9, y=0.5, finger_id=4)
        assert app.translate_event(motion) == []
