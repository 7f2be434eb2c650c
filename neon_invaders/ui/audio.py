"""
Audio for Neon Invaders.

The simulation only knows the three triggers of :class:`AudioTriggers`.
:class:`AudioManager` implements them with sounds synthesised in numpy
at start-up (no asset files) and played through ``pygame.mixer``;
:class:`SilentAudio` is the drop-in used headless and in tests.
Playback is fire-and-forget and degrades to silence when the mixer is
unavailable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Protocol

import numpy as np
import pygame

from neon_invaders.config import MASTER_GAIN, SAMPLE_RATE

logger = logging.getLogger(__name__)


class SoundEvent(Enum):
    """Identifiers for game sound effects."""
    SHOOT = auto()
    EXPLOSION = auto()
    GAME_OVER = auto()


class AudioTriggers(Protocol):
    """What the simulation calls; implementations must return promptly."""

    def on_shoot(self) -> None: ...

    def on_explosion(self) -> None: ...

    def on_game_over(self) -> None: ...


class SilentAudio:
    """No-op triggers for headless runs and deterministic tests."""

    def on_shoot(self) -> None:
        pass

    def on_explosion(self) -> None:
        pass

    def on_game_over(self) -> None:
        pass


# ── Synthesis ───────────────────────────────────────────────────────────────


def _timeline(duration: float, sample_rate: int) -> np.ndarray:
    return np.arange(int(sample_rate * duration)) / sample_rate


def exponential_ramp(
    start: float, end: float, duration: float, t: np.ndarray
) -> np.ndarray:
    """Exponential glide from *start* to *end* over *duration* seconds."""
    return start * (end / start) ** (t / duration)


def linear_ramp(
    start: float, end: float, duration: float, t: np.ndarray
) -> np.ndarray:
    return start + (end - start) * (t / duration)


def _phase_cycles(freq: np.ndarray, sample_rate: int) -> np.ndarray:
    """Integrate a frequency curve into oscillator phase (in cycles)."""
    return np.cumsum(freq) / sample_rate


def lowpass(wave: np.ndarray, cutoff: float, sample_rate: int) -> np.ndarray:
    """Moving-average low-pass filter."""
    window = max(1, int(sample_rate / cutoff))
    kernel = np.ones(window) / window
    return np.convolve(wave, kernel, mode="same")


def synth_shoot(sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Square-wave zap dropping from 800 Hz to 100 Hz in 0.1 s."""
    duration = 0.1
    t = _timeline(duration, sample_rate)
    freq = exponential_ramp(800.0, 100.0, duration, t)
    wave = np.sign(np.sin(2 * np.pi * _phase_cycles(freq, sample_rate)))
    return wave * exponential_ramp(0.5, 0.01, duration, t)


def synth_explosion(
    sample_rate: int = SAMPLE_RATE,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """0.2 s of low-passed white noise with a fast exponential fade."""
    duration = 0.2
    rng = rng if rng is not None else np.random.default_rng()
    t = _timeline(duration, sample_rate)
    noise = rng.uniform(-1.0, 1.0, len(t))
    noise = lowpass(noise, 1000.0, sample_rate)
    return noise * exponential_ramp(1.0, 0.01, duration, t)


def synth_game_over(sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """One-second sawtooth sliding from 400 Hz down to 100 Hz."""
    duration = 1.0
    t = _timeline(duration, sample_rate)
    freq = linear_ramp(400.0, 100.0, duration, t)
    wave = 2.0 * (_phase_cycles(freq, sample_rate) % 1.0) - 1.0
    return wave * linear_ramp(0.5, 0.01, duration, t)


_SYNTHS = {
    SoundEvent.SHOOT: synth_shoot,
    SoundEvent.EXPLOSION: synth_explosion,
    SoundEvent.GAME_OVER: synth_game_over,
}


def to_pcm(
    wave: np.ndarray, channels: int = 2, gain: float = MASTER_GAIN
) -> np.ndarray:
    """Scale a float wave in [-1, 1] to signed 16-bit samples.

    Mono output is 1-D; otherwise the signal is copied to every channel.
    """
    samples = np.clip(wave * gain * 32767, -32767, 32767).astype(np.int16)
    if channels <= 1:
        return samples
    return np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))


# ── Audio manager ───────────────────────────────────────────────────────────


@dataclass
class AudioManager:
    """Synthesises and plays sound effects.

    Falls back to silent operation when the mixer is unavailable.
    """

    enabled: bool = True

    # Internal state
    _initialized: bool = field(default=False, repr=False)
    _sounds: dict[SoundEvent, Any] = field(default_factory=dict, repr=False)

    def init(self) -> bool:
        """Initialise the mixer and synthesise every sound.

        Returns True if the mixer was initialised successfully.

        When running inside a Python virtual-environment the default SDL
        audio driver may not be detected.  We try several common drivers
        before giving up.
        """
        if not self.enabled:
            return False

        if not pygame.mixer.get_init():
            drivers = [None, "pulseaudio", "alsa", "dsp", "dummy"]
            original_driver = os.environ.get("SDL_AUDIODRIVER")
            for driver in drivers:
                try:
                    if driver is not None:
                        os.environ["SDL_AUDIODRIVER"] = driver
                    pygame.mixer.init(
                        frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512,
                    )
                    break
                except pygame.error as exc:
                    logger.debug("Audio driver %s unavailable: %s", driver, exc)
            else:
                # Keep a working fallback driver set; only restore on failure.
                if original_driver is not None:
                    os.environ["SDL_AUDIODRIVER"] = original_driver
                else:
                    os.environ.pop("SDL_AUDIODRIVER", None)
                logger.warning("No audio driver available; running silent")
                self._initialized = False
                return False

        self._initialized = True
        self._synthesise()
        return True

    def _synthesise(self) -> None:
        """Render each :class:`SoundEvent` at the mixer's actual format."""
        if not self._initialized:
            return
        mixer_format = pygame.mixer.get_init()
        if not mixer_format:
            return
        frequency, _size, channels = mixer_format
        for event, synth in _SYNTHS.items():
            pcm = to_pcm(synth(frequency), channels)
            try:
                self._sounds[event] = pygame.sndarray.make_sound(pcm)
            except (pygame.error, ValueError) as exc:
                logger.warning("Could not build %s sound: %s", event.name, exc)

    def play(self, event: SoundEvent) -> None:
        """Play the sound associated with *event*, if available."""
        if not self._initialized or not self.enabled:
            return
        sound = self._sounds.get(event)
        if sound is not None:
            sound.play()

    # Trigger interface ───────────────────────────────────────────────────

    def on_shoot(self) -> None:
        self.play(SoundEvent.SHOOT)

    def on_explosion(self) -> None:
        self.play(SoundEvent.EXPLOSION)

    def on_game_over(self) -> None:
        self.play(SoundEvent.GAME_OVER)

    def shutdown(self) -> None:
        """Release mixer resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._sounds.clear()
