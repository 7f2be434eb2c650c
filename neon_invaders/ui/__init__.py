"""User interface components."""

from .audio import AudioManager, AudioTriggers, SilentAudio, SoundEvent
from .text import ScoreDisplay

__all__ = [
    "AudioManager",
    "AudioTriggers",
    "ScoreDisplay",
    "SilentAudio",
    "SoundEvent",
]
