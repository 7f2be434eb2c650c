"""
UI text utilities for Neon Invaders.

Provides score tracking for the HUD.  Whoever displays the score
subscribes a listener and is told the new value on every change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

ScoreListener = Callable[[int], None]


@dataclass
class ScoreDisplay:
    """Tracks and formats the player score and the session-best score."""

    player_score: int = 0
    high_score: int = 0
    listeners: list[ScoreListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: ScoreListener) -> None:
        self.listeners.append(listener)

    def add(self, points: int) -> None:
        """Add *points* to the player score and update high score."""
        self.player_score += points
        if self.player_score > self.high_score:
            self.high_score = self.player_score
        self._notify()

    def reset(self) -> None:
        """Reset player score (high score persists)."""
        self.player_score = 0
        self._notify()

    def _notify(self) -> None:
        for listener in self.listeners:
            listener(self.player_score)

    def format_score(self) -> str:
        return f"SCORE: {self.player_score}"

    def format_high_score(self) -> str:
        return f"HIGH: {self.high_score}"

    def format_final_score(self) -> str:
        return f"FINAL SCORE: {self.player_score}"
