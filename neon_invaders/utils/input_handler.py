"""
Input handler for Neon Invaders.

Maps device events to logical game actions.  Several devices (keyboard,
touch, mouse) may hold the same action at once; the simulation only sees
the merged state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class GameAction(Enum):
    """Actions the player can trigger."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    FIRE = auto()
    PAUSE = auto()
    START = auto()
    QUIT = auto()


@dataclass
class InputEvent:
    """Abstract input event consumed by the game loop."""
    action: GameAction
    source: str = "keyboard"
    pressed: bool = True


@dataclass
class InputState:
    """Merged held-state of every logical action across input sources."""

    _held: dict[GameAction, set[str]] = field(default_factory=dict, repr=False)

    def press(self, action: GameAction, source: str = "keyboard") -> bool:
        """Mark *action* held by *source*.

        Returns True when this press is the first source holding the
        action (a rising edge of the merged state).
        """
        holders = self._held.setdefault(action, set())
        edge = not holders
        holders.add(source)
        return edge

    def release(self, action: GameAction, source: str = "keyboard") -> None:
        self._held.get(action, set()).discard(source)

    def release_source(self, source: str) -> None:
        """Drop everything *source* holds (e.g. a finger lifted off-screen)."""
        for holders in self._held.values():
            holders.discard(source)

    def apply(self, event: InputEvent) -> bool:
        if event.pressed:
            return self.press(event.action, event.source)
        self.release(event.action, event.source)
        return False

    def is_held(self, action: GameAction) -> bool:
        return bool(self._held.get(action))

    def held_by(self, source: str) -> set[GameAction]:
        """Actions *source* is currently holding."""
        return {action for action, holders in self._held.items() if source in holders}

    def clear(self) -> None:
        self._held.clear()

    @property
    def move_left(self) -> bool:
        return self.is_held(GameAction.MOVE_LEFT)

    @property
    def move_right(self) -> bool:
        return self.is_held(GameAction.MOVE_RIGHT)
