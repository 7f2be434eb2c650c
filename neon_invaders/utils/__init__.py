"""Utility functions and helpers."""

from .functions import (
    clamp,
    frame_fire_chance,
    rect_intersect,
)
from .input_handler import GameAction, InputEvent, InputState
from .scheduler import ScheduledTask, Scheduler

__all__ = [
    "clamp",
    "frame_fire_chance",
    "rect_intersect",
    "GameAction",
    "InputEvent",
    "InputState",
    "ScheduledTask",
    "Scheduler",
]
