"""
Neon Invaders - a neon-vector take on the classic invader shooter
"""

__version__ = "1.0.0"

from .game import Game, GameState, RenderState
from .config import *  # noqa: F401,F403

__all__ = ["Game", "GameState", "RenderState"]
