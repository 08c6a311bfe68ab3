"""Match package - games and the per-player match record."""

from .game import Game, load_game_file
from .match import Match

__all__ = [
    "Game",
    "load_game_file",
    "Match",
]
