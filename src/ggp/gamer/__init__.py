"""Gamer package - players that track a match through a state machine."""

from .exceptions import GamerError, MetaGamingError, MoveSelectionError, StateMachineSwitchError
from .base import Gamer
from .state_machine_gamer import GameTriple, StateMachineGamer, LOG_TAG
from .legal_gamer import LegalGamer
from .random_gamer import RandomGamer
from .monte_carlo_gamer import MonteCarloGamer

__all__ = [
    "GamerError",
    "MetaGamingError",
    "MoveSelectionError",
    "StateMachineSwitchError",
    "Gamer",
    "GameTriple",
    "StateMachineGamer",
    "LOG_TAG",
    "LegalGamer",
    "RandomGamer",
    "MonteCarloGamer",
]
