"""Gamer exceptions.

MetaGamingError and MoveSelectionError are the only failures a gamer
reports to whoever drives it. They carry no detail about the underlying
cause; the cause is logged where it is caught.
"""

from typing import Optional


class GamerError(Exception):
    """Base class for gamer failures."""

    pass


class MetaGamingError(GamerError):
    """Raised when a gamer could not get ready for a match."""

    def __init__(self):
        super().__init__("Meta-gaming failed")


class MoveSelectionError(GamerError):
    """Raised when a gamer could not produce a move for this turn."""

    def __init__(self):
        super().__init__("Move selection failed")


class StateMachineSwitchError(GamerError):
    """Raised while replaying the match history into a new state machine.

    Never leaves the gamer: switch_state_machine() logs and suppresses it.
    """

    def __init__(self, message: str, turn: Optional[int] = None):
        self.turn = turn
        if turn is not None:
            message = f"turn {turn}: {message}"
        super().__init__(message)
