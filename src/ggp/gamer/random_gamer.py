"""RandomGamer - plays a uniformly random legal move."""

import random
from typing import Optional

from ggp.statemachine import Move, RuleStateMachine, StateMachine, get_random_move

from .state_machine_gamer import StateMachineGamer


class RandomGamer(StateMachineGamer):
    """Plays a random legal move.

    Same seed + same match = same moves.
    """

    def __init__(self, seed: Optional[int] = None):
        super().__init__()
        self._rng = random.Random(seed)

    def get_initial_state_machine(self) -> StateMachine:
        return RuleStateMachine()

    def state_machine_meta_game(self, timeout: float) -> None:
        pass

    def state_machine_select_move(self, timeout: float) -> Move:
        return get_random_move(self.state_machine, self.current_state, self.role, self._rng)
