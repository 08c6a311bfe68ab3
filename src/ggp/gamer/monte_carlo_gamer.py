"""MonteCarloGamer - picks the move with the best average random playout."""

import logging
import random
import time
from typing import Optional

from ggp.statemachine import (
    CachedStateMachine,
    Move,
    MoveDefinitionError,
    RuleStateMachine,
    StateMachine,
    get_random_next_state,
    perform_depth_charge,
)

from .state_machine_gamer import StateMachineGamer

logger = logging.getLogger(__name__)

# Seconds kept free before the deadline to return the move in time
SAFETY_MARGIN = 0.05

DEFAULT_PROBES_PER_MOVE = 20

# Joint moves per playout before it is given up as unfinished
MAX_PLAYOUT_DEPTH = 200


class MonteCarloGamer(StateMachineGamer):
    """Evaluates each legal move by random depth charges.

    Probes are spread round-robin over the legal moves until either the
    deadline is near or every move got `probes_per_move` probes. Playouts
    that do not reach a terminal state within `MAX_PLAYOUT_DEPTH` joint
    moves or before the deadline are not scored.
    """

    def __init__(self, seed: Optional[int] = None, probes_per_move: int = DEFAULT_PROBES_PER_MOVE):
        super().__init__()
        if probes_per_move < 1:
            raise ValueError(f"probes_per_move must be >= 1, got {probes_per_move}")
        self._rng = random.Random(seed)
        self.probes_per_move = probes_per_move

    def get_initial_state_machine(self) -> StateMachine:
        return CachedStateMachine(RuleStateMachine())

    def state_machine_meta_game(self, timeout: float) -> None:
        pass

    def state_machine_select_move(self, timeout: float) -> Move:
        machine = self.state_machine
        state = self.current_state
        role = self.role

        moves = machine.get_legal_moves(state, role)
        if not moves:
            raise MoveDefinitionError(str(state), reason=f"no legal moves for {role}")
        if len(moves) == 1:
            return moves[0]

        totals = [0] * len(moves)
        counts = [0] * len(moves)
        max_probes = self.probes_per_move * len(moves)
        probes = 0
        stop_at = timeout - SAFETY_MARGIN
        while probes < max_probes and time.monotonic() < stop_at:
            i = probes % len(moves)
            next_state = get_random_next_state(machine, state, self._rng, fixed={role: moves[i]})
            final_state, _ = perform_depth_charge(
                machine, next_state, self._rng, max_depth=MAX_PLAYOUT_DEPTH, deadline=stop_at
            )
            if machine.is_terminal(final_state):
                totals[i] += machine.get_goal(final_state, role)
                counts[i] += 1
            probes += 1

        logger.debug("%s ran %d probes over %d moves", self.get_name(), probes, len(moves))

        def average(i: int) -> float:
            return totals[i] / counts[i] if counts[i] else 0.0

        return moves[max(range(len(moves)), key=average)]
