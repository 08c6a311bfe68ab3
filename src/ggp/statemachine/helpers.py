"""Helpers built on top of the StateMachine capability set.

These work with any machine and are what move-selection strategies use to
enumerate joint moves and to play random games to the end.
"""

import itertools
import random
import time
from typing import Optional

from ggp.statemachine.base import StateMachine
from ggp.statemachine.exceptions import MoveDefinitionError
from ggp.statemachine.model import MachineState, Move, Role


def get_legal_joint_moves(
    machine: StateMachine,
    state: MachineState,
    fixed: Optional[dict[Role, Move]] = None,
) -> list[list[Move]]:
    """Enumerate every legal joint move in `state`.

    Args:
        machine: The state machine to query.
        state: The state to enumerate joint moves for.
        fixed: Optional moves to hold fixed for some roles.

    Returns:
        List of joint moves, each ordered like machine.get_roles().
    """
    fixed = fixed or {}
    per_role: list[list[Move]] = []
    for role in machine.get_roles():
        if role in fixed:
            per_role.append([fixed[role]])
        else:
            per_role.append(machine.get_legal_moves(state, role))
    return [list(combo) for combo in itertools.product(*per_role)]


def get_random_move(
    machine: StateMachine,
    state: MachineState,
    role: Role,
    rng: random.Random,
) -> Move:
    """Pick a uniformly random legal move for `role`.

    Raises:
        MoveDefinitionError: If the role has no legal move in `state`.
    """
    legal = machine.get_legal_moves(state, role)
    if not legal:
        raise MoveDefinitionError(str(state), reason=f"no legal moves for {role.name}")
    return rng.choice(legal)


def get_random_joint_move(
    machine: StateMachine,
    state: MachineState,
    rng: random.Random,
    fixed: Optional[dict[Role, Move]] = None,
) -> list[Move]:
    """Pick a random legal move for every role not listed in `fixed`."""
    fixed = fixed or {}
    return [
        fixed[role] if role in fixed else get_random_move(machine, state, role, rng)
        for role in machine.get_roles()
    ]


def get_random_next_state(
    machine: StateMachine,
    state: MachineState,
    rng: random.Random,
    fixed: Optional[dict[Role, Move]] = None,
) -> MachineState:
    """Advance `state` by one random joint move."""
    return machine.get_next_state(state, get_random_joint_move(machine, state, rng, fixed))


def perform_depth_charge(
    machine: StateMachine,
    state: MachineState,
    rng: random.Random,
    max_depth: Optional[int] = None,
    deadline: Optional[float] = None,
) -> tuple[MachineState, int]:
    """Play random joint moves from `state` until the game ends.

    The playout stops early at `max_depth` joint moves or once the
    `deadline` has passed. The returned state is then not terminal.

    Args:
        machine: The state machine to play with.
        state: Start state of the playout. It is not modified.
        rng: Source of randomness.
        max_depth: Optional cap on the number of joint moves.
        deadline: Optional time.monotonic() value after which to stop.

    Returns:
        Tuple of (final_state, depth) where depth is the number of joint
        moves played.
    """
    depth = 0
    while not machine.is_terminal(state):
        if max_depth is not None and depth >= max_depth:
            break
        if deadline is not None and time.monotonic() >= deadline:
            break
        state = machine.get_next_state(state, get_random_joint_move(machine, state, rng))
        depth += 1
    return state, depth


def get_goals(machine: StateMachine, state: MachineState) -> dict[str, int]:
    """Return the goal value of every role in `state`, keyed by role name."""
    return {role.name: machine.get_goal(state, role) for role in machine.get_roles()}
