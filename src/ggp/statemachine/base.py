"""StateMachine Protocol - the capability set every rules engine provides.

Gamers only talk to engines through this interface, so engines can be
swapped freely, including in the middle of a match:

    machine = RuleStateMachine()
    machine.initialize(game.rules)
    state = machine.get_initial_state()
    role = machine.get_role_from_name("white")
    moves = [machine.get_move_from_contents(m) for m in joint_move]
    state = machine.get_next_state(state, moves)
"""

from typing import Protocol, runtime_checkable

from ggp.statemachine.model import MachineState, Move, Role
from ggp.statemachine.rules import GameRules


@runtime_checkable
class StateMachine(Protocol):
    """A rules engine for one game.

    Every Role, Move and MachineState a machine returns belongs to that
    machine. Values from one machine must not be passed to another.
    """

    def initialize(self, rules: GameRules) -> None:
        """Ingest the rule set. Must be called before any other method."""
        ...

    def get_initial_state(self) -> MachineState:
        """Return the state the game starts in."""
        ...

    def get_roles(self) -> list[Role]:
        """Return all roles, in joint move order."""
        ...

    def get_role_from_name(self, name: str) -> Role:
        """Resolve a role name.

        Raises:
            RoleDefinitionError: If the game has no such role.
        """
        ...

    def get_move_from_contents(self, contents: str) -> Move:
        """Decode an external move representation.

        Raises:
            MoveDefinitionError: If no role of the game has such a move.
        """
        ...

    def get_legal_moves(self, state: MachineState, role: Role) -> list[Move]:
        """Return the moves `role` may make in `state`."""
        ...

    def get_next_state(self, state: MachineState, moves: list[Move]) -> MachineState:
        """Compute the state reached from `state` by the joint move `moves`.

        Raises:
            TransitionDefinitionError: If the joint move is malformed or illegal.
        """
        ...

    def get_next_state_destructively(self, state: MachineState, moves: list[Move]) -> MachineState:
        """Same as get_next_state, but may consume `state`.

        Only used where the input state is not kept after the call,
        such as replaying a match history.
        """
        ...

    def is_terminal(self, state: MachineState) -> bool:
        """Check whether the game is over in `state`."""
        ...

    def get_goal(self, state: MachineState, role: Role) -> int:
        """Return the goal value (0-100) of `role` in `state`.

        Raises:
            GoalDefinitionError: If no goal is defined for the role.
        """
        ...

    def do_per_move_work(self) -> None:
        """Per-turn bookkeeping hook, called once at the start of every turn."""
        ...
