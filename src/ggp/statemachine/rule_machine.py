"""RuleStateMachine - a state machine driven by a GameRules rule set."""

import logging
from typing import Optional

from ggp.statemachine.exceptions import (
    GoalDefinitionError,
    MoveDefinitionError,
    RoleDefinitionError,
    RulesDefinitionError,
    StateMachineError,
    TransitionDefinitionError,
)
from ggp.statemachine.model import MachineState, Move, Role
from ggp.statemachine.rules import GameRules, MoveRule

logger = logging.getLogger(__name__)


class RuleStateMachine:
    """Evaluates a GameRules rule set directly.

    States are sets of facts. A joint move holds one move per role, in the
    order of `GameRules.roles`; all moves take effect simultaneously
    (removals first, then additions).
    """

    def __init__(self):
        self._rules: Optional[GameRules] = None
        self._roles: list[Role] = []
        self._move_rules: dict[tuple[str, str], list[MoveRule]] = {}
        self._actions: set[str] = set()

    def initialize(self, rules: GameRules) -> None:
        """Index the rule set for fast lookups.

        Raises:
            RulesDefinitionError: If `rules` is not a GameRules instance.
        """
        if not isinstance(rules, GameRules):
            raise RulesDefinitionError(f"Expected GameRules, got {type(rules).__name__}")

        move_rules: dict[tuple[str, str], list[MoveRule]] = {}
        for rule in rules.moves:
            move_rules.setdefault((rule.role, rule.action), []).append(rule)

        self._rules = rules
        self._roles = [Role(name=name) for name in rules.roles]
        self._move_rules = move_rules
        self._actions = {rule.action for rule in rules.moves}
        logger.debug(
            "Initialized rule machine: %d roles, %d move rules",
            len(self._roles),
            len(rules.moves),
        )

    @property
    def rules(self) -> GameRules:
        self._ensure_initialized()
        return self._rules

    def get_initial_state(self) -> MachineState:
        return MachineState(contents=frozenset(self.rules.init))

    def get_roles(self) -> list[Role]:
        self._ensure_initialized()
        return list(self._roles)

    def get_role_from_name(self, name: str) -> Role:
        for role in self.get_roles():
            if role.name == name:
                return role
        raise RoleDefinitionError(name)

    def get_move_from_contents(self, contents: str) -> Move:
        self._ensure_initialized()
        if contents not in self._actions:
            raise MoveDefinitionError(contents)
        return Move(contents=contents)

    def get_legal_moves(self, state: MachineState, role: Role) -> list[Move]:
        moves: list[Move] = []
        seen: set[str] = set()
        for rule in self.rules.moves:
            if rule.role != role.name or rule.action in seen:
                continue
            if rule.applies_to(state.contents):
                seen.add(rule.action)
                moves.append(Move(contents=rule.action))
        return moves

    def get_next_state(self, state: MachineState, moves: list[Move]) -> MachineState:
        roles = self.get_roles()
        if len(moves) != len(roles):
            raise TransitionDefinitionError(
                f"Joint move has {len(moves)} moves, game has {len(roles)} roles"
            )

        removes: set[str] = set()
        adds: set[str] = set()
        for role, move in zip(roles, moves):
            rule = self._applicable_rule(state, role, move)
            if rule is None:
                raise TransitionDefinitionError(
                    f"Move {move.contents!r} is not legal for role {role.name!r}"
                )
            removes.update(rule.removes)
            adds.update(rule.adds)

        return MachineState(contents=(state.contents - removes) | adds)

    def get_next_state_destructively(self, state: MachineState, moves: list[Move]) -> MachineState:
        # States are immutable, nothing to reuse
        return self.get_next_state(state, moves)

    def is_terminal(self, state: MachineState) -> bool:
        return any(
            all(fact in state.contents for fact in condition)
            for condition in self.rules.terminal
        )

    def get_goal(self, state: MachineState, role: Role) -> int:
        for goal in self.rules.goals:
            if goal.role == role.name and all(f in state.contents for f in goal.when):
                return goal.value
        raise GoalDefinitionError(role.name)

    def do_per_move_work(self) -> None:
        pass

    def _ensure_initialized(self) -> None:
        if self._rules is None:
            raise StateMachineError("State machine used before initialize()")

    def _applicable_rule(self, state: MachineState, role: Role, move: Move) -> Optional[MoveRule]:
        """Find the first rule for (role, move) whose preconditions hold."""
        for rule in self._move_rules.get((role.name, move.contents), []):
            if rule.applies_to(state.contents):
                return rule
        return None
