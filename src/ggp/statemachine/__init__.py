"""State machine package - rules engines and the interface they share."""

from .model import Role, Move, MachineState
from .exceptions import (
    StateMachineError,
    RulesDefinitionError,
    RoleDefinitionError,
    MoveDefinitionError,
    TransitionDefinitionError,
    GoalDefinitionError,
)
from .rules import GameRules, MoveRule, GoalRule
from .base import StateMachine
from .rule_machine import RuleStateMachine
from .cached import CachedStateMachine, DEFAULT_CACHE_TTL
from .helpers import (
    get_legal_joint_moves,
    get_random_move,
    get_random_joint_move,
    get_random_next_state,
    perform_depth_charge,
    get_goals,
)

__all__ = [
    "Role",
    "Move",
    "MachineState",
    "StateMachineError",
    "RulesDefinitionError",
    "RoleDefinitionError",
    "MoveDefinitionError",
    "TransitionDefinitionError",
    "GoalDefinitionError",
    "GameRules",
    "MoveRule",
    "GoalRule",
    "StateMachine",
    "RuleStateMachine",
    "CachedStateMachine",
    "DEFAULT_CACHE_TTL",
    "get_legal_joint_moves",
    "get_random_move",
    "get_random_joint_move",
    "get_random_next_state",
    "perform_depth_charge",
    "get_goals",
]
