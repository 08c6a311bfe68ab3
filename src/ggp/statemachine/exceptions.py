"""State machine exceptions."""


class StateMachineError(Exception):
    """Base class for every error raised by a state machine."""

    pass


class RulesDefinitionError(StateMachineError):
    """Raised when a rule set cannot be ingested by a machine."""

    pass


class RoleDefinitionError(StateMachineError):
    """Raised when a role name does not name a role of the game."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown role: {name!r}")


class MoveDefinitionError(StateMachineError):
    """Raised when a move cannot be decoded or legal moves cannot be computed."""

    def __init__(self, contents: str, reason: str = "unknown move"):
        self.contents = contents
        super().__init__(f"{reason}: {contents!r}")


class TransitionDefinitionError(StateMachineError):
    """Raised when the next state cannot be computed from a joint move.

    Covers joint moves of the wrong arity as well as moves that are not
    legal in the given state.
    """

    pass


class GoalDefinitionError(StateMachineError):
    """Raised when no goal value is defined for a role in a state."""

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"No goal defined for role {role_name!r} in this state")
