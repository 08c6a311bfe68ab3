"""Rule set models consumed by RuleStateMachine.

A rule set is structured data, not rule syntax: every field is validated
by pydantic when the rule set is built or loaded from YAML.

Example (YAML):

    roles: [white, black]
    init: ["(control white)"]
    moves:
      - role: white
        action: "(push)"
        requires: ["(control white)"]
        adds: ["(pushed)"]
    terminal:
      - ["(pushed)"]
    goals:
      - role: white
        value: 100
        when: ["(pushed)"]
"""

from pydantic import BaseModel, Field, model_validator


class MoveRule(BaseModel):
    """One way a role can perform an action.

    An action may be described by several rules with different
    preconditions. The first rule whose preconditions hold determines the
    effect of the action.
    """

    role: str
    action: str
    requires: list[str] = Field(default_factory=list)
    forbids: list[str] = Field(default_factory=list)
    adds: list[str] = Field(default_factory=list)
    removes: list[str] = Field(default_factory=list)

    def applies_to(self, facts: frozenset[str]) -> bool:
        """Check whether this rule's preconditions hold for the given facts."""
        return all(f in facts for f in self.requires) and not any(f in facts for f in self.forbids)


class GoalRule(BaseModel):
    """Goal value of a role when all `when` facts hold."""

    role: str
    value: int = Field(ge=0, le=100)
    when: list[str] = Field(default_factory=list)


class GameRules(BaseModel):
    """Complete description of a game."""

    roles: list[str]
    init: list[str] = Field(default_factory=list)
    moves: list[MoveRule] = Field(default_factory=list)
    terminal: list[list[str]] = Field(default_factory=list)
    goals: list[GoalRule] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_roles(self) -> "GameRules":
        if not self.roles:
            raise ValueError("a game needs at least one role")
        if len(set(self.roles)) != len(self.roles):
            raise ValueError(f"role names must be unique, got {self.roles}")
        known = set(self.roles)
        for rule in self.moves:
            if rule.role not in known:
                raise ValueError(f"move {rule.action!r} refers to unknown role {rule.role!r}")
        for goal in self.goals:
            if goal.role not in known:
                raise ValueError(f"goal refers to unknown role {goal.role!r}")
        return self
