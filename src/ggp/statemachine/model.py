"""Value types produced by state machines: roles, moves and states."""

from pydantic import BaseModel, ConfigDict


class Role(BaseModel):
    """A participant of the game, as resolved by one state machine.

    Roles are only meaningful to the machine that produced them. After a
    machine switch the role has to be resolved again by name. Equality
    compares names only: two equal roles may come from different machines,
    and that does not make them interchangeable.
    """

    model_config = ConfigDict(frozen=True)

    name: str

    def __str__(self) -> str:
        return self.name


class Move(BaseModel):
    """A decoded action. `contents` is the external move representation."""

    model_config = ConfigDict(frozen=True)

    contents: str

    def __str__(self) -> str:
        return self.contents


class MachineState(BaseModel):
    """Immutable snapshot of a full game position.

    `contents` is the external representation of the state: the set of
    facts that are true in it. Two states are equal when their contents are.
    """

    model_config = ConfigDict(frozen=True)

    contents: frozenset[str]

    def __str__(self) -> str:
        return "{" + ", ".join(sorted(self.contents)) + "}"
