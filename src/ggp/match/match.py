"""Match record: what has been played so far in one match."""

from datetime import datetime
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .game import Game


class Match(BaseModel):
    """Record of one match, as seen by one player.

    The match is append-only. `move_history` holds one joint move per
    completed turn, each ordered by role. `state_history` holds the
    contents of every state the player computed, starting with the
    initial state.
    """

    match_id: str = Field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    game: Game
    start_clock: float = 30.0  # seconds of metagaming
    play_clock: float = 15.0  # seconds per move

    move_history: list[list[str]] = Field(default_factory=list)
    state_history: list[frozenset[str]] = Field(default_factory=list)
    goal_values: Optional[dict[str, int]] = None

    def append_moves(self, joint_move: list[str]) -> None:
        """Record the joint move of a completed turn.

        Raises:
            ValueError: If the joint move is empty.
        """
        if not joint_move:
            raise ValueError("joint move must hold at least one move")
        self.move_history.append(list(joint_move))

    def append_state(self, contents: frozenset[str]) -> None:
        """Record the contents of a newly computed state."""
        self.state_history.append(frozenset(contents))

    def get_move_history(self) -> list[list[str]]:
        return [list(joint_move) for joint_move in self.move_history]

    def get_state_history(self) -> list[frozenset[str]]:
        return list(self.state_history)

    def get_most_recent_moves(self) -> Optional[list[str]]:
        """Return the last joint move, or None before the first move."""
        if not self.move_history:
            return None
        return list(self.move_history[-1])

    def mark_completed(self, goal_values: dict[str, int]) -> None:
        self.goal_values = dict(goal_values)

    @property
    def is_completed(self) -> bool:
        return self.goal_values is not None

    def to_yaml(self) -> str:
        """Serialize the match to a YAML string.

        State contents are written as sorted lists so logs diff cleanly.
        """
        data = self.model_dump(mode='python')
        data["game"] = self.game.model_dump(mode='json')
        data["state_history"] = [sorted(contents) for contents in self.state_history]
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def save_to_file(self, filepath: str) -> None:
        """Serialize the match to a YAML file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_yaml())

    @classmethod
    def load_from_file(cls, filepath: str) -> "Match":
        """Load a match from a YAML file written by save_to_file."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)
