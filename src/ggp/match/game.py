"""Game descriptions: a named rule set that can be loaded from YAML."""

from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel

from ggp.statemachine.rules import GameRules


class Game(BaseModel):
    """A game a match can be played on."""

    key: str
    name: str = ""
    rules: GameRules

    def __str__(self) -> str:
        return self.name or self.key

    def to_yaml(self) -> str:
        """Serialize the game to a YAML string."""
        return yaml.safe_dump(self.model_dump(mode='json'), sort_keys=False, allow_unicode=True)


def load_game_file(filepath: Union[str, Path]) -> Game:
    """Load a game from a YAML file.

    The file holds `key`, an optional `name` and the `rules` mapping. If
    `key` is missing the file stem is used.

    Raises:
        ValueError: If the file does not hold a mapping.
        pydantic.ValidationError: If the rules are malformed.
    """
    path = Path(filepath)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    data.setdefault("key", path.stem)
    return Game.model_validate(data)
