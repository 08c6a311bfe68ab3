"""Gamer base class: a player bound to one match at a time."""

from typing import Optional

from ggp.match import Match


class Gamer:
    """A player of matches.

    The driver binds a match and a role name before asking the gamer to
    meta-game, then calls select_move() once per turn. Subclasses implement
    both.
    """

    def __init__(self):
        self._match: Optional[Match] = None
        self._role_name: Optional[str] = None

    @property
    def match(self) -> Optional[Match]:
        return self._match

    @property
    def role_name(self) -> Optional[str]:
        return self._role_name

    def set_match(self, match: Optional[Match]) -> None:
        self._match = match

    def set_role_name(self, role_name: Optional[str]) -> None:
        self._role_name = role_name

    def get_name(self) -> str:
        """Display name of the gamer."""
        return type(self).__name__

    def meta_game(self, timeout: float) -> None:
        """Get ready for the bound match.

        Args:
            timeout: Deadline for metagaming, as a time.monotonic() value.

        Raises:
            MetaGamingError: If the gamer could not get ready.
        """
        raise NotImplementedError

    def select_move(self, timeout: float) -> str:
        """Return the external representation of this turn's move.

        Args:
            timeout: Deadline for move selection, as a time.monotonic() value.

        Raises:
            MoveSelectionError: If no move could be selected.
        """
        raise NotImplementedError
