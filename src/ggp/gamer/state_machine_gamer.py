"""StateMachineGamer - keeps a gamer's view of the match in sync with a state machine.

The gamer owns exactly one GameTriple (role, current state, state machine)
per match. The triple is built by meta_game(), advanced by select_move()
and can be rebuilt under a different state machine by
switch_state_machine(). Each of these installs a complete triple with a
single assignment, so the triple is never observed half-updated:

    gamer.set_match(match)
    gamer.set_role_name("white")
    gamer.meta_game(deadline)        # triple built, initial state recorded
    move = gamer.select_move(deadline)
    match.append_moves(joint_move)   # driver records the turn
    move = gamer.select_move(deadline)  # triple advanced, next move chosen

Subclasses pick the state machine and the move-selection strategy.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ggp.match import Match
from ggp.statemachine import MachineState, Move, Role, StateMachine, StateMachineError

from .base import Gamer
from .exceptions import GamerError, MetaGamingError, MoveSelectionError, StateMachineSwitchError

# Logger name every gamer failure is traced under
LOG_TAG = "GamePlayer"

logger = logging.getLogger(LOG_TAG)


class GameTriple(BaseModel):
    """The role, current state and state machine of one gamer.

    `role` and `current_state` were both produced by `state_machine`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    role: Role
    current_state: MachineState
    state_machine: StateMachine


class StateMachineGamer(Gamer):
    """Base class for gamers that see the game as a state machine.

    Interprets the match history as transitions of a state machine and
    keeps the current state up to date, then delegates the actual decisions
    to the state_machine_* hooks.
    """

    def __init__(self):
        super().__init__()
        self._triple: Optional[GameTriple] = None

    # ========================================================================
    # Hooks for subclasses
    # ========================================================================

    def get_initial_state_machine(self) -> StateMachine:
        """Return the (uninitialized) state machine to start each match with."""
        raise NotImplementedError

    def state_machine_meta_game(self, timeout: float) -> None:
        """Metagaming, run once the triple is in place.

        Args:
            timeout: Deadline for metagaming, as a time.monotonic() value.
        """
        raise NotImplementedError

    def state_machine_select_move(self, timeout: float) -> Move:
        """Select a move from the current state.

        Args:
            timeout: Deadline for move selection, as a time.monotonic() value.

        Returns:
            A move produced by the current state machine.
        """
        raise NotImplementedError

    # ========================================================================
    # Read access to the triple
    # ========================================================================

    @property
    def triple(self) -> Optional[GameTriple]:
        return self._triple

    @property
    def current_state(self) -> Optional[MachineState]:
        return self._triple.current_state if self._triple is not None else None

    @property
    def role(self) -> Optional[Role]:
        return self._triple.role if self._triple is not None else None

    @property
    def state_machine(self) -> Optional[StateMachine]:
        return self._triple.state_machine if self._triple is not None else None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def meta_game(self, timeout: float) -> None:
        """Build the triple for the bound match, then run metagaming.

        Nothing is installed unless the machine, its initial state and the
        role were all obtained. The initial state is appended to the
        match's state log.

        Raises:
            MetaGamingError: On any failure. The cause is logged.
        """
        try:
            match = self._require_match()
            machine = self.get_initial_state_machine()
            machine.initialize(match.game.rules)
            state = machine.get_initial_state()
            role = machine.get_role_from_name(self.role_name)
            triple = GameTriple(role=role, current_state=state, state_machine=machine)

            match.append_state(state.contents)
            self._triple = triple

            self.state_machine_meta_game(timeout)
        except Exception:
            logger.exception("Meta-gaming failed for %s", self.get_name())
            raise MetaGamingError() from None

    def select_move(self, timeout: float) -> str:
        """Advance the current state by the last joint move, then select a move.

        The state machine's per-move work runs first, on every call. On the
        first turn there are no moves to apply and the state is unchanged.

        Returns:
            External representation of the selected move.

        Raises:
            MoveSelectionError: On any failure. The cause is logged and the
                current state stays at its last successfully computed value.
        """
        try:
            triple = self._require_triple()
            machine = triple.state_machine
            machine.do_per_move_work()

            match = self._require_match()
            last_moves = match.get_most_recent_moves()
            if last_moves is not None:
                moves = [machine.get_move_from_contents(contents) for contents in last_moves]
                next_state = machine.get_next_state(triple.current_state, moves)
                match.append_state(next_state.contents)
                self._triple = triple.model_copy(update={"current_state": next_state})

            return self.state_machine_select_move(timeout).contents
        except Exception:
            logger.exception("Move selection failed for %s", self.get_name())
            raise MoveSelectionError() from None

    def switch_state_machine(self, new_machine: StateMachine) -> bool:
        """Switch to `new_machine` by replaying the match history through it.

        `new_machine` must already be initialized with the match's rules.
        The role is resolved again and every recorded joint move is decoded
        and applied by the new machine, in order. The new triple replaces
        the old one only if the whole replay succeeds.

        Failures are logged and swallowed: the gamer simply keeps its
        current state machine.

        Not thread-safe. The caller must not run this concurrently with
        select_move() or another switch on the same gamer.

        Returns:
            True if the switch happened, False if the old machine was kept.
        """
        try:
            triple = self._replay_match(new_machine)
        except Exception:
            logger.exception("Caught an exception while switching state machine!")
            return False

        self._triple = triple
        logger.info(
            "%s switched to %s at turn %d",
            self.get_name(),
            type(new_machine).__name__,
            len(self._match.move_history) if self._match is not None else 0,
        )
        return True

    def cleanup_after_match(self) -> None:
        """Drop the triple and the match binding.

        Only needed when the gamer is reused for another match and the
        state machine's resources should be released now.
        """
        self._triple = None
        self.set_match(None)
        self.set_role_name(None)

    # ========================================================================
    # Internals
    # ========================================================================

    def _require_match(self) -> Match:
        if self._match is None:
            raise GamerError("No match bound to gamer")
        return self._match

    def _require_triple(self) -> GameTriple:
        if self._triple is None:
            raise GamerError("Gamer has no state machine; meta_game() was not run")
        return self._triple

    def _replay_match(self, machine: StateMachine) -> GameTriple:
        """Rebuild role and current state under `machine` from the move history."""
        match = self._require_match()
        if self.role_name is None:
            raise StateMachineSwitchError("no role name bound to gamer")

        state = machine.get_initial_state()
        role = machine.get_role_from_name(self.role_name)

        history = match.get_move_history()
        for turn, joint_move in enumerate(history, start=1):
            try:
                moves = [machine.get_move_from_contents(contents) for contents in joint_move]
                state = machine.get_next_state_destructively(state, moves)
            except StateMachineError as e:
                raise StateMachineSwitchError(str(e), turn=turn) from e

        return GameTriple(role=role, current_state=state, state_machine=machine)
