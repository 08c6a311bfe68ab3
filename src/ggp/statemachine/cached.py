"""CachedStateMachine - memoizing wrapper around any StateMachine."""

import logging
from typing import Optional

from ggp.statemachine.base import StateMachine
from ggp.statemachine.model import MachineState, Move, Role
from ggp.statemachine.rules import GameRules

logger = logging.getLogger(__name__)

# Number of turns a cache entry survives without being touched
DEFAULT_CACHE_TTL = 1


class _CacheEntry:
    """Everything computed so far for one state."""

    def __init__(self, ttl: int):
        self.ttl = ttl
        self.terminal: Optional[bool] = None
        self.goals: dict[Role, int] = {}
        self.legal_moves: dict[Role, list[Move]] = {}
        self.next_states: dict[tuple[Move, ...], MachineState] = {}


class CachedStateMachine:
    """Caches the results of a backing machine per state.

    Entries are aged by do_per_move_work(): an entry that was not touched
    during the last `ttl` turns is evicted. Touching an entry resets its
    age. This keeps the cache bounded to the part of the game tree that is
    still being searched.
    """

    def __init__(self, backing_machine: StateMachine, ttl: int = DEFAULT_CACHE_TTL):
        if ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {ttl}")
        self.backing_machine = backing_machine
        self._ttl = ttl
        self._entries: dict[MachineState, _CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _entry(self, state: MachineState) -> _CacheEntry:
        entry = self._entries.get(state)
        if entry is None:
            entry = _CacheEntry(self._ttl)
            self._entries[state] = entry
        else:
            entry.ttl = self._ttl
        return entry

    def initialize(self, rules: GameRules) -> None:
        self._entries.clear()
        self.backing_machine.initialize(rules)

    def get_initial_state(self) -> MachineState:
        return self.backing_machine.get_initial_state()

    def get_roles(self) -> list[Role]:
        return self.backing_machine.get_roles()

    def get_role_from_name(self, name: str) -> Role:
        return self.backing_machine.get_role_from_name(name)

    def get_move_from_contents(self, contents: str) -> Move:
        return self.backing_machine.get_move_from_contents(contents)

    def get_legal_moves(self, state: MachineState, role: Role) -> list[Move]:
        entry = self._entry(state)
        if role not in entry.legal_moves:
            entry.legal_moves[role] = self.backing_machine.get_legal_moves(state, role)
        return list(entry.legal_moves[role])

    def get_next_state(self, state: MachineState, moves: list[Move]) -> MachineState:
        entry = self._entry(state)
        key = tuple(moves)
        if key not in entry.next_states:
            entry.next_states[key] = self.backing_machine.get_next_state(state, moves)
        return entry.next_states[key]

    def get_next_state_destructively(self, state: MachineState, moves: list[Move]) -> MachineState:
        # Replayed states are visited once, caching them would only grow the cache
        return self.backing_machine.get_next_state_destructively(state, moves)

    def is_terminal(self, state: MachineState) -> bool:
        entry = self._entry(state)
        if entry.terminal is None:
            entry.terminal = self.backing_machine.is_terminal(state)
        return entry.terminal

    def get_goal(self, state: MachineState, role: Role) -> int:
        entry = self._entry(state)
        if role not in entry.goals:
            entry.goals[role] = self.backing_machine.get_goal(state, role)
        return entry.goals[role]

    def do_per_move_work(self) -> None:
        """Age every entry and evict the expired ones."""
        expired = []
        for state, entry in self._entries.items():
            if entry.ttl <= 0:
                expired.append(state)
            else:
                entry.ttl -= 1
        for state in expired:
            del self._entries[state]
        if expired:
            logger.debug("Evicted %d cache entries, %d left", len(expired), len(self._entries))
        self.backing_machine.do_per_move_work()
