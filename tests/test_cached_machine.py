"""Tests for CachedStateMachine."""

import pytest

from ggp.games import RACE
from ggp.statemachine import (
    CachedStateMachine,
    MachineState,
    Move,
    Role,
    RuleStateMachine,
    StateMachine,
    TransitionDefinitionError,
)


class CountingStateMachine(RuleStateMachine):
    """RuleStateMachine that counts calls to the backing operations."""

    def __init__(self):
        super().__init__()
        self.next_state_calls = 0
        self.legal_move_calls = 0
        self.per_move_work_calls = 0

    def get_next_state(self, state: MachineState, moves: list[Move]) -> MachineState:
        self.next_state_calls += 1
        return super().get_next_state(state, moves)

    def get_legal_moves(self, state: MachineState, role: Role) -> list[Move]:
        self.legal_move_calls += 1
        return super().get_legal_moves(state, role)

    def do_per_move_work(self) -> None:
        self.per_move_work_calls += 1


def create_cached(ttl: int = 1) -> tuple[CachedStateMachine, CountingStateMachine]:
    backing = CountingStateMachine()
    cached = CachedStateMachine(backing, ttl=ttl)
    cached.initialize(RACE.rules)
    return cached, backing


def steps() -> list[Move]:
    return [Move(contents="(step)"), Move(contents="(step)")]


class TestCachedResults:
    """Cached results match the backing machine."""

    def test_satisfies_protocol(self):
        cached, _ = create_cached()
        assert isinstance(cached, StateMachine)

    def test_same_results_as_backing(self):
        cached, _ = create_cached()
        plain = RuleStateMachine()
        plain.initialize(RACE.rules)

        state = cached.get_initial_state()
        white = cached.get_role_from_name("white")
        assert cached.get_legal_moves(state, white) == plain.get_legal_moves(state, white)
        assert cached.get_next_state(state, steps()) == plain.get_next_state(state, steps())
        assert cached.is_terminal(state) == plain.is_terminal(state)

    def test_next_state_computed_once(self):
        cached, backing = create_cached()
        state = cached.get_initial_state()
        first = cached.get_next_state(state, steps())
        second = cached.get_next_state(state, steps())
        assert first is second
        assert backing.next_state_calls == 1

    def test_legal_moves_computed_once(self):
        cached, backing = create_cached()
        state = cached.get_initial_state()
        white = cached.get_role_from_name("white")
        cached.get_legal_moves(state, white)
        cached.get_legal_moves(state, white)
        assert backing.legal_move_calls == 1

    def test_errors_not_cached(self):
        cached, _ = create_cached()
        state = cached.get_initial_state()
        for _ in range(2):
            with pytest.raises(TransitionDefinitionError):
                cached.get_next_state(state, [Move(contents="(step)")])


class TestCacheEviction:
    """Entries expire when untouched for `ttl` turns."""

    def test_entry_expires(self):
        cached, _ = create_cached(ttl=1)
        cached.is_terminal(cached.get_initial_state())
        assert len(cached) == 1

        cached.do_per_move_work()
        assert len(cached) == 1
        cached.do_per_move_work()
        assert len(cached) == 0

    def test_touch_keeps_entry(self):
        cached, _ = create_cached(ttl=1)
        state = cached.get_initial_state()
        cached.is_terminal(state)

        for _ in range(3):
            cached.do_per_move_work()
            cached.is_terminal(state)
        assert len(cached) == 1

    def test_per_move_work_delegates(self):
        cached, backing = create_cached()
        cached.do_per_move_work()
        assert backing.per_move_work_calls == 1

    def test_initialize_clears_cache(self):
        cached, _ = create_cached()
        cached.is_terminal(cached.get_initial_state())
        cached.initialize(RACE.rules)
        assert len(cached) == 0

    def test_destructive_bypasses_cache(self):
        cached, _ = create_cached()
        cached.get_next_state_destructively(cached.get_initial_state(), steps())
        assert len(cached) == 0

    def test_negative_ttl(self):
        with pytest.raises(ValueError):
            CachedStateMachine(RuleStateMachine(), ttl=-1)
