"""Tests for the reference gamers: LegalGamer, RandomGamer, MonteCarloGamer."""

import threading
import time

import pytest

from ggp.games import RACE, TIC_TAC_TOE
from ggp.gamer import Gamer, LegalGamer, MonteCarloGamer, RandomGamer
from ggp.match import Game, Match
from ggp.statemachine import CachedStateMachine, GameRules, MoveRule, RuleStateMachine


# One role, two always-legal moves and no terminal condition
ENDLESS = Game(
    key="endless",
    rules=GameRules(
        roles=["solo"],
        init=["(here)"],
        moves=[
            MoveRule(role="solo", action="(left)"),
            MoveRule(role="solo", action="(right)"),
        ],
    ),
)


def deadline(seconds: float = 60) -> float:
    return time.monotonic() + seconds


def bind(gamer, game: Game = RACE, role_name: str = "white"):
    """Bind a gamer to a fresh match and run meta-gaming."""
    gamer.set_match(Match(game=game))
    gamer.set_role_name(role_name)
    gamer.meta_game(deadline())
    return gamer


class TestGamerBase:
    """Tests for the Gamer base class."""

    def test_binding(self):
        gamer = Gamer()
        match = Match(game=RACE)
        gamer.set_match(match)
        gamer.set_role_name("white")
        assert gamer.match is match
        assert gamer.role_name == "white"

    def test_default_name(self):
        assert LegalGamer().get_name() == "LegalGamer"

    def test_abstract_methods(self):
        with pytest.raises(NotImplementedError):
            Gamer().meta_game(deadline())
        with pytest.raises(NotImplementedError):
            Gamer().select_move(deadline())


class TestLegalGamer:
    """Tests for LegalGamer."""

    def test_uses_rule_machine(self):
        gamer = bind(LegalGamer())
        assert isinstance(gamer.state_machine, RuleStateMachine)

    def test_first_legal_move(self):
        gamer = bind(LegalGamer())
        assert gamer.select_move(deadline()) == "(step)"

    def test_first_blank_cell(self):
        gamer = bind(LegalGamer(), TIC_TAC_TOE, "xplayer")
        assert gamer.select_move(deadline()) == "(mark 1 1)"


class TestRandomGamer:
    """Tests for RandomGamer."""

    def test_move_is_legal(self):
        gamer = bind(RandomGamer(seed=3), TIC_TAC_TOE, "xplayer")
        move = gamer.select_move(deadline())
        legal = gamer.state_machine.get_legal_moves(gamer.current_state, gamer.role)
        assert move in [m.contents for m in legal]

    def test_same_seed_same_moves(self):
        first = bind(RandomGamer(seed=42), TIC_TAC_TOE, "xplayer")
        second = bind(RandomGamer(seed=42), TIC_TAC_TOE, "xplayer")
        assert first.select_move(deadline()) == second.select_move(deadline())


class TestMonteCarloGamer:
    """Tests for MonteCarloGamer."""

    def test_uses_cached_machine(self):
        gamer = bind(MonteCarloGamer(seed=1))
        assert isinstance(gamer.state_machine, CachedStateMachine)

    def test_single_legal_move(self):
        gamer = bind(MonteCarloGamer(seed=1), TIC_TAC_TOE, "oplayer")
        assert gamer.select_move(deadline()) == "noop"

    def test_move_is_legal(self):
        gamer = bind(MonteCarloGamer(seed=1, probes_per_move=5), TIC_TAC_TOE, "xplayer")
        move = gamer.select_move(deadline())
        assert move.startswith("(mark ")

    def test_expired_deadline_falls_back_to_first_move(self):
        gamer = bind(MonteCarloGamer(seed=1))
        assert gamer.select_move(time.monotonic() - 1) == "(step)"

    def test_finds_winning_move(self):
        gamer = bind(MonteCarloGamer(seed=1, probes_per_move=10), TIC_TAC_TOE, "xplayer")
        gamer.select_move(deadline())
        move = None
        for joint in (
            ["(mark 1 1)", "noop"],
            ["noop", "(mark 2 1)"],
            ["(mark 1 2)", "noop"],
            ["noop", "(mark 2 2)"],
        ):
            gamer.match.append_moves(joint)
            move = gamer.select_move(deadline())

        # (1 3) completes the top row
        assert move == "(mark 1 3)"

    def test_invalid_probe_count(self):
        with pytest.raises(ValueError):
            MonteCarloGamer(probes_per_move=0)

    def test_endless_game_respects_deadline(self):
        gamer = bind(MonteCarloGamer(seed=1), ENDLESS, "solo")
        result = []
        worker = threading.Thread(target=lambda: result.append(gamer.select_move(deadline(0.5))))
        worker.start()
        worker.join(5)

        assert not worker.is_alive()
        # No playout finishes, so no move scores better than the first
        assert result == ["(left)"]

    def test_endless_game_stops_at_playout_limit(self):
        gamer = bind(MonteCarloGamer(seed=1, probes_per_move=2), ENDLESS, "solo")
        assert gamer.select_move(deadline()) == "(left)"
