"""Tests for Match records and Game loading."""

import pytest
import yaml
from pydantic import ValidationError

from ggp.games import RACE
from ggp.match import Game, Match, load_game_file


def create_match() -> Match:
    return Match(game=RACE)


class TestMatchHistory:
    """Tests for the append-only move and state logs."""

    def test_empty_match(self):
        match = create_match()
        assert match.get_move_history() == []
        assert match.get_state_history() == []
        assert match.get_most_recent_moves() is None
        assert not match.is_completed

    def test_most_recent_moves(self):
        match = create_match()
        match.append_moves(["(step)", "(leap)"])
        match.append_moves(["(leap)", "(step)"])
        assert match.get_most_recent_moves() == ["(leap)", "(step)"]
        assert len(match.get_move_history()) == 2

    def test_empty_joint_move_rejected(self):
        match = create_match()
        with pytest.raises(ValueError):
            match.append_moves([])

    def test_history_is_copied(self):
        match = create_match()
        match.append_moves(["(step)", "(step)"])
        match.get_move_history()[0].append("(leap)")
        match.get_most_recent_moves().clear()
        assert match.move_history == [["(step)", "(step)"]]

    def test_append_state(self):
        match = create_match()
        match.append_state(frozenset({"(pos white 0)"}))
        assert match.get_state_history() == [frozenset({"(pos white 0)"})]

    def test_mark_completed(self):
        match = create_match()
        match.mark_completed({"white": 100, "black": 0})
        assert match.is_completed
        assert match.goal_values == {"white": 100, "black": 0}


class TestMatchSerialization:
    """Tests for YAML output."""

    def test_yaml_sorted_states(self):
        match = create_match()
        match.append_state(frozenset({"b", "a"}))
        data = yaml.safe_load(match.to_yaml())
        assert data["state_history"] == [["a", "b"]]
        assert data["game"]["key"] == "race"

    def test_save_and_load(self, tmp_path):
        match = create_match()
        match.append_state(frozenset(RACE.rules.init))
        match.append_moves(["(step)", "(leap)"])
        match.mark_completed({"white": 0, "black": 100})

        path = tmp_path / "match.yaml"
        match.save_to_file(str(path))
        loaded = Match.load_from_file(str(path))

        assert loaded.match_id == match.match_id
        assert loaded.move_history == match.move_history
        assert loaded.state_history == match.state_history
        assert loaded.goal_values == match.goal_values
        assert loaded.game.rules == RACE.rules


class TestGameLoading:
    """Tests for loading games from YAML files."""

    def test_load_game(self, tmp_path):
        path = tmp_path / "button.yaml"
        path.write_text(
            "name: Button\n"
            "rules:\n"
            "  roles: [robot]\n"
            "  init: ['(off)']\n"
            "  moves:\n"
            "    - role: robot\n"
            "      action: '(press)'\n"
            "      requires: ['(off)']\n"
            "      removes: ['(off)']\n"
            "      adds: ['(on)']\n"
            "  terminal: [['(on)']]\n"
            "  goals:\n"
            "    - role: robot\n"
            "      value: 100\n",
            encoding="utf-8",
        )
        game = load_game_file(path)
        assert game.key == "button"
        assert str(game) == "Button"
        assert game.rules.roles == ["robot"]
        assert game.rules.moves[0].adds == ["(on)"]

    def test_round_trip_builtin(self, tmp_path):
        path = tmp_path / "race.yaml"
        path.write_text(RACE.to_yaml(), encoding="utf-8")
        assert load_game_file(path) == RACE

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_game_file(path)

    def test_invalid_rules(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("rules:\n  roles: [a, a]\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_game_file(path)

    def test_game_str_defaults_to_key(self):
        assert str(Game(key="solo", rules={"roles": ["solo"]})) == "solo"
