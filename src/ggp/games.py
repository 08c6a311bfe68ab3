"""Built-in games.

Both games are generated in Python rather than written out by hand. Any
other game can be loaded from YAML with ggp.match.load_game_file().
"""

from ggp.match import Game
from ggp.statemachine.rules import GameRules, GoalRule, MoveRule


# ============================================================================
# Race
# ============================================================================

RACE_LENGTH = 4


def _race_rules() -> GameRules:
    """Two runners move simultaneously. Each may leap (two squares) once."""
    roles = ["white", "black"]
    moves: list[MoveRule] = []
    for role in roles:
        for pos in range(RACE_LENGTH):
            moves.append(MoveRule(
                role=role,
                action="(step)",
                requires=[f"(pos {role} {pos})"],
                removes=[f"(pos {role} {pos})"],
                adds=[f"(pos {role} {pos + 1})"],
            ))
        for pos in range(RACE_LENGTH):
            moves.append(MoveRule(
                role=role,
                action="(leap)",
                requires=[f"(pos {role} {pos})", f"(leap {role})"],
                removes=[f"(pos {role} {pos})", f"(leap {role})"],
                adds=[f"(pos {role} {min(pos + 2, RACE_LENGTH)})"],
            ))

    goals: list[GoalRule] = []
    for role, other in (("white", "black"), ("black", "white")):
        mine, theirs = f"(pos {role} {RACE_LENGTH})", f"(pos {other} {RACE_LENGTH})"
        goals.append(GoalRule(role=role, value=50, when=[mine, theirs]))
        goals.append(GoalRule(role=role, value=100, when=[mine]))
        goals.append(GoalRule(role=role, value=0, when=[]))

    return GameRules(
        roles=roles,
        init=["(pos white 0)", "(pos black 0)", "(leap white)", "(leap black)"],
        moves=moves,
        terminal=[[f"(pos {role} {RACE_LENGTH})"] for role in roles],
        goals=goals,
    )


RACE = Game(key="race", name="Race", rules=_race_rules())


# ============================================================================
# Tic-tac-toe
# ============================================================================

BOARD_SIZE = 3


def _lines() -> list[list[tuple[int, int]]]:
    cells = range(1, BOARD_SIZE + 1)
    lines = [[(r, c) for c in cells] for r in cells]
    lines += [[(r, c) for r in cells] for c in cells]
    lines.append([(i, i) for i in cells])
    lines.append([(i, BOARD_SIZE + 1 - i) for i in cells])
    return lines


def _tic_tac_toe_rules() -> GameRules:
    """Alternating play. The turn counter doubles as the control token."""
    roles = ["xplayer", "oplayer"]
    marks = {"xplayer": "x", "oplayer": "o"}
    last_turn = BOARD_SIZE * BOARD_SIZE
    cells = [(r, c) for r in range(1, BOARD_SIZE + 1) for c in range(1, BOARD_SIZE + 1)]

    moves: list[MoveRule] = []
    for turn in range(1, last_turn + 1):
        mover = roles[(turn - 1) % 2]
        waiter = roles[turn % 2]
        for r, c in cells:
            moves.append(MoveRule(
                role=mover,
                action=f"(mark {r} {c})",
                requires=[f"(cell {r} {c} b)", f"(turn {turn})"],
                removes=[f"(cell {r} {c} b)", f"(turn {turn})"],
                adds=[f"(cell {r} {c} {marks[mover]})", f"(turn {turn + 1})"],
            ))
        moves.append(MoveRule(role=waiter, action="noop", requires=[f"(turn {turn})"]))

    def line_facts(mark: str) -> list[list[str]]:
        return [[f"(cell {r} {c} {mark})" for r, c in line] for line in _lines()]

    terminal = line_facts("x") + line_facts("o") + [[f"(turn {last_turn + 1})"]]

    goals: list[GoalRule] = []
    for role, other in (("xplayer", "oplayer"), ("oplayer", "xplayer")):
        goals += [GoalRule(role=role, value=100, when=facts) for facts in line_facts(marks[role])]
        goals += [GoalRule(role=role, value=0, when=facts) for facts in line_facts(marks[other])]
        goals.append(GoalRule(role=role, value=50, when=[]))

    return GameRules(
        roles=roles,
        init=[f"(cell {r} {c} b)" for r, c in cells] + ["(turn 1)"],
        moves=moves,
        terminal=terminal,
        goals=goals,
    )


TIC_TAC_TOE = Game(key="tictactoe", name="Tic-tac-toe", rules=_tic_tac_toe_rules())


BUILTIN_GAMES: dict[str, Game] = {
    RACE.key: RACE,
    TIC_TAC_TOE.key: TIC_TAC_TOE,
}
