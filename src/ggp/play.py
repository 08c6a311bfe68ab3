#!/usr/bin/env python
"""Play a local match between state-machine gamers.

Usage:
    ggp-play                                   # Race, random vs random
    ggp-play --game tictactoe --players legal montecarlo
    ggp-play --game my_game.yaml --seed 42     # Game loaded from YAML
    ggp-play --switch-at 2                     # Switch every gamer to a cached machine on turn 2
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ggp.games import BUILTIN_GAMES
from ggp.gamer import (
    Gamer,
    GamerError,
    LegalGamer,
    MonteCarloGamer,
    RandomGamer,
    StateMachineGamer,
)
from ggp.match import Game, Match, load_game_file
from ggp.statemachine import (
    CachedStateMachine,
    Role,
    RuleStateMachine,
    StateMachineError,
    get_goals,
)

logger = logging.getLogger(__name__)

# Maximum number of turns before a match is aborted (prevent infinite games)
MAX_MATCH_TURNS = 200

GAMER_KINDS = ("legal", "random", "montecarlo")


class MatchAbortedError(Exception):
    """Raised when a match does not reach a terminal state in time."""

    pass


class MatchConfig(BaseModel):
    """Settings of one local match."""

    seed: Optional[int] = None
    start_clock: float = Field(default=10.0, gt=0)  # seconds
    play_clock: float = Field(default=5.0, gt=0)  # seconds
    switch_at: Optional[int] = Field(default=None, ge=1)
    max_turns: int = Field(default=MAX_MATCH_TURNS, ge=1)


class MatchResult(BaseModel):
    """Outcome of a local match."""

    game_key: str
    goals: dict[str, int]
    turns: int
    move_history: list[list[str]]
    switched: dict[str, bool] = Field(default_factory=dict)


def create_gamer(kind: str, seed: Optional[int] = None) -> StateMachineGamer:
    """Create a gamer by kind name ("legal", "random" or "montecarlo")."""
    if kind == "legal":
        return LegalGamer()
    if kind == "random":
        return RandomGamer(seed=seed)
    if kind == "montecarlo":
        return MonteCarloGamer(seed=seed)
    raise ValueError(f"Unknown gamer kind {kind!r}, expected one of {GAMER_KINDS}")


def resolve_game(name: str) -> Game:
    """Return a built-in game by key, or load a game from a YAML path."""
    if name in BUILTIN_GAMES:
        return BUILTIN_GAMES[name]
    path = Path(name)
    if path.exists():
        return load_game_file(path)
    raise ValueError(f"Unknown game {name!r}: not a built-in ({', '.join(BUILTIN_GAMES)}) nor a file")


def run_match(game: Game, gamers: list[Gamer], config: Optional[MatchConfig] = None) -> MatchResult:
    """Play a full match.

    A referee machine tracks the authoritative state. Every gamer gets its
    own Match record; after each turn the joint move is appended to all of
    them, and the gamers catch up on their next select_move().

    If `config.switch_at` is N, every StateMachineGamer is switched to a
    fresh CachedStateMachine on turn N, after it selected its move.

    Args:
        game: The game to play.
        gamers: One gamer per role, in role order.
        config: Match settings (defaults to MatchConfig()).

    Returns:
        MatchResult with the final goal values.

    Raises:
        MetaGamingError, MoveSelectionError: If a gamer fails.
        MoveDefinitionError, TransitionDefinitionError: If a gamer selects an
            unknown or illegal move.
        MatchAbortedError: If the game is not over after `max_turns` turns.
    """
    config = config or MatchConfig()

    referee = RuleStateMachine()
    referee.initialize(game.rules)
    roles = referee.get_roles()
    if len(gamers) != len(roles):
        raise ValueError(f"{game} needs {len(roles)} gamers, got {len(gamers)}")

    for role, gamer in zip(roles, gamers):
        match = Match(game=game, start_clock=config.start_clock, play_clock=config.play_clock)
        gamer.set_match(match)
        gamer.set_role_name(role.name)
        gamer.meta_game(time.monotonic() + config.start_clock)

    switched: dict[str, bool] = {}
    state = referee.get_initial_state()
    turn = 0
    while not referee.is_terminal(state):
        if turn >= config.max_turns:
            raise MatchAbortedError(f"{game} not over after {turn} turns")
        turn += 1

        deadline = time.monotonic() + config.play_clock
        joint_move = [gamer.select_move(deadline) for gamer in gamers]
        logger.debug("Turn %d: %s", turn, joint_move)

        if config.switch_at == turn:
            switched = _switch_state_machines(game, roles, gamers)

        moves = [referee.get_move_from_contents(contents) for contents in joint_move]
        state = referee.get_next_state(state, moves)
        for gamer in gamers:
            gamer.match.append_moves(joint_move)

    goals = get_goals(referee, state)
    for gamer in gamers:
        gamer.match.mark_completed(goals)

    return MatchResult(
        game_key=game.key,
        goals=goals,
        turns=turn,
        move_history=gamers[0].match.get_move_history(),
        switched=switched,
    )


def _switch_state_machines(game: Game, roles: list[Role], gamers: list[Gamer]) -> dict[str, bool]:
    """Move every StateMachineGamer onto a fresh cached machine."""
    switched = {}
    for role, gamer in zip(roles, gamers):
        if not isinstance(gamer, StateMachineGamer):
            continue
        machine = CachedStateMachine(RuleStateMachine())
        machine.initialize(game.rules)
        switched[role.name] = gamer.switch_state_machine(machine)
    return switched


def print_result(console: Console, result: MatchResult) -> None:
    table = Table(title=f"{result.game_key} - {result.turns} turns")
    table.add_column("Role")
    table.add_column("Goal", justify="right")
    for role, goal in result.goals.items():
        table.add_row(role, str(goal))
    console.print(table)

    if result.switched:
        lines = [f"{role}: {'ok' if ok else 'kept old machine'}" for role, ok in result.switched.items()]
        console.print(Panel("\n".join(lines), title="State machine switch"))


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Play a local general game playing match",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--game",
        type=str,
        default="race",
        help=f"Built-in game ({', '.join(BUILTIN_GAMES)}) or path to a YAML game file"
    )
    parser.add_argument(
        "--players",
        nargs="+",
        choices=GAMER_KINDS,
        default=None,
        help="Gamer kind per role, in role order (default: random for every role)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible matches"
    )
    parser.add_argument(
        "--start-clock",
        type=float,
        default=10.0,
        help="Seconds of metagaming (default: 10)"
    )
    parser.add_argument(
        "--play-clock",
        type=float,
        default=5.0,
        help="Seconds per move (default: 5)"
    )
    parser.add_argument(
        "--switch-at",
        type=int,
        default=None,
        help="Switch every gamer to a cached state machine on this turn"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="",
        help="File to save the match record to as YAML (default: disabled)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(name)s: %(message)s",
    )

    console = Console()

    if args.seed is None:
        args.seed = random.randint(1, 1000000)

    try:
        game = resolve_game(args.game)
        config = MatchConfig(
            seed=args.seed,
            start_clock=args.start_clock,
            play_clock=args.play_clock,
            switch_at=args.switch_at,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    role_count = len(game.rules.roles)
    kinds = args.players or ["random"] * role_count
    if len(kinds) != role_count:
        console.print(f"[red]Error: {game} needs {role_count} players, got {len(kinds)}[/red]")
        return 1

    gamers = [create_gamer(kind, seed=config.seed + i) for i, kind in enumerate(kinds)]

    console.print(f"\n[bold]Playing {game} (seed {config.seed})...[/bold]\n")
    try:
        result = run_match(game, gamers, config)
    except (GamerError, StateMachineError, MatchAbortedError) as e:
        console.print(f"[red]Match failed: {e}[/red]")
        return 1

    print_result(console, result)

    if args.log_file:
        try:
            gamers[0].match.save_to_file(args.log_file)
            console.print(f"Match record saved to {args.log_file}")
        except OSError as e:
            console.print(f"[red]Failed to save match record: {e}[/red]")

    return 0


if __name__ == "__main__":
    sys.exit(main())
