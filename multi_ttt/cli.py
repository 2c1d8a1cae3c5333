"""Console front end: play a game in the terminal or run an AI arena."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

import numpy as np

from .arena import Arena
from .config import ConfigError, GameConfig, load_config
from .game import InvalidMoveError, render_ascii
from .players import Difficulty, PlayerSettings
from .session import GameSession, GameState

__all__ = ["main"]


def _parse_ai_seat(value: str) -> Tuple[int, Difficulty]:
    seat, _, difficulty = value.partition(":")
    try:
        index = int(seat)
        level = Difficulty.parse(difficulty or Difficulty.MEDIUM)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected SEAT[:DIFFICULTY] such as 2:hard, got {value!r}"
        ) from exc
    if index < 1:
        raise argparse.ArgumentTypeError(f"seats are numbered from 1, got {index}")
    return index - 1, level


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="YAML game configuration")
    parser.add_argument("--players", type=int, default=None, help="Number of players (2-4)")
    parser.add_argument(
        "--ai",
        type=_parse_ai_seat,
        action="append",
        default=[],
        metavar="SEAT[:DIFFICULTY]",
        help="Make a seat computer-controlled, e.g. --ai 2:hard (repeatable)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe for 2-4 players with AI opponents")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    play = subparsers.add_parser("play", help="Play a game in the terminal")
    _add_common_arguments(play)
    play.add_argument("--delay", type=float, default=None, help="Seconds before each AI move")

    arena = subparsers.add_parser("arena", help="Let AI players play each other")
    _add_common_arguments(arena)
    arena.add_argument("--games", type=int, default=100, help="Number of games to play")
    return parser


def resolve_config(args: argparse.Namespace) -> GameConfig:
    """Load the configuration file and apply command-line overrides."""

    config = load_config(args.config)
    if args.players is not None and args.players != config.num_players:
        seats = {i: s for i, s in config.players.items() if i < args.players}
        config = GameConfig.from_mapping(
            {"num_players": args.players, "ai_delay": config.ai_delay, "seed": config.seed}
        )
        config.players.update(seats)
    for index, difficulty in args.ai:
        if index >= config.num_players:
            raise ConfigError(
                f"seat {index + 1} does not exist in a {config.num_players}-player game"
            )
        config.players[index] = PlayerSettings(is_ai=True, ai_difficulty=difficulty)
    if args.seed is not None:
        config.seed = args.seed
    if getattr(args, "delay", None) is not None:
        if args.delay < 0:
            raise ConfigError("--delay must be non-negative")
        config.ai_delay = args.delay
    return config


def _print_state(state: GameState) -> None:
    print()
    print(render_ascii(state.board, state.grid_size))
    print()


def _prompt_move(state: GameState) -> Optional[int]:
    player = state.current_player
    cells = len(state.board)
    while True:
        try:
            raw = input(
                f"{player.name} ({player.symbol}), choose a cell 1-{cells} (q to quit): "
            ).strip()
        except EOFError:
            print()
            return None
        if raw.lower() in {"q", "quit"}:
            return None
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if not 0 <= index < cells or state.board[index] is not None:
            print("That cell is not available.")
            continue
        return index


def run_play(config: GameConfig) -> int:
    session = GameSession(
        config.build_players(),
        ai_delay=config.ai_delay,
        rng=np.random.default_rng(config.seed),
    )
    names = ", ".join(f"{p.name} [{p.symbol}]" for p in session.state.players)
    print(f"{session.state.grid_size}x{session.state.grid_size} game: {names}")

    while not session.state.terminal:
        _print_state(session.state)
        if session.ai_to_move:
            player = session.state.current_player
            print(f"{player.name} is thinking...")
            session.step_ai()
            continue
        index = _prompt_move(session.state)
        if index is None:
            print("Game abandoned.")
            return 0
        try:
            session.play(index)
        except InvalidMoveError as exc:
            print(exc)

    _print_state(session.state)
    winner = session.state.winner
    if winner is not None:
        print(f"{winner.name} ({winner.symbol}) wins!")
    else:
        print("It's a draw!")
    return 0


def run_arena(config: GameConfig, games: int) -> int:
    players = config.build_players()
    arena = Arena(players, rng=np.random.default_rng(config.seed))
    result = arena.play_matches(games)
    print(f"Arena: {result.total} games")
    for player in players:
        print(
            f"  {player.symbol} ({player.ai_difficulty}): "
            f"{result.wins[player.symbol]} wins ({result.win_rate(player.symbol):.0%})"
        )
    print(f"  draws: {result.draws}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "arena":
        if args.games < 1:
            print("error: --games must be at least 1", file=sys.stderr)
            return 2
        return run_arena(config, args.games)
    return run_play(config)


if __name__ == "__main__":
    sys.exit(main())
