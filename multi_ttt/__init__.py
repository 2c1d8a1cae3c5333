"""Tic-Tac-Toe for 2-4 players on 3x3 and 4x4 grids with heuristic AI opponents."""
from .ai import find_blocking_move, find_winning_move, select_move
from .arena import Arena, ArenaResult
from .config import ConfigError, GameConfig, load_config
from .game import (
    GameResult,
    InvalidMoveError,
    evaluate,
    generate_lines,
    grid_size_for_players,
)
from .players import Difficulty, Player, PlayerSettings, create_players
from .session import GameSession, GameState, PendingAIMove, apply_move, new_game, restart

__all__ = [
    "Arena",
    "ArenaResult",
    "ConfigError",
    "Difficulty",
    "GameConfig",
    "GameResult",
    "GameSession",
    "GameState",
    "InvalidMoveError",
    "PendingAIMove",
    "Player",
    "PlayerSettings",
    "apply_move",
    "create_players",
    "evaluate",
    "find_blocking_move",
    "find_winning_move",
    "generate_lines",
    "grid_size_for_players",
    "load_config",
    "new_game",
    "restart",
    "select_move",
]
