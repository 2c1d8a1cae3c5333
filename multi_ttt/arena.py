"""Evaluation arena pitting AI players against each other."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Sequence

import numpy as np

from .ai import select_move
from .game import Symbol
from .players import Player, validate_players
from .session import apply_move, new_game

__all__ = ["Arena", "ArenaResult"]


@dataclass
class ArenaResult:
    wins: Dict[Symbol, int] = field(default_factory=dict)
    draws: int = 0

    @property
    def total(self) -> int:
        return sum(self.wins.values()) + self.draws

    def win_rate(self, symbol: Symbol) -> float:
        return self.wins.get(symbol, 0) / self.total if self.total else 0.0


@dataclass
class Arena:
    players: Sequence[Player]
    rng: Optional[np.random.Generator] = None

    def __post_init__(self) -> None:
        validate_players(self.players)
        if self.rng is None:
            self.rng = np.random.default_rng()

    def play_matches(self, num_games: int = 100) -> ArenaResult:
        """Play ``num_games`` games, rotating which seat moves first."""

        results = ArenaResult(wins={player.symbol: 0 for player in self.players})
        seats = [replace(player, is_ai=True) for player in self.players]

        for game_index in range(num_games):
            offset = game_index % len(seats)
            state = new_game(seats[offset:] + seats[:offset])

            while not state.terminal:
                player = state.current_player
                move = select_move(
                    state.board,
                    player.symbol,
                    player.ai_difficulty,
                    state.players,
                    state.grid_size,
                    self.rng,
                )
                if move is None:
                    break
                state = apply_move(state, move)

            if state.result is None or state.result.winner is None:
                results.draws += 1
            else:
                results.wins[state.result.winner] += 1

        return results
