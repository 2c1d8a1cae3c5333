"""Immutable game state and the session controller driving a single game.

A :class:`GameState` is never modified; every move or restart produces a new
value.  :class:`GameSession` keeps the live state for a front end and hands out
AI moves as :class:`PendingAIMove` tokens that are only applied if the game has
not moved on (or been restarted) in the meantime.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .ai import select_move
from .game import (
    Cell,
    GameResult,
    InvalidMoveError,
    evaluate,
    grid_size_for_players,
    new_board,
    place,
)
from .players import Player, validate_players

__all__ = [
    "GameSession",
    "GameState",
    "PendingAIMove",
    "apply_move",
    "new_game",
    "restart",
]

logger = logging.getLogger(__name__)

DEFAULT_AI_DELAY = 1.0


@dataclass(frozen=True)
class GameState:
    players: Tuple[Player, ...]
    grid_size: int
    board: Tuple[Cell, ...]
    turn_index: int = 0
    result: Optional[GameResult] = None
    generation: int = 0

    @property
    def terminal(self) -> bool:
        return self.result is not None

    @property
    def current_player(self) -> Player:
        return self.players[self.turn_index]

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or ``None`` while playing or after a draw."""

        if self.result is None or self.result.winner is None:
            return None
        for player in self.players:
            if player.symbol == self.result.winner:
                return player
        return None


def new_game(players: Sequence[Player]) -> GameState:
    validate_players(players)
    grid_size = grid_size_for_players(len(players))
    return GameState(players=tuple(players), grid_size=grid_size, board=new_board(grid_size))


def apply_move(state: GameState, index: int) -> GameState:
    """Place the current player's symbol at ``index`` and return the next state.

    The turn only advances when the move does not end the game.
    """

    if state.terminal:
        raise InvalidMoveError("Game has already finished")
    if not 0 <= index < len(state.board):
        raise InvalidMoveError(
            f"Cell {index} is outside the {state.grid_size}x{state.grid_size} board"
        )
    if state.board[index] is not None:
        raise InvalidMoveError(f"Cell {index} is already taken by {state.board[index]}")

    symbol = state.current_player.symbol
    board = place(state.board, index, symbol)
    result = evaluate(board, state.grid_size)
    if result is not None:
        logger.debug("%s played %d, game over: %s", symbol, index, result)
        return replace(state, board=board, result=result)

    next_turn = (state.turn_index + 1) % len(state.players)
    return replace(state, board=board, turn_index=next_turn)


def restart(state: GameState) -> GameState:
    return replace(
        state,
        board=new_board(state.grid_size),
        turn_index=0,
        result=None,
        generation=state.generation + 1,
    )


@dataclass(frozen=True)
class PendingAIMove:
    """An AI decision together with the snapshot it was computed against."""

    snapshot: GameState
    player: Player
    index: int


class GameSession:
    def __init__(
        self,
        players: Sequence[Player],
        ai_delay: float = DEFAULT_AI_DELAY,
        rng: Optional[np.random.Generator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if ai_delay < 0:
            raise ValueError("ai_delay must be non-negative")
        self.state = new_game(players)
        self.ai_delay = ai_delay
        self.rng = rng
        self._sleep = sleep

    @property
    def ai_to_move(self) -> bool:
        return not self.state.terminal and self.state.current_player.is_ai

    def play(self, index: int) -> GameState:
        """Apply a human move for the player whose turn it is."""

        if self.ai_to_move:
            raise InvalidMoveError(f"It is {self.state.current_player.name}'s turn")
        self.state = apply_move(self.state, index)
        return self.state

    def request_ai_move(self) -> Optional[PendingAIMove]:
        if not self.ai_to_move:
            return None
        snapshot = self.state
        player = snapshot.current_player
        index = select_move(
            snapshot.board,
            player.symbol,
            player.ai_difficulty,
            snapshot.players,
            snapshot.grid_size,
            self.rng,
        )
        if index is None:
            return None
        return PendingAIMove(snapshot=snapshot, player=player, index=index)

    def commit(self, pending: PendingAIMove) -> bool:
        """Apply ``pending`` if the live game still matches its snapshot."""

        if pending.snapshot != self.state:
            logger.info(
                "Discarding stale move %d for %s", pending.index, pending.player.name
            )
            return False
        self.state = apply_move(self.state, pending.index)
        return True

    def step_ai(self) -> bool:
        """Wait the configured delay, then let the current AI player move."""

        if not self.ai_to_move:
            return False
        if self.ai_delay:
            self._sleep(self.ai_delay)
        pending = self.request_ai_move()
        if pending is None:
            return False
        return self.commit(pending)

    def restart(self) -> GameState:
        self.state = restart(self.state)
        return self.state
