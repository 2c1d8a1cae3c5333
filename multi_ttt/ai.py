"""Heuristic computer opponents for multi-player Tic-Tac-Toe.

Every difficulty tier looks at most one move ahead.  Medium and hard take an
immediate win when one exists and otherwise block the first immediate threat
found among the opponents (in roster order).  Hard then prefers the centre
cells and the corners.  None of the tiers search the game tree, so they do not
play perfectly, in particular against several simultaneous threats.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

from .game import Board, Symbol, empty_cells, evaluate, place
from .players import Difficulty, Player, opponents

__all__ = [
    "CENTER_CELLS",
    "CORNER_CELLS",
    "EasyStrategy",
    "HardStrategy",
    "MediumStrategy",
    "STRATEGIES",
    "find_blocking_move",
    "find_winning_move",
    "select_move",
]

logger = logging.getLogger(__name__)

CENTER_CELLS: Dict[int, Tuple[int, ...]] = {3: (4,), 4: (5, 6, 9, 10)}
CORNER_CELLS: Dict[int, Tuple[int, ...]] = {3: (0, 2, 6, 8), 4: (0, 3, 12, 15)}


def _default_rng() -> Optional[np.random.Generator]:
    try:
        return np.random.default_rng()
    except OSError as exc:
        logger.warning("No entropy source for the AI (%s); using first free cell", exc)
        return None


def _pick(cells: Sequence[int], rng: Optional[np.random.Generator]) -> int:
    """Uniform choice among ``cells``; the first cell when there is no generator."""

    if rng is None or len(cells) == 1:
        return cells[0]
    return int(cells[int(rng.integers(len(cells)))])


def find_winning_move(board: Board, symbol: Symbol, grid_size: int) -> Optional[int]:
    """Return the lowest free cell that completes a line for ``symbol``."""

    for index in empty_cells(board):
        result = evaluate(place(board, index, symbol), grid_size)
        if result is not None and result.winner == symbol:
            return index
    return None


def find_blocking_move(
    board: Board, symbol: Symbol, players: Sequence[Player], grid_size: int
) -> Optional[int]:
    """Return the cell that stops the first opponent able to win next move.

    Opponents are checked in roster order and only one threat is answered.
    """

    for opponent in opponents(players, symbol):
        move = find_winning_move(board, opponent.symbol, grid_size)
        if move is not None:
            return move
    return None


class EasyStrategy:
    """Plays a uniformly random free cell."""

    difficulty = Difficulty.EASY

    def select(
        self,
        board: Board,
        symbol: Symbol,
        players: Sequence[Player],
        grid_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> Optional[int]:
        cells = empty_cells(board)
        if not cells:
            return None
        move = self._tactical_move(board, symbol, players, grid_size)
        if move is None:
            if rng is None:
                rng = _default_rng()
            move = self._positional_move(cells, grid_size, rng)
        logger.debug("%s AI (%s) picks cell %d", self.difficulty, symbol, move)
        return move

    def _tactical_move(
        self, board: Board, symbol: Symbol, players: Sequence[Player], grid_size: int
    ) -> Optional[int]:
        return None

    def _positional_move(
        self, cells: Sequence[int], grid_size: int, rng: Optional[np.random.Generator]
    ) -> int:
        return _pick(cells, rng)


class MediumStrategy(EasyStrategy):
    """Wins when possible, otherwise blocks, otherwise plays randomly."""

    difficulty = Difficulty.MEDIUM

    def _tactical_move(
        self, board: Board, symbol: Symbol, players: Sequence[Player], grid_size: int
    ) -> Optional[int]:
        move = find_winning_move(board, symbol, grid_size)
        if move is not None:
            logger.debug("%s can win at %d", symbol, move)
            return move
        move = find_blocking_move(board, symbol, players, grid_size)
        if move is not None:
            logger.debug("%s blocks at %d", symbol, move)
        return move


class HardStrategy(MediumStrategy):
    """Medium tactics, then centre cells, then corners, then anything."""

    difficulty = Difficulty.HARD

    def _positional_move(
        self, cells: Sequence[int], grid_size: int, rng: Optional[np.random.Generator]
    ) -> int:
        free = set(cells)
        for preferred in (CENTER_CELLS.get(grid_size, ()), CORNER_CELLS.get(grid_size, ())):
            available = [cell for cell in preferred if cell in free]
            if available:
                return _pick(available, rng)
        return _pick(cells, rng)


STRATEGIES: Dict[Difficulty, EasyStrategy] = {
    Difficulty.EASY: EasyStrategy(),
    Difficulty.MEDIUM: MediumStrategy(),
    Difficulty.HARD: HardStrategy(),
}


def select_move(
    board: Board,
    symbol: Symbol,
    difficulty: Union[Difficulty, str],
    players: Sequence[Player],
    grid_size: int,
    rng: Optional[np.random.Generator] = None,
) -> Optional[int]:
    """Return the cell the AI playing ``symbol`` chooses, or ``None`` if the board is full.

    ``difficulty`` may be a :class:`Difficulty` or its name; unknown names raise
    ``ValueError``.  The board is never modified.
    """

    strategy = STRATEGIES[Difficulty.parse(difficulty)]
    return strategy.select(board, symbol, players, grid_size, rng)
