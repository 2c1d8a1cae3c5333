"""Board representation and win detection for multi-player Tic-Tac-Toe.

The board is a flat sequence of ``grid_size * grid_size`` cells in row-major
order.  Each cell is either ``None`` (empty) or the symbol of the player who
occupies it.  A player wins by owning three consecutive cells in a row, a
column or either diagonal direction; on a 4x4 grid several such runs fit on
each row, column and diagonal.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

Symbol = str
Cell = Optional[Symbol]
Board = Sequence[Cell]
Line = Tuple[int, int, int]

EMPTY: Cell = None
RUN_LENGTH = 3
SUPPORTED_GRID_SIZES: Tuple[int, ...] = (3, 4)


class InvalidMoveError(RuntimeError):
    """Raised when a move is attempted that is not legal in the current state."""


@dataclass(frozen=True)
class GameResult:
    """Terminal verdict of a board: a winner with its line, or a draw."""

    winner: Optional[Symbol] = None
    line: Optional[Line] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


def grid_size_for_players(num_players: int) -> int:
    return 3 if num_players == 2 else 4


def total_cells(grid_size: int) -> int:
    return grid_size * grid_size


def new_board(grid_size: int) -> Tuple[Cell, ...]:
    if grid_size not in SUPPORTED_GRID_SIZES:
        raise ValueError(f"grid_size must be one of {SUPPORTED_GRID_SIZES}, got {grid_size}")
    return (EMPTY,) * total_cells(grid_size)


@lru_cache(maxsize=None)
def generate_lines(grid_size: int) -> Tuple[Line, ...]:
    """Return every run of three consecutive cells on a ``grid_size`` grid.

    Lines are ordered horizontal, vertical, down-right diagonal and then
    down-left diagonal; :func:`evaluate` relies on this order when reporting
    the winning line.
    """

    n = grid_size
    last_start = n - RUN_LENGTH
    lines: List[Line] = []

    for row in range(n):
        for col in range(last_start + 1):
            start = row * n + col
            lines.append((start, start + 1, start + 2))

    for col in range(n):
        for row in range(last_start + 1):
            lines.append((row * n + col, (row + 1) * n + col, (row + 2) * n + col))

    for row in range(last_start + 1):
        for col in range(last_start + 1):
            lines.append(
                (row * n + col, (row + 1) * n + col + 1, (row + 2) * n + col + 2)
            )

    for row in range(last_start + 1):
        for col in range(RUN_LENGTH - 1, n):
            lines.append(
                (row * n + col, (row + 1) * n + col - 1, (row + 2) * n + col - 2)
            )

    return tuple(lines)


def evaluate(board: Board, grid_size: int) -> Optional[GameResult]:
    """Return the verdict for ``board`` or ``None`` while the game continues.

    The first line (in :func:`generate_lines` order) held by a single player
    wins.  A full board without such a line is a draw.
    """

    for line in generate_lines(grid_size):
        a, b, c = line
        if board[a] is not EMPTY and board[a] == board[b] == board[c]:
            return GameResult(winner=board[a], line=line)

    if all(cell is not EMPTY for cell in board):
        return GameResult()
    return None


def legal_move_mask(board: Board) -> np.ndarray:
    """Return a boolean mask over the board cells that are still free."""

    return np.fromiter((cell is EMPTY for cell in board), dtype=bool, count=len(board))


def empty_cells(board: Board) -> List[int]:
    """Indices of the free cells in ascending order."""

    return np.flatnonzero(legal_move_mask(board)).tolist()


def place(board: Board, index: int, symbol: Symbol) -> Tuple[Cell, ...]:
    """Return a copy of ``board`` with ``symbol`` written at ``index``."""

    cells = list(board)
    cells[index] = symbol
    return tuple(cells)


def render_ascii(board: Board, grid_size: int) -> str:
    def cell_value(idx: int) -> str:
        value = board[idx]
        return value if value is not EMPTY else "."

    rows: List[str] = []
    for row in range(grid_size):
        start = row * grid_size
        rows.append(" ".join(cell_value(start + offset) for offset in range(grid_size)))
    return "\n".join(rows)
