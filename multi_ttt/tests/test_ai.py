from __future__ import annotations

import numpy as np
import pytest

from multi_ttt import ai
from multi_ttt.ai import (
    CENTER_CELLS,
    CORNER_CELLS,
    find_blocking_move,
    find_winning_move,
    select_move,
)
from multi_ttt.game import new_board
from multi_ttt.players import Difficulty, create_players

X, O, S, T = "X", "O", "□", "△"
_ = None

TWO = create_players(2)
THREE = create_players(3)
FOUR = create_players(4)


def board_4x4(**cells: str) -> list:
    board = list(new_board(4))
    for key, symbol in cells.items():
        board[int(key[1:])] = symbol
    return board


@pytest.mark.parametrize("difficulty", ["medium", "hard", Difficulty.MEDIUM, Difficulty.HARD])
@pytest.mark.parametrize("seed", range(10))
def test_takes_immediate_win(difficulty, seed: int) -> None:
    board = [O, O, _, X, X, _, _, _, _]
    rng = np.random.default_rng(seed)
    assert select_move(board, O, difficulty, TWO, 3, rng) == 2


def test_prefers_own_win_over_block() -> None:
    board = [X, X, _, O, O, _, _, _, _]
    assert select_move(board, O, "hard", TWO, 3, np.random.default_rng(0)) == 5


def test_first_winning_cell_in_index_order() -> None:
    board = [O, O, _, _, O, _, _, _, X]
    assert find_winning_move(board, O, 3) == 2


@pytest.mark.parametrize("difficulty", ["medium", "hard"])
@pytest.mark.parametrize("seed", range(10))
def test_blocks_opponent_threat(difficulty: str, seed: int) -> None:
    board = [X, X, _, _, O, _, _, _, _]
    assert select_move(board, O, difficulty, TWO, 3, np.random.default_rng(seed)) == 2


def test_blocks_first_opponent_in_roster_order() -> None:
    # O threatens 6 and □ threatens 12 and 15; O is earlier in the roster.
    board = board_4x4(c4=O, c5=O, c13=S, c14=S, c0=T)
    assert find_blocking_move(board, T, FOUR, 4) == 6
    assert select_move(board, T, "medium", FOUR, 4, np.random.default_rng(1)) == 6


def test_block_ignores_own_symbol() -> None:
    board = [X, X, _, _, _, _, _, _, _]
    assert find_blocking_move(board, X, TWO, 3) is None


@pytest.mark.parametrize("seed", range(20))
def test_hard_prefers_center_on_four_by_four(seed: int) -> None:
    board = board_4x4(c5=X, c0=O, c15=S)
    move = select_move(board, S, "hard", THREE, 4, np.random.default_rng(seed))
    assert move in {6, 9, 10}


def test_hard_takes_center_on_three_by_three() -> None:
    board = [X, _, _, _, _, _, _, _, _]
    assert select_move(board, O, Difficulty.HARD, TWO, 3, np.random.default_rng(3)) == 4


@pytest.mark.parametrize("seed", range(10))
def test_hard_falls_back_to_corners(seed: int) -> None:
    board = [_, X, _, _, O, _, _, _, _]
    move = select_move(board, X, "hard", TWO, 3, np.random.default_rng(seed))
    assert move in CORNER_CELLS[3]


def test_hard_falls_back_to_any_cell() -> None:
    board = board_4x4(c0=X, c3=O, c12=O, c15=X, c5=S, c6=X, c9=O, c10=S)
    free = {1, 2, 4, 7, 8, 11, 13, 14}
    rng = np.random.default_rng(11)
    picks = {select_move(board, S, "hard", THREE, 4, rng) for _ in range(100)}
    assert picks <= free
    assert len(picks) > 1


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_single_free_cell_is_always_chosen(difficulty: Difficulty) -> None:
    board = [X, O, X, X, O, O, O, X, _]
    for seed in range(5):
        assert select_move(board, X, difficulty, TWO, 3, np.random.default_rng(seed)) == 8


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_full_board_returns_none(difficulty: Difficulty) -> None:
    board = [X, O, X, O, X, O, O, X, O]
    assert select_move(board, X, difficulty, TWO, 3) is None


def test_easy_only_picks_free_cells() -> None:
    board = [X, _, O, _, X, _, O, _, _]
    free = {1, 3, 5, 7, 8}
    rng = np.random.default_rng(42)
    picks = {select_move(board, O, "easy", TWO, 3, rng) for _ in range(200)}
    assert picks == free


def test_easy_does_not_take_obvious_win_every_time() -> None:
    board = [O, O, _, X, X, _, _, _, _]
    rng = np.random.default_rng(7)
    picks = {select_move(board, O, "easy", TWO, 3, rng) for _ in range(100)}
    assert len(picks) > 1


def test_selection_does_not_mutate_board() -> None:
    board = [X, X, _, _, O, _, _, _, _]
    snapshot = list(board)
    select_move(board, O, "hard", TWO, 3, np.random.default_rng(0))
    assert board == snapshot


def test_seeded_generator_is_reproducible() -> None:
    board = list(new_board(4))
    first = [select_move(board, X, "easy", FOUR, 4, np.random.default_rng(5)) for _ in range(3)]
    second = [select_move(board, X, "easy", FOUR, 4, np.random.default_rng(5)) for _ in range(3)]
    assert first == second


def test_unknown_difficulty_raises() -> None:
    with pytest.raises(ValueError):
        select_move(list(new_board(3)), X, "impossible", TWO, 3)


def test_missing_entropy_falls_back_to_first_candidate(monkeypatch) -> None:
    def no_entropy():
        raise OSError("no entropy")

    monkeypatch.setattr(ai.np.random, "default_rng", no_entropy)
    board = [X, _, _, _, _, _, _, _, _]
    assert select_move(board, O, "easy", TWO, 3) == 1
    assert select_move(board, O, "hard", TWO, 3) == CENTER_CELLS[3][0]
