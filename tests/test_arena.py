import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from multi_ttt.arena import Arena, ArenaResult
from multi_ttt.players import Difficulty, PlayerSettings, create_players


def test_totals_match_number_of_games():
    players = create_players(2)
    result = Arena(players, rng=np.random.default_rng(0)).play_matches(30)
    assert result.total == 30
    assert set(result.wins) == {"X", "O"}


def test_four_player_arena():
    settings = {i: PlayerSettings(is_ai=True, ai_difficulty=Difficulty.HARD) for i in range(4)}
    result = Arena(create_players(4, settings), rng=np.random.default_rng(1)).play_matches(12)
    assert result.total == 12
    assert set(result.wins) == {"X", "O", "□", "△"}


def test_hard_beats_easy():
    settings = {
        0: PlayerSettings(is_ai=True, ai_difficulty=Difficulty.HARD),
        1: PlayerSettings(is_ai=True, ai_difficulty=Difficulty.EASY),
    }
    result = Arena(create_players(2, settings), rng=np.random.default_rng(2)).play_matches(200)
    assert result.wins["X"] > result.wins["O"]


def test_seeded_arena_is_reproducible():
    players = create_players(3)
    first = Arena(players, rng=np.random.default_rng(9)).play_matches(10)
    second = Arena(players, rng=np.random.default_rng(9)).play_matches(10)
    assert first == second


def test_win_rate():
    result = ArenaResult(wins={"X": 3, "O": 1}, draws=4)
    assert result.total == 8
    assert result.win_rate("X") == 0.375
    assert ArenaResult().win_rate("X") == 0.0
