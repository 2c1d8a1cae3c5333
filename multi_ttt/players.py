"""Player roster: symbols, colours, names and AI settings."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .game import Symbol

MIN_PLAYERS = 2
MAX_PLAYERS = 4


class Difficulty(Enum):
    """AI strength tiers, each a superset of the one below it."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"unknown difficulty {value!r} (expected one of: {choices})")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Player:
    symbol: Symbol
    color: str
    name: str
    is_ai: bool = False
    ai_difficulty: Difficulty = Difficulty.MEDIUM


@dataclass(frozen=True)
class PlayerSettings:
    is_ai: bool = False
    ai_difficulty: Difficulty = Difficulty.MEDIUM


_X = Player(symbol="X", color="#3F7FBF", name="Player 1")
_O = Player(symbol="O", color="#BF3F3F", name="Player 2")
_SQUARE = Player(symbol="□", color="#2D5A2D", name="Player 3")
_TRIANGLE = Player(symbol="△", color="#D4AF37", name="Player 4")

BASE_PLAYERS: Dict[int, Tuple[Player, ...]] = {
    2: (_X, _O),
    3: (_X, _O, _SQUARE),
    4: (_X, _O, _SQUARE, _TRIANGLE),
}


def initialize_player_settings(num_players: int) -> Dict[int, PlayerSettings]:
    return {index: PlayerSettings() for index in range(num_players)}


def create_players(
    num_players: int,
    settings: Optional[Mapping[int, PlayerSettings]] = None,
) -> List[Player]:
    """Apply per-seat human/AI settings to the default roster for ``num_players``.

    Seats without an entry in ``settings`` are human.  AI seats are renamed to
    show their number and difficulty, e.g. ``"AI 2 (hard)"``.
    """

    if num_players not in BASE_PLAYERS:
        raise ValueError(
            f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {num_players}"
        )
    settings = settings or {}

    players: List[Player] = []
    for index, base in enumerate(BASE_PLAYERS[num_players]):
        seat = settings.get(index, PlayerSettings())
        name = base.name
        if seat.is_ai:
            name = f"AI {base.name.split(' ')[1]} ({seat.ai_difficulty})"
        players.append(
            replace(base, name=name, is_ai=seat.is_ai, ai_difficulty=seat.ai_difficulty)
        )
    return players


def validate_players(players: Sequence[Player]) -> None:
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise ValueError(
            f"a game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}"
        )
    symbols = [player.symbol for player in players]
    if len(set(symbols)) != len(symbols):
        raise ValueError(f"player symbols must be unique: {symbols}")


def opponents(players: Sequence[Player], symbol: Symbol) -> List[Player]:
    """Return every player except the one using ``symbol``, in roster order."""

    return [player for player in players if player.symbol != symbol]
