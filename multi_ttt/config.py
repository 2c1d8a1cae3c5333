"""YAML configuration for game setup."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .players import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    Difficulty,
    Player,
    PlayerSettings,
    create_players,
)

__all__ = ["ConfigError", "DEFAULT_CONFIG_PATH", "GameConfig", "load_config"]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"


class ConfigError(ValueError):
    """Raised when a configuration file holds values the game cannot use."""


@dataclass
class GameConfig:
    num_players: int = 2
    ai_delay: float = 1.0
    seed: Optional[int] = None
    players: Dict[int, PlayerSettings] = field(default_factory=dict)

    def build_players(self) -> List[Player]:
        return create_players(self.num_players, self.players)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameConfig":
        num_players = data.get("num_players", 2)
        if isinstance(num_players, bool) or not isinstance(num_players, int):
            raise ConfigError(f"num_players must be an integer, got {num_players!r}")
        if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
            raise ConfigError(
                f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {num_players}"
            )

        ai_delay = data.get("ai_delay", 1.0)
        if isinstance(ai_delay, bool) or not isinstance(ai_delay, (int, float)) or ai_delay < 0:
            raise ConfigError(f"ai_delay must be a non-negative number, got {ai_delay!r}")

        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ConfigError(f"seed must be an integer or null, got {seed!r}")

        entries = data.get("players") or []
        if not isinstance(entries, list):
            raise ConfigError("players must be a list")
        if len(entries) > num_players:
            raise ConfigError(
                f"{len(entries)} player entries given for a {num_players}-player game"
            )

        players: Dict[int, PlayerSettings] = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ConfigError(f"player entry {index + 1} must be a mapping")
            try:
                difficulty = Difficulty.parse(entry.get("difficulty", Difficulty.MEDIUM))
            except ValueError as exc:
                raise ConfigError(f"player entry {index + 1}: {exc}") from exc
            is_ai = entry.get("is_ai", False)
            if not isinstance(is_ai, bool):
                raise ConfigError(
                    f"player entry {index + 1}: is_ai must be true or false, got {is_ai!r}"
                )
            players[index] = PlayerSettings(is_ai=is_ai, ai_difficulty=difficulty)

        return cls(
            num_players=num_players,
            ai_delay=float(ai_delay),
            seed=seed,
            players=players,
        )


def load_config(path: Optional[Union[str, Path]] = None) -> GameConfig:
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"could not read {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path} is not valid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")
    return GameConfig.from_mapping(data)
