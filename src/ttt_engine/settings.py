"""Session configuration.

Environment-first: ``SessionConfig.from_env()`` reads ``TTT_*`` variables and
falls back to the defaults below. Command-line flags override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from .game_basics import Player
from .move_selector import Difficulty

MODES = ("pvp", "pvc")
DEFAULT_COMPUTER_DELAY = 0.5


def as_player(value: Any) -> Player:
    if isinstance(value, Player):
        return value
    return Player(str(value).strip().upper())


@dataclass(frozen=True)
class SessionConfig:
    mode: str = "pvc"
    difficulty: Difficulty = Difficulty.HARD
    first_player: Player = Player.X
    computer_player: Player = Player.O
    computer_delay: float = DEFAULT_COMPUTER_DELAY

    def __post_init__(self) -> None:
        # accept plain strings from argparse and the environment
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        object.__setattr__(self, "first_player", as_player(self.first_player))
        object.__setattr__(self, "computer_player", as_player(self.computer_player))
        self.validate()

    def validate(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode {self.mode!r}; expected one of {', '.join(MODES)}")
        if self.computer_delay < 0:
            raise ValueError(f"computer_delay must be >= 0, got {self.computer_delay}")

    @property
    def vs_computer(self) -> bool:
        return self.mode == "pvc"

    @classmethod
    def from_env(cls) -> "SessionConfig":
        kwargs: dict[str, Any] = {}
        mode = os.getenv("TTT_MODE")
        if mode:
            kwargs["mode"] = mode.lower()
        difficulty = os.getenv("TTT_DIFFICULTY")
        if difficulty:
            kwargs["difficulty"] = difficulty.lower()
        first = os.getenv("TTT_FIRST_PLAYER")
        if first:
            kwargs["first_player"] = first
        computer = os.getenv("TTT_COMPUTER_PLAYER")
        if computer:
            kwargs["computer_player"] = computer
        delay_ms = os.getenv("TTT_COMPUTER_DELAY_MS")
        if delay_ms:
            kwargs["computer_delay"] = int(delay_ms) / 1000.0
        return cls(**kwargs)

    def override(self, **changes: Any) -> "SessionConfig":
        """Return a copy with every non-None value in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
