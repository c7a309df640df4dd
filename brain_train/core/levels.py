from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from brain_train.core.config import GameConfig


@dataclass
class LevelState:
    """Per-level bookkeeping. ``score`` carries over; the rest resets each level."""

    level: int = 1
    mistakes_in_level: int = 0
    score: int = 0
    start_row_safe_col: Optional[int] = None

    @property
    def flawless(self) -> bool:
        return self.mistakes_in_level == 0

    def advance(self) -> None:
        """Move to the next level, keeping the cumulative score."""
        self.level += 1
        self.mistakes_in_level = 0
        self.start_row_safe_col = None


def cols_for_level(level: int, base_cols: int = 2, levels_per_column: int = 5) -> int:
    """Grid width for ``level``: one extra column every ``levels_per_column`` levels."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return base_cols + (level - 1) // levels_per_column


def score_delta(level: int, flawless: bool, config: Optional[GameConfig] = None) -> int:
    """Points awarded for clearing ``level``."""
    cfg = config or GameConfig()
    bonus = cfg.flawless_bonus if flawless else 0
    return cfg.base_reward + level * cfg.level_reward + bonus
