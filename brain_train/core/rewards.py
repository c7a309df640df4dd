"""Reward headline selection for a cleared level."""

from __future__ import annotations

import random
from enum import Enum
from typing import Mapping, Optional, Sequence


class RewardTier(str, Enum):
    TIME_CRUNCH = "time_crunch"
    FLAWLESS = "flawless"
    GOOD = "good"
    OKAY = "okay"
    RETRY = "retry"


def pick_tier(mistakes: int, remaining_seconds: int, time_crunch_seconds: int = 5) -> RewardTier:
    """A near-timeout finish wins over the mistake-count tiers."""
    if remaining_seconds <= time_crunch_seconds:
        return RewardTier.TIME_CRUNCH
    if mistakes == 0:
        return RewardTier.FLAWLESS
    if mistakes <= 2:
        return RewardTier.GOOD
    if mistakes <= 5:
        return RewardTier.OKAY
    return RewardTier.RETRY


def pick_message(
    tier: RewardTier,
    pools: Mapping[str, Sequence[str]],
    rng: Optional[random.Random] = None,
) -> str:
    pool = pools.get(tier.value)
    if not pool:
        raise ValueError(f"No messages configured for tier '{tier.value}'")
    return (rng or random).choice(list(pool))


def status_text(delta: int, flawless: bool) -> str:
    """Short score line shown under the grid, e.g. ``+230 pts (Flawless!)``."""
    if flawless:
        return f"+{delta} pts (Flawless!)"
    return f"+{delta} pts"
