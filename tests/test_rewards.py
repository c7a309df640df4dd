"""Tests for brain_train.core.rewards – headline tiers and status text."""

from __future__ import annotations

import random

import pytest

from brain_train.core.rewards import RewardTier, pick_message, pick_tier, status_text


class TestPickTier:
    @pytest.mark.parametrize(
        "mistakes, tier",
        [
            (0, RewardTier.FLAWLESS),
            (1, RewardTier.GOOD),
            (2, RewardTier.GOOD),
            (3, RewardTier.OKAY),
            (5, RewardTier.OKAY),
            (6, RewardTier.RETRY),
            (40, RewardTier.RETRY),
        ],
    )
    def test_mistake_tiers(self, mistakes: int, tier: RewardTier):
        assert pick_tier(mistakes, remaining_seconds=20) is tier

    @pytest.mark.parametrize("remaining", [0, 1, 5])
    def test_time_crunch_wins(self, remaining: int):
        assert pick_tier(0, remaining_seconds=remaining) is RewardTier.TIME_CRUNCH
        assert pick_tier(9, remaining_seconds=remaining) is RewardTier.TIME_CRUNCH

    def test_six_seconds_is_not_crunch(self):
        assert pick_tier(0, remaining_seconds=6) is RewardTier.FLAWLESS


class TestPickMessage:
    POOLS = {"flawless": ["A", "B", "C"], "good": ["G"]}

    def test_picks_from_tier_pool(self):
        rng = random.Random(0)
        for _ in range(20):
            assert pick_message(RewardTier.FLAWLESS, self.POOLS, rng) in {"A", "B", "C"}

    def test_single_entry_pool(self):
        assert pick_message(RewardTier.GOOD, self.POOLS) == "G"

    def test_deterministic_with_seed(self):
        a = pick_message(RewardTier.FLAWLESS, self.POOLS, random.Random(5))
        b = pick_message(RewardTier.FLAWLESS, self.POOLS, random.Random(5))
        assert a == b

    def test_missing_pool_raises(self):
        with pytest.raises(ValueError):
            pick_message(RewardTier.RETRY, self.POOLS)


class TestStatusText:
    def test_flawless(self):
        assert status_text(230, flawless=True) == "+230 pts (Flawless!)"

    def test_not_flawless(self):
        assert status_text(110, flawless=False) == "+110 pts"
