"""
Tests for the referral reward multiplier.
"""

import pytest

from coindash_bot.utils.leaderboard_exceptions import InvalidReferralCountError
from coindash_bot.utils.rewards import RewardCalculator


@pytest.mark.parametrize("referrals, expected", [
    (0, 1.0),
    (4, 1.0),
    (5, 1.5),
    (9, 1.5),
    (10, 2.0),
    (49, 2.0),
    (50, 5.0),
    (10_000, 5.0),
])
def test_multiplier_tier_boundaries(referrals, expected):
    assert RewardCalculator.calculate_multiplier(referrals) == expected


def test_multiplier_is_monotonic_and_within_tiers():
    previous = 0.0
    for referrals in range(0, 200):
        multiplier = RewardCalculator.calculate_multiplier(referrals)
        assert multiplier in {1.0, 1.5, 2.0, 5.0}
        assert multiplier >= previous
        previous = multiplier


@pytest.mark.parametrize("bad_value", [-1, -50, 2.5, "7", None, True])
def test_multiplier_rejects_invalid_input(bad_value):
    with pytest.raises(InvalidReferralCountError) as exc_info:
        RewardCalculator.calculate_multiplier(bad_value)
    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.referral_count == bad_value


def test_format_multiplier_uses_one_decimal():
    assert RewardCalculator.format_multiplier(5.0) == "x5.0"
    assert RewardCalculator.format_multiplier(1.5) == "x1.5"
