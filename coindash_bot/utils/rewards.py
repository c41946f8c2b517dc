from coindash_bot.constants import RewardConstants
from coindash_bot.utils.leaderboard_exceptions import InvalidReferralCountError

class RewardCalculator:
    """Handles referral reward multipliers for the leaderboard"""

    @staticmethod
    def calculate_multiplier(referral_count: int) -> float:
        """
        Get the reward multiplier earned by a number of referrals

        Args:
            referral_count: Player's successful referrals (non-negative)

        Returns:
            One of 1.0, 1.5, 2.0 or 5.0

        Raises:
            InvalidReferralCountError: If referral_count is negative or not an integer
        """
        if isinstance(referral_count, bool) or not isinstance(referral_count, int) or referral_count < 0:
            raise InvalidReferralCountError(referral_count)

        for threshold, multiplier in RewardConstants.MULTIPLIER_TIERS:
            if referral_count >= threshold:
                return multiplier
        # Unreachable: the lowest tier starts at 0
        raise InvalidReferralCountError(referral_count)

    @staticmethod
    def format_multiplier(multiplier: float) -> str:
        """Render a multiplier as shown in the table, e.g. x1.5"""
        return f"x{multiplier:.1f}"
