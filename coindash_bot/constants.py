"""
Bot-wide constants for the CoinDash leaderboard bot.

This module contains the reward tiers, message templates and UI values used
throughout the codebase so they live in one place.
"""

class RewardConstants:
    """Constants for the referral reward multiplier."""

    # (minimum referral count, multiplier), evaluated highest threshold first
    MULTIPLIER_TIERS = (
        (50, 5.0),
        (10, 2.0),
        (5, 1.5),
        (0, 1.0),
    )

class LeaderboardConstants:
    """Constants for leaderboard queries and rendering."""

    DEFAULT_LIMIT = 10

    # Display names are cut before markdown escaping
    MAX_USERNAME_LENGTH = 32

    HEADER_LINE = "Pos. | Score | Multiplier | Player"
    SEPARATOR_LINE = "--- | --- | --- | ---"

class MessageConstants:
    """User-facing message templates."""

    TITLE = "🏆 **COINDASH OFFICIAL LEADERBOARD** 🏆"
    WELCOME = (
        "Welcome to the CoinDash Bot! 🚀 I'm here to show you the latest leaderboard. "
        "Use the /leaderboard command to see the Top 10!"
    )
    EMPTY_LEADERBOARD = "The leaderboard is empty! Be the first to play! Start the challenge here: {game_link}"
    RETRY_LATER = "Could not load the leaderboard right now. Please try again later."
    FOOTER = "*Total score includes the referral bonus.* Play here: {game_link}"
    RATE_LIMITED = "⏰ Rate limit exceeded. Please wait before using `/{command}` again."

class RateLimitConstants:
    """Rate limits per command (requests per window in seconds)."""

    LEADERBOARD_LIMIT = 5
    LEADERBOARD_WINDOW = 60

class UIConstants:
    """Constants for Discord UI elements."""

    TROPHY_EMOJI = "🏆"
    PRESENCE_TEXT = "CoinDash | /leaderboard"
