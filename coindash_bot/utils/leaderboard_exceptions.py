"""
Custom exceptions for the leaderboard system with user-friendly error messages.
"""

from coindash_bot.constants import MessageConstants

class LeaderboardException(Exception):
    """Base exception for leaderboard-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class QueryFailedError(LeaderboardException):
    """Raised when the score store cannot be read (unreachable, auth, malformed data, timeout)."""
    def __init__(self, details: str = None):
        super().__init__(
            f"Leaderboard query failed: {details}",
            MessageConstants.RETRY_LATER
        )

class InvalidReferralCountError(LeaderboardException, ValueError):
    """Raised when a reward multiplier is requested for a negative referral count."""
    def __init__(self, referral_count):
        super().__init__(
            f"Referral count must be a non-negative integer, got {referral_count!r}",
            "❌ Invalid referral count."
        )
        self.referral_count = referral_count

class StoreConfigurationError(LeaderboardException):
    """Raised when the score store client cannot be constructed at startup."""
    def __init__(self, backend: str, details: str = None):
        super().__init__(
            f"Could not configure '{backend}' score store: {details}",
            "❌ The leaderboard is not configured. Please contact an administrator."
        )
        self.backend = backend
