"""
Services package for the CoinDash leaderboard bot.
"""

from .base import BaseScoreStore
from .leaderboard import LeaderboardService
from .rate_limiter import SimpleRateLimiter

__all__ = ['BaseScoreStore', 'LeaderboardService', 'SimpleRateLimiter']
