"""
Rate limiting for leaderboard commands.

Simple in-memory sliding window shared by the gateway cogs and the webhook
app. State is per process; nothing here touches the score store.
"""

import time
import asyncio
from functools import wraps
from collections import defaultdict, deque
import logging

from coindash_bot.config import Config
from coindash_bot.constants import MessageConstants

logger = logging.getLogger(__name__)

class SimpleRateLimiter:
    """
    In-memory rate limiter keyed by user and command.

    Keys whose window has fully elapsed are swept once the table holds more
    than `sweep_threshold` keys.
    """

    def __init__(self, clock=time.monotonic, sweep_threshold: int = 1024):
        self._requests = defaultdict(deque)
        self._windows = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._sweep_threshold = sweep_threshold

    async def is_allowed(self, user_id: int, command: str, limit: int, window: int) -> bool:
        """Check if user can execute command within rate limit."""
        if limit <= 0 or window <= 0:
            return False

        # Owner bypasses rate limits
        if Config.OWNER_DISCORD_ID and user_id == Config.OWNER_DISCORD_ID:
            return True

        key = f"{user_id}:{command}"
        now = self._clock()

        async with self._lock:
            if len(self._requests) > self._sweep_threshold:
                self._sweep(now)

            self._windows[key] = window
            requests = self._requests[key]
            while requests and requests[0] <= now - window:
                requests.popleft()

            if len(requests) < limit:
                requests.append(now)
                return True

            return False

    def _sweep(self, now: float) -> None:
        stale = [
            key for key, requests in self._requests.items()
            if not requests or requests[-1] <= now - self._windows[key]
        ]
        for key in stale:
            del self._requests[key]
            del self._windows[key]
        if stale:
            logger.debug(f"Dropped {len(stale)} idle rate limit keys")

def rate_limit(command: str, limit: int = 1, window: int = 60):
    """Decorator for rate limiting slash commands in a cog."""
    def decorator(func):
        @wraps(func)
        async def wrapper(self, interaction, *args, **kwargs):
            rate_limiter = self.bot.rate_limiter

            if not await rate_limiter.is_allowed(interaction.user.id, command, limit, window):
                logger.info(f"Rate limit hit for /{command} by user {interaction.user.id}")
                await interaction.response.send_message(
                    MessageConstants.RATE_LIMITED.format(command=command),
                    ephemeral=True
                )
                return

            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator
