"""
Base score store for the CoinDash leaderboard bot.

Every store backend reads the top score documents and maps them to
ScoreRecord objects. Backends are built once at startup and shared,
read-only, by every command invocation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, TypeVar

from coindash_bot.data_models.leaderboard import ScoreRecord

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseScoreStore(ABC):
    """Read-only access to score documents, highest score first."""

    backend_name = "base"

    def __init__(self, max_retries: int = 1):
        """
        Args:
            max_retries: Attempts per read before the error is propagated
        """
        self.max_retries = max(1, max_retries)

    @abstractmethod
    async def fetch_top_scores(self, limit: int) -> List[ScoreRecord]:
        """Return up to `limit` records ordered by high score descending; raise on any failure."""

    async def close(self) -> None:
        """Release client resources. Backends without resources keep the default."""

    async def execute_with_retry(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute a read with retry and exponential backoff on errors."""
        for attempt in range(self.max_retries):
            try:
                return await func()
            except Exception as e:
                if attempt == self.max_retries - 1:
                    raise
                logger.warning(f"{self.backend_name} store retry attempt {attempt + 1}: {e}")
                await asyncio.sleep(0.1 * (2 ** attempt))
