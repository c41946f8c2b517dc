"""
Leaderboard service for the CoinDash bot.

Composes the store query and the formatter into the single reply the
transports send back. The service keeps no state between invocations.
"""

import asyncio
import logging
from typing import List, Optional

from coindash_bot.constants import LeaderboardConstants, MessageConstants
from coindash_bot.data_models.leaderboard import ScoreRecord
from coindash_bot.services.base import BaseScoreStore
from coindash_bot.utils.leaderboard_exceptions import QueryFailedError
from coindash_bot.utils.ranking import LeaderboardFormatter, RankingUtility
from coindash_bot.utils.rewards import RewardCalculator

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Top score queries and leaderboard message assembly."""

    def __init__(
        self,
        store: BaseScoreStore,
        game_link: str,
        limit: int = LeaderboardConstants.DEFAULT_LIMIT,
        query_timeout: float = 10.0,
        formatter: Optional[LeaderboardFormatter] = None
    ):
        self.store = store
        self.limit = limit
        self.query_timeout = query_timeout
        self.formatter = formatter or LeaderboardFormatter(game_link)

    async def get_top_scores(self) -> List[ScoreRecord]:
        """
        Read the current top records, highest score first.

        Returns an empty list when the store holds no records.

        Raises:
            QueryFailedError: On any store, deserialization or timeout error,
                or when the store hands back a record that cannot be rendered
        """
        try:
            records = await asyncio.wait_for(
                self.store.fetch_top_scores(self.limit),
                timeout=self.query_timeout
            )
            ranked = RankingUtility.sort_records(records)[:self.limit]
            for record in ranked:
                self._check_record(record)
        except asyncio.TimeoutError as e:
            raise QueryFailedError(f"{self.store.backend_name} store timed out after {self.query_timeout}s") from e
        except Exception as e:
            raise QueryFailedError(f"{type(e).__name__}: {e}") from e

        return ranked

    @staticmethod
    def _check_record(record: ScoreRecord) -> None:
        if not isinstance(record.username, str) or not record.username.strip():
            raise ValueError(f"Malformed score record: username {record.username!r}")
        if isinstance(record.high_score, bool) or not isinstance(record.high_score, int):
            raise ValueError(f"Malformed score record: high score {record.high_score!r}")
        RewardCalculator.calculate_multiplier(record.referral_count)

    async def build_leaderboard_message(self) -> str:
        """Return the table, the empty-leaderboard notice or the retry-later notice."""
        try:
            records = await self.get_top_scores()
        except QueryFailedError as e:
            logger.error(f"Error retrieving leaderboard: {e}", exc_info=True)
            return e.user_message

        logger.info(f"Rendering leaderboard with {len(records)} entries")
        return self.formatter.render(records)

    @staticmethod
    def welcome_message() -> str:
        return MessageConstants.WELCOME

    async def close(self):
        await self.store.close()
