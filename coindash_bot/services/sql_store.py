"""
SQL-backed score store.

Reads the `coindash_scores` table through the async SQLAlchemy engine owned
by `Database`. Useful for local runs and deployments that mirror the game's
documents into a relational database.
"""

import logging
from typing import List

from sqlalchemy import select, func

from coindash_bot.data_models.leaderboard import ScoreRecord
from coindash_bot.database.database import Database
from coindash_bot.database.models import ScoreDocument
from coindash_bot.services.base import BaseScoreStore

logger = logging.getLogger(__name__)


class SqlScoreStore(BaseScoreStore):
    """Score store over an initialized `Database`."""

    backend_name = "sql"

    def __init__(self, database: Database, max_retries: int = 3):
        super().__init__(max_retries=max_retries)
        self.database = database

    async def fetch_top_scores(self, limit: int) -> List[ScoreRecord]:
        async def _query():
            async with self.database.get_session() as session:
                query = (
                    select(ScoreDocument)
                    .order_by(
                        func.coalesce(ScoreDocument.high_score, 0).desc(),
                        # Unnamed players render as "Player <id>", after named ties
                        ScoreDocument.username.is_(None),
                        func.lower(ScoreDocument.username),
                        ScoreDocument.username,
                        ScoreDocument.id,
                    )
                    .limit(limit)
                )
                result = await session.execute(query)
                # Map while the session is open; instances expire once it closes
                return [
                    ScoreRecord.from_document(row.to_document(), str(row.id))
                    for row in result.scalars().all()
                ]

        records = await self.execute_with_retry(_query)
        logger.debug(f"Fetched {len(records)} score rows from SQL store")
        return records

    async def close(self) -> None:
        await self.database.close()
