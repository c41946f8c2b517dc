import asyncio
from typing import List, Optional

import pytest

from coindash_bot.data_models.leaderboard import ScoreRecord
from coindash_bot.services.base import BaseScoreStore

GAME_LINK = "https://example.test/coindash/"


class FakeScoreStore(BaseScoreStore):
    """In-memory store that returns fixed records, raises, or stalls."""

    backend_name = "fake"

    def __init__(self, records: Optional[List[ScoreRecord]] = None, error: Exception = None, delay: float = 0):
        super().__init__()
        self.records = records or []
        self.error = error
        self.delay = delay
        self.calls = []
        self.closed = False

    async def fetch_top_scores(self, limit: int) -> List[ScoreRecord]:
        self.calls.append(limit)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.records[:limit])

    async def close(self) -> None:
        self.closed = True


def record(username, high_score=0, referral_count=0):
    return ScoreRecord(username=username, high_score=high_score, referral_count=referral_count)


@pytest.fixture
def game_link():
    return GAME_LINK
