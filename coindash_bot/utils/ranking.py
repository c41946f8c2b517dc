"""
Ranking and rendering utilities for the leaderboard message.

Everything here is pure and synchronous: the same records always produce the
same text, whatever the host locale.
"""

from typing import Iterable, List, Sequence

import discord

from coindash_bot.constants import LeaderboardConstants, MessageConstants
from coindash_bot.data_models.leaderboard import LeaderboardEntry, ScoreRecord
from coindash_bot.utils.rewards import RewardCalculator


class RankingUtility:
    """Shared ordering and formatting logic for leaderboard rows."""

    @staticmethod
    def sort_records(records: Iterable[ScoreRecord]) -> List[ScoreRecord]:
        """Order records by score descending, ties by username ascending."""
        return sorted(
            records,
            key=lambda record: (-record.high_score, record.username.casefold(), record.username)
        )

    @staticmethod
    def format_score(score: int) -> str:
        """Group thousands with commas; format specs ignore the process locale."""
        return f"{score:,}"

    @staticmethod
    def sanitize_username(username: str) -> str:
        """Trim and escape a display name so it cannot break the message markup."""
        name = username.strip()
        if len(name) > LeaderboardConstants.MAX_USERNAME_LENGTH:
            name = name[:LeaderboardConstants.MAX_USERNAME_LENGTH - 1] + "…"
        name = discord.utils.escape_markdown(name)
        return discord.utils.escape_mentions(name)

    @staticmethod
    def build_entries(records: Sequence[ScoreRecord]) -> List[LeaderboardEntry]:
        """Assign 1-based ranks in input order and derive the display values."""
        return [
            LeaderboardEntry(
                rank=rank,
                username=RankingUtility.sanitize_username(record.username),
                display_score=RankingUtility.format_score(record.high_score),
                reward_multiplier=RewardCalculator.calculate_multiplier(record.referral_count),
            )
            for rank, record in enumerate(records, start=1)
        ]


class LeaderboardFormatter:
    """Renders score records as the leaderboard chat message."""

    def __init__(self, game_link: str):
        self.game_link = game_link

    def empty_message(self) -> str:
        return MessageConstants.EMPTY_LEADERBOARD.format(game_link=self.game_link)

    @staticmethod
    def format_row(entry: LeaderboardEntry) -> str:
        multiplier_text = RewardCalculator.format_multiplier(entry.reward_multiplier)
        return f"{entry.rank}. | {entry.display_score} | {multiplier_text} | {entry.username}"

    def render(self, records: Sequence[ScoreRecord]) -> str:
        """
        Render records, already in rank order, as a table message.

        An empty sequence renders the empty-leaderboard notice instead of a
        zero-row table.
        """
        if not records:
            return self.empty_message()

        lines = [
            MessageConstants.TITLE,
            "",
            LeaderboardConstants.HEADER_LINE,
            LeaderboardConstants.SEPARATOR_LINE,
        ]
        lines.extend(self.format_row(entry) for entry in RankingUtility.build_entries(records))
        lines.append("")
        lines.append(MessageConstants.FOOTER.format(game_link=self.game_link))
        return "\n".join(lines)
