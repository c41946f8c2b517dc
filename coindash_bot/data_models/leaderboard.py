"""
Leaderboard data models.

Provides immutable data transfer objects for score records read from the
store and the rows derived from them for display.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def _coerce_count(value: Any, field: str, document_id: str) -> int:
    """Read a stored counter permissively: missing, malformed or negative values become 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        logger.warning(f"Score document {document_id} has boolean {field}. Defaulting to 0.")
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Score document {document_id} has malformed {field}={value!r}. Defaulting to 0.")
        return 0
    if number < 0:
        logger.warning(f"Score document {document_id} has negative {field}={number}. Clamping to 0.")
        return 0
    return number


@dataclass(frozen=True)
class ScoreRecord:
    """Single score document as stored by the game."""
    username: str
    high_score: int = 0
    referral_count: int = 0
    document_id: Optional[str] = None

    @classmethod
    def from_document(cls, data: Optional[Mapping[str, Any]], document_id: str = "") -> "ScoreRecord":
        """
        Build a record from a raw store document.

        Accepts the game's camelCase field names (`highScore`, `referrals`,
        with `referralCount` as an alias). Missing fields default to 0 and a
        blank username falls back to the document id.
        """
        data = data or {}
        document_id = str(document_id or "")

        referrals = data.get('referrals')
        if referrals is None:
            referrals = data.get('referralCount')

        username = data.get('username')
        username = str(username).strip() if username is not None else ""
        if not username:
            username = f"Player {document_id[:6]}" if document_id else "Anonymous"

        return cls(
            username=username,
            high_score=_coerce_count(data.get('highScore'), 'highScore', document_id),
            referral_count=_coerce_count(referrals, 'referrals', document_id),
            document_id=document_id or None,
        )


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single rendered leaderboard row."""
    rank: int
    username: str
    display_score: str
    reward_multiplier: float
