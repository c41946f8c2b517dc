"""
Tests for leaderboard ordering and message rendering.
"""

import locale

from conftest import GAME_LINK, record

from coindash_bot.constants import MessageConstants
from coindash_bot.utils.ranking import LeaderboardFormatter, RankingUtility

EXPECTED_TABLE = (
    "🏆 **COINDASH OFFICIAL LEADERBOARD** 🏆\n"
    "\n"
    "Pos. | Score | Multiplier | Player\n"
    "--- | --- | --- | ---\n"
    "1. | 125,000 | x2.0 | Ana\n"
    "2. | 98,000 | x1.0 | Bo\n"
    "\n"
    f"*Total score includes the referral bonus.* Play here: {GAME_LINK}"
)


def test_render_two_players():
    formatter = LeaderboardFormatter(GAME_LINK)
    message = formatter.render([record("Ana", 125000, 12), record("Bo", 98000, 3)])

    assert message == EXPECTED_TABLE


def test_render_empty_returns_notice_with_link():
    formatter = LeaderboardFormatter(GAME_LINK)
    message = formatter.render([])

    assert message == MessageConstants.EMPTY_LEADERBOARD.format(game_link=GAME_LINK)
    assert GAME_LINK in message
    assert "Pos. | Score" not in message


def test_render_is_deterministic():
    records = [record("Ana", 1234567, 50), record("Bo", 0, 0), record("Cy", 999, 7)]
    formatter = LeaderboardFormatter(GAME_LINK)

    assert formatter.render(records) == formatter.render(list(records))


def test_render_ignores_process_locale():
    formatter = LeaderboardFormatter(GAME_LINK)
    records = [record("Ana", 1234567, 7)]
    expected = formatter.render(records)

    previous = locale.setlocale(locale.LC_ALL)
    try:
        for candidate in ("de_DE.UTF-8", "fr_FR.UTF-8"):
            try:
                locale.setlocale(locale.LC_ALL, candidate)
            except locale.Error:
                continue
            assert formatter.render(records) == expected
    finally:
        locale.setlocale(locale.LC_ALL, previous)

    assert "1. | 1,234,567 | x1.5 | Ana" in expected


def test_fifty_referrals_render_as_x5():
    message = LeaderboardFormatter(GAME_LINK).render([record("Dee", 10, 50)])
    assert "1. | 10 | x5.0 | Dee" in message


def test_ranks_follow_input_order():
    ana, bo, cy = record("Ana", 300), record("Bo", 200), record("Cy", 100)

    forward = RankingUtility.build_entries([ana, bo, cy])
    reversed_entries = RankingUtility.build_entries([cy, bo, ana])

    assert [(e.rank, e.username) for e in forward] == [(1, "Ana"), (2, "Bo"), (3, "Cy")]
    assert [(e.rank, e.username) for e in reversed_entries] == [(1, "Cy"), (2, "Bo"), (3, "Ana")]


def test_sort_records_breaks_ties_by_username():
    records = [record("bo", 100), record("Cy", 500), record("Ana", 100), record("ana", 100)]

    ordered = RankingUtility.sort_records(records)

    assert [r.username for r in ordered] == ["Cy", "Ana", "ana", "bo"]


def test_usernames_are_escaped():
    message = LeaderboardFormatter(GAME_LINK).render([
        record("*star*_player", 10),
        record("@everyone", 5),
    ])

    assert "| \\*star\\*\\_player" in message
    assert "@everyone" not in message


def test_long_usernames_are_truncated():
    entry = RankingUtility.build_entries([record("x" * 80, 1)])[0]

    assert entry.username == "x" * 31 + "…"


def test_format_score_groups_thousands():
    assert RankingUtility.format_score(0) == "0"
    assert RankingUtility.format_score(98000) == "98,000"
    assert RankingUtility.format_score(1000000) == "1,000,000"
