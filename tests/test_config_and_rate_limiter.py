"""
Tests for configuration validation and the in-memory rate limiter.
"""

import asyncio

import pytest

from coindash_bot.config import Config
from coindash_bot.services.rate_limiter import SimpleRateLimiter


@pytest.fixture
def gateway_config(monkeypatch):
    monkeypatch.setattr(Config, "BOT_MODE", "gateway")
    monkeypatch.setattr(Config, "STORE_BACKEND", "sql")
    monkeypatch.setattr(Config, "DISCORD_TOKEN", "token")
    monkeypatch.setattr(Config, "DATABASE_URL", "sqlite:///coindash.db")
    monkeypatch.setattr(Config, "LEADERBOARD_LIMIT", 10)
    monkeypatch.setattr(Config, "QUERY_TIMEOUT_SECONDS", 10.0)
    return Config


def test_valid_gateway_config(gateway_config):
    gateway_config.validate()


def test_gateway_requires_token(gateway_config, monkeypatch):
    monkeypatch.setattr(Config, "DISCORD_TOKEN", None)

    with pytest.raises(ValueError, match="DISCORD_TOKEN"):
        Config.validate()


def test_webhook_requires_public_key(gateway_config, monkeypatch):
    monkeypatch.setattr(Config, "BOT_MODE", "webhook")
    monkeypatch.setattr(Config, "DISCORD_PUBLIC_KEY", None)
    monkeypatch.setattr(Config, "DISCORD_APPLICATION_ID", 1)

    with pytest.raises(ValueError, match="DISCORD_PUBLIC_KEY"):
        Config.validate()


def test_unknown_mode_and_backend(gateway_config, monkeypatch):
    monkeypatch.setattr(Config, "BOT_MODE", "carrier-pigeon")
    with pytest.raises(ValueError, match="BOT_MODE"):
        Config.validate()

    monkeypatch.setattr(Config, "BOT_MODE", "gateway")
    monkeypatch.setattr(Config, "STORE_BACKEND", "mongo")
    with pytest.raises(ValueError, match="STORE_BACKEND"):
        Config.validate()


def test_collection_path_and_database_url(monkeypatch):
    monkeypatch.setattr(Config, "APP_ID", "my-app")
    monkeypatch.setattr(Config, "SCORE_COLLECTION_PATH", "artifacts/{app_id}/public/data/coindash_scores")
    monkeypatch.setattr(Config, "DATABASE_URL", "sqlite:///local.db")

    assert Config.get_collection_path() == "artifacts/my-app/public/data/coindash_scores"
    assert Config.get_async_database_url() == "sqlite+aiosqlite:///local.db"


def test_guild_ids_parsing(monkeypatch):
    monkeypatch.setattr(Config, "DISCORD_GUILD_IDS", "1, 2,,3")
    assert Config.get_guild_ids() == [1, 2, 3]

    monkeypatch.setattr(Config, "DISCORD_GUILD_IDS", "")
    assert Config.get_guild_ids() == []

    monkeypatch.setattr(Config, "DISCORD_GUILD_IDS", "abc")
    with pytest.raises(ValueError):
        Config.get_guild_ids()


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_rate_limiter_window(monkeypatch):
    monkeypatch.setattr(Config, "OWNER_DISCORD_ID", 0)
    clock = FakeClock()
    limiter = SimpleRateLimiter(clock=clock)

    async def scenario():
        results = [await limiter.is_allowed(1, "leaderboard", 2, 60) for _ in range(3)]
        clock.now += 61
        results.append(await limiter.is_allowed(1, "leaderboard", 2, 60))
        return results

    assert asyncio.run(scenario()) == [True, True, False, True]


def test_rate_limiter_drops_idle_keys(monkeypatch):
    monkeypatch.setattr(Config, "OWNER_DISCORD_ID", 0)
    clock = FakeClock()
    limiter = SimpleRateLimiter(clock=clock, sweep_threshold=1)

    async def scenario():
        await limiter.is_allowed(1, "leaderboard", 2, 60)
        await limiter.is_allowed(2, "leaderboard", 2, 60)
        clock.now += 61
        return await limiter.is_allowed(3, "leaderboard", 2, 60)

    assert asyncio.run(scenario()) is True
    assert list(limiter._requests) == ["3:leaderboard"]
    assert list(limiter._windows) == ["3:leaderboard"]


def test_rate_limiter_sweep_keeps_active_keys(monkeypatch):
    monkeypatch.setattr(Config, "OWNER_DISCORD_ID", 0)
    clock = FakeClock()
    limiter = SimpleRateLimiter(clock=clock, sweep_threshold=1)

    async def scenario():
        await limiter.is_allowed(1, "leaderboard", 1, 60)
        await limiter.is_allowed(2, "leaderboard", 1, 60)
        clock.now += 30
        await limiter.is_allowed(3, "leaderboard", 1, 60)
        return await limiter.is_allowed(1, "leaderboard", 1, 60)

    assert asyncio.run(scenario()) is False
    assert sorted(limiter._requests) == ["1:leaderboard", "2:leaderboard", "3:leaderboard"]


def test_rate_limiter_owner_bypass_and_invalid_limits(monkeypatch):
    monkeypatch.setattr(Config, "OWNER_DISCORD_ID", 99)
    limiter = SimpleRateLimiter()

    async def scenario():
        owner = [await limiter.is_allowed(99, "leaderboard", 1, 60) for _ in range(3)]
        invalid = await limiter.is_allowed(1, "leaderboard", 0, 60)
        return owner, invalid

    owner, invalid = asyncio.run(scenario())
    assert owner == [True, True, True]
    assert invalid is False


def test_setup_logger_writes_daily_file_once(tmp_path, monkeypatch):
    import logging

    from coindash_bot.utils.logger import setup_logger

    monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path / "logs"))
    name = "coindash_bot.tests.logger"

    logger = setup_logger(name)
    try:
        assert setup_logger(name) is logger
        assert len(logger.handlers) == 2
        logger.info("hello")
        assert list((tmp_path / "logs").glob("coindash_bot_*.log"))
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_cli_mode_choices():
    from coindash_bot.main import parse_args

    assert parse_args(["--mode", "webhook"]).mode == "webhook"
    assert parse_args([]).mode is None
    with pytest.raises(SystemExit):
        parse_args(["--mode", "telegraph"])
