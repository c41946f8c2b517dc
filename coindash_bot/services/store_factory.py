"""
Builds the configured score store once at startup.
"""

import logging

from coindash_bot.config import Config
from coindash_bot.services.base import BaseScoreStore
from coindash_bot.utils.leaderboard_exceptions import StoreConfigurationError

logger = logging.getLogger(__name__)


async def create_score_store(backend: str = None) -> BaseScoreStore:
    """Create and initialize the store named by `backend` (defaults to Config.STORE_BACKEND)."""
    backend = (backend or Config.STORE_BACKEND).lower()

    if backend == "firestore":
        from coindash_bot.services.firestore_store import FirestoreScoreStore

        collection_path = Config.get_collection_path()
        logger.info(f"Using Firestore score store at {collection_path}")
        return FirestoreScoreStore.from_service_account(collection_path, Config.SERVICE_ACCOUNT_KEY)

    if backend == "sql":
        from coindash_bot.database.database import Database
        from coindash_bot.services.sql_store import SqlScoreStore

        database = Database()
        try:
            await database.initialize()
        except Exception as e:
            await database.close()
            raise StoreConfigurationError(backend, str(e)) from e
        logger.info("Using SQL score store")
        return SqlScoreStore(database)

    raise StoreConfigurationError(backend, f"unknown backend, expected one of {', '.join(Config.STORE_BACKENDS)}")
