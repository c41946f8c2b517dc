"""
Firestore-backed score store.

The game writes one document per player to
`artifacts/<app id>/public/data/coindash_scores`. This store only reads it.
"""

import json
import logging
from typing import Any, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import Query

from coindash_bot.data_models.leaderboard import ScoreRecord
from coindash_bot.services.base import BaseScoreStore
from coindash_bot.utils.leaderboard_exceptions import StoreConfigurationError

logger = logging.getLogger(__name__)

SCORE_FIELD = "highScore"


def initialize_firebase_app(service_account_key: Optional[str] = None) -> firebase_admin.App:
    """
    Initialize the default Firebase app once per process.

    Uses the service-account JSON when given, application default
    credentials otherwise.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass  # Not initialized yet

    try:
        if service_account_key:
            credential = credentials.Certificate(json.loads(service_account_key))
            app = firebase_admin.initialize_app(credential)
            logger.info("Firebase Admin initialized using SERVICE_ACCOUNT_KEY")
        else:
            app = firebase_admin.initialize_app(credentials.ApplicationDefault())
            logger.info("Firebase Admin initialized using application default credentials")
    except Exception as e:
        raise StoreConfigurationError("firestore", str(e)) from e
    return app


class FirestoreScoreStore(BaseScoreStore):
    """Score store over an async Firestore client."""

    backend_name = "firestore"

    def __init__(self, client: Any, collection_path: str, app: Optional[firebase_admin.App] = None):
        super().__init__(max_retries=1)
        self.client = client
        self.collection_path = collection_path
        self.app = app

    @classmethod
    def from_service_account(cls, collection_path: str, service_account_key: Optional[str] = None) -> "FirestoreScoreStore":
        app = initialize_firebase_app(service_account_key)
        try:
            client = firestore_async.client(app)
        except Exception as e:
            raise StoreConfigurationError("firestore", str(e)) from e
        return cls(client, collection_path, app=app)

    async def fetch_top_scores(self, limit: int) -> List[ScoreRecord]:
        query = (
            self.client.collection(self.collection_path)
            .order_by(SCORE_FIELD, direction=Query.DESCENDING)
            .limit(limit)
        )

        records = []
        async for snapshot in query.stream():
            records.append(ScoreRecord.from_document(snapshot.to_dict(), snapshot.id))

        logger.debug(f"Fetched {len(records)} score documents from {self.collection_path}")
        return records

    async def close(self) -> None:
        if self.app is not None:
            firebase_admin.delete_app(self.app)
            self.app = None
