"""Process-wide MongoDB client for the identity store."""

import logging
import os

from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'identity')
USERS_COLLECTION_NAME = 'users'

_client: MongoClient | None = None


def get_mongodb_client() -> MongoClient | None:
    """Return a live MongoDB client, connecting on first use.

    A cached client that fails its ping is dropped and replaced. Returns None
    when MONGO_URL is unset or the server cannot be reached, so callers can
    answer 503 instead of failing at import time.
    """
    global _client

    if _client is not None:
        try:
            _client.admin.command('ping')
            return _client
        except PyMongoError:
            logger.warning("[MONGODB] Cached client failed ping, reconnecting")
            _client = None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            MONGO_URL,
            tz_aware=True,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            maxPoolSize=20,
        )
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        return None

    _client = client
    logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    return client
