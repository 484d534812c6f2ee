"""
MongoDB client wrapper with connect-retry and a process-wide cached client.
"""
import time
import logging
import threading
from functools import lru_cache
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config import get_settings
from .errors import MissingRemoteCredentialsError, RemoteConnectionError

logger = logging.getLogger(__name__)

_client_lock = threading.Lock()


def build_mongo_uri(username: str, password: str, cluster: str) -> str:
    """SRV connection string with percent-encoded credentials."""
    return (
        f"mongodb+srv://{quote_plus(username)}:{quote_plus(password)}@{cluster}/"
        "?retryWrites=true&w=majority"
    )


def connect_with_retry(
    uri: str,
    attempts: int = 5,
    backoff_seconds: float = 1.0,
    server_selection_timeout_ms: int = 5000,
) -> MongoClient:
    """
    Open a client and confirm the server answers a ping.

    Waits `attempt * backoff_seconds` between failed attempts. After the
    last attempt the driver error is wrapped in RemoteConnectionError.
    """
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        client = None
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=server_selection_timeout_ms)
            client.admin.command("ping")
            logger.info(f"Connected to MongoDB on attempt {attempt}/{attempts}")
            return client
        except PyMongoError as e:
            last_error = e
            if client is not None:
                client.close()
            if attempt < attempts:
                wait = backoff_seconds * attempt
                logger.warning(
                    f"MongoDB connection failed ({type(e).__name__}), "
                    f"retrying in {wait}s (attempt {attempt}/{attempts})"
                )
                time.sleep(wait)

    raise RemoteConnectionError(attempts, last_error) from last_error


@lru_cache()
def _get_mongo_client() -> MongoClient:
    s = get_settings()
    if not s.has_db_credentials:
        raise MissingRemoteCredentialsError()
    uri = build_mongo_uri(s.db_username, s.db_password, s.db_cluster)
    return connect_with_retry(
        uri,
        attempts=s.db_connect_attempts,
        backoff_seconds=s.db_connect_backoff_seconds,
        server_selection_timeout_ms=s.db_server_selection_timeout_ms,
    )


def get_mongo_database() -> Database:
    """Get the configured database on the cached client, connecting on first use."""
    with _client_lock:
        client = _get_mongo_client()
    return client[get_settings().db_name]


def get_cursor_collection() -> Collection:
    """Collection that stores one document per cursor key."""
    return get_mongo_database()[get_settings().db_collection]


def close_mongo_client() -> None:
    """Close the cached client; the next call reconnects."""
    with _client_lock:
        if _get_mongo_client.cache_info().currsize:
            _get_mongo_client().close()
        _get_mongo_client.cache_clear()


def ping_database() -> dict:
    """Round-trip a ping through the cached client."""
    return get_mongo_database().command("ping")
