from .key_rotator import KeyRotator, get_next_env_key, parse_storage
from .key_resolver import get_env_keys, cursor_key_for
from .cursor_store import (
    CursorStore,
    MemoryCursorStore,
    FileCursorStore,
    RemoteCursorStore,
    get_cursor_store,
    memory_store,
)
from .mongo_client import get_mongo_database, close_mongo_client, ping_database
from .errors import (
    EnvKeyError,
    NoCandidatesError,
    MissingRemoteCredentialsError,
    RemoteConnectionError,
)

__all__ = [
    "KeyRotator",
    "get_next_env_key",
    "parse_storage",
    "get_env_keys",
    "cursor_key_for",
    "CursorStore",
    "MemoryCursorStore",
    "FileCursorStore",
    "RemoteCursorStore",
    "get_cursor_store",
    "memory_store",
    "get_mongo_database",
    "close_mongo_client",
    "ping_database",
    "EnvKeyError",
    "NoCandidatesError",
    "MissingRemoteCredentialsError",
    "RemoteConnectionError",
]
