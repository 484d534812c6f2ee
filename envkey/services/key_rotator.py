"""
Round-robin rotation over environment values that share a name prefix.
"""
import logging
from typing import Mapping, Optional, Union

from ..config import get_settings
from ..models import EnvKeyResult, StorageType
from .cursor_store import CursorStore, get_cursor_store
from .errors import NoCandidatesError
from .key_resolver import cursor_key_for, get_env_keys

logger = logging.getLogger(__name__)

SINGLE_KEY_MESSAGE = "Only one key available, using key with index 0."


def parse_storage(storage: Union[StorageType, str, None]) -> StorageType:
    """
    Normalise a storage selector.

    None means the configured default (DATABASE unless overridden); matching
    is case-insensitive and anything unrecognised falls back to DISK.
    """
    if storage is None:
        storage = get_settings().env_key_storage
    if isinstance(storage, StorageType):
        return storage
    try:
        return StorageType(str(storage).strip().upper())
    except ValueError:
        logger.warning(f"Unknown storage '{storage}', using {StorageType.DISK.value}")
        return StorageType.DISK


class KeyRotator:
    """
    Round-robin key rotator backed by a cursor store.

    - Candidates are re-read from the environment on every call
    - A single candidate is returned directly; the store is never touched
    - Never logs key values, only indices
    - `next()` never raises; failures come back as an EnvKeyResult
    """

    def __init__(
        self,
        base_env_name: str,
        storage: Union[StorageType, str, None] = None,
        environ: Optional[Mapping[str, str]] = None,
        store: Optional[CursorStore] = None,
    ):
        self.base_env_name = base_env_name
        self.storage = parse_storage(storage)
        self._environ = environ
        self._store = store

    @property
    def cursor_key(self) -> str:
        return cursor_key_for(self.base_env_name)

    @property
    def keys(self) -> list[str]:
        return get_env_keys(self.base_env_name, self._environ)

    @property
    def key_count(self) -> int:
        return len(self.keys)

    @property
    def store(self) -> CursorStore:
        if self._store is None:
            self._store = get_cursor_store(self.storage)
        return self._store

    def _rotate(self) -> EnvKeyResult:
        keys = self.keys
        if not keys:
            raise NoCandidatesError(self.base_env_name)

        if len(keys) == 1:
            return EnvKeyResult(key=keys[0], index=0, message=SINGLE_KEY_MESSAGE)

        current, next_index = self.store.advance(self.cursor_key, len(keys))
        return EnvKeyResult(
            key=keys[current],
            index=next_index,
            message=(
                f"Successfully retrieved the key and updated the {self.store.label} cache. "
                f"Current index: {next_index}"
            ),
        )

    def next(self) -> EnvKeyResult:
        """Return the key to use now and advance the stored cursor."""
        try:
            return self._rotate()
        except Exception as e:
            logger.warning(f"{self.base_env_name}: rotation failed ({type(e).__name__}): {e}")
            return EnvKeyResult(key="", index=0, message=f"Error: {e}")


def get_next_env_key(
    base_env_name: str,
    storage: Union[StorageType, str, None] = None,
    environ: Optional[Mapping[str, str]] = None,
    store: Optional[CursorStore] = None,
) -> EnvKeyResult:
    """
    Get the next environment value for `base_env_name`.

    Args:
        base_env_name: Prefix of the environment variable names to rotate over
        storage: "DISK", "MEMORY" or "DATABASE" (default from ENV_KEY_STORAGE)
        environ: Configuration mapping to scan instead of os.environ
        store: Cursor store to use instead of the one `storage` selects

    Returns:
        EnvKeyResult with the key, the index served next time and a message
    """
    return KeyRotator(base_env_name, storage=storage, environ=environ, store=store).next()
