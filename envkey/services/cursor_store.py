"""
Cursor stores: where the round-robin position for a prefix is kept.

Three interchangeable backends share one small interface:

- MemoryCursorStore: process-lifetime dict, lost on restart
- FileCursorStore: one `{"index": n}` JSON file per cursor key
- RemoteCursorStore: one MongoDB document per cursor key
"""
import os
import json
import logging
import tempfile
import threading
from pathlib import Path
from typing import Optional, Union

from pymongo.collection import Collection

from ..config import get_settings
from ..models import StorageType
from .mongo_client import get_cursor_collection

logger = logging.getLogger(__name__)


class CursorStore:
    """
    Read/write access to a named cursor.

    Subclasses implement `read_index`, `write_index` and `reset`; the
    read-advance-write cycle lives in `advance`.
    """

    label = "cursor"

    def read_index(self, cursor_key: str) -> int:
        raise NotImplementedError

    def write_index(self, cursor_key: str, index: int) -> None:
        raise NotImplementedError

    def reset(self, cursor_key: str) -> None:
        raise NotImplementedError

    def advance(self, cursor_key: str, count: int) -> tuple[int, int]:
        """
        Step the cursor once over a list of `count` candidates.

        Returns (index to serve now, index stored for the next call).
        """
        current = self.read_index(cursor_key) % count
        next_index = (current + 1) % count
        self.write_index(cursor_key, next_index)
        logger.info(f"{cursor_key}: {self.label} cursor {current} -> {next_index}")
        return current, next_index


class MemoryCursorStore(CursorStore):
    """Cursors held in this process only. Thread-safe via a lock."""

    label = "memory"

    def __init__(self):
        self._indexes: dict[str, int] = {}
        self._lock = threading.RLock()

    def read_index(self, cursor_key: str) -> int:
        with self._lock:
            return self._indexes.setdefault(cursor_key, 0)

    def write_index(self, cursor_key: str, index: int) -> None:
        with self._lock:
            self._indexes[cursor_key] = index

    def reset(self, cursor_key: str) -> None:
        with self._lock:
            self._indexes.pop(cursor_key, None)

    def advance(self, cursor_key: str, count: int) -> tuple[int, int]:
        # Hold the lock across read and write so concurrent callers never lose a step
        with self._lock:
            return super().advance(cursor_key, count)

    def clear(self) -> None:
        with self._lock:
            self._indexes.clear()


class FileCursorStore(CursorStore):
    """
    Cursors stored as small JSON files in `cache_dir`.

    An unreadable or malformed file counts as "no cursor yet" and reads as 0.
    Nothing locks the file; with several processes the last writer wins.
    """

    label = "file"

    def __init__(self, cache_dir: Union[str, Path, None] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else get_settings().cache_dir

    def path_for(self, cursor_key: str) -> Path:
        return self.cache_dir / f"{cursor_key}.json"

    def read_index(self, cursor_key: str) -> int:
        path = self.path_for(cursor_key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"{cursor_key}: no usable cursor file at {path} ({type(e).__name__})")
            return 0

        index = data.get("index") if isinstance(data, dict) else None
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            logger.debug(f"{cursor_key}: ignoring malformed cursor file {path}")
            return 0
        return index

    def write_index(self, cursor_key: str, index: int) -> None:
        path = self.path_for(cursor_key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write next to the target, then swap it in
        fd, tmp_name = tempfile.mkstemp(prefix=f".{cursor_key}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"index": index}, f, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def reset(self, cursor_key: str) -> None:
        self.path_for(cursor_key).unlink(missing_ok=True)


class RemoteCursorStore(CursorStore):
    """
    Cursors stored as `{"name": <cursor key>, "index": n}` documents.

    The collection comes from the cached MongoDB client unless one is passed
    in. Read and write are separate round-trips, so two processes advancing
    the same cursor at the same moment can serve the same key twice.
    """

    label = "database"

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_cursor_collection()
        return self._collection

    def read_index(self, cursor_key: str) -> int:
        doc = self.collection.find_one({"name": cursor_key})
        if doc is None:
            self.collection.insert_one({"name": cursor_key, "index": 0})
            logger.info(f"{cursor_key}: created cursor document")
            return 0
        return int(doc.get("index", 0))

    def write_index(self, cursor_key: str, index: int) -> None:
        self.collection.update_one(
            {"name": cursor_key},
            {"$set": {"index": index}},
            upsert=True,
        )

    def reset(self, cursor_key: str) -> None:
        self.write_index(cursor_key, 0)


# Process-wide memory cursors, shared by every caller in this process
memory_store = MemoryCursorStore()


def get_cursor_store(storage: Union[StorageType, str]) -> CursorStore:
    """Cursor store for a storage selector."""
    storage = StorageType(storage)
    if storage is StorageType.MEMORY:
        return memory_store
    if storage is StorageType.DATABASE:
        return RemoteCursorStore()
    return FileCursorStore()
