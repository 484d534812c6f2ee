"""
Shared pytest fixtures for the rotation tests.

Provides candidate environments, an in-memory stand-in for a MongoDB
collection, and settings overrides so no test touches a real database.
"""
import copy
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from envkey.config import Settings
from envkey.services import mongo_client
from envkey.services.cursor_store import memory_store


class FakeCollection:
    """Minimal pymongo Collection stand-in that counts calls."""

    def __init__(self, docs=None):
        self.docs = {d["name"]: dict(d) for d in (docs or [])}
        self.calls = []

    def find_one(self, filter):
        self.calls.append(("find_one", filter))
        doc = self.docs.get(filter["name"])
        return copy.deepcopy(doc)

    def insert_one(self, doc):
        self.calls.append(("insert_one", doc))
        self.docs[doc["name"]] = dict(doc)

    def update_one(self, filter, update, upsert=False):
        self.calls.append(("update_one", filter, update))
        name = filter["name"]
        if name not in self.docs:
            if not upsert:
                return
            self.docs[name] = {"name": name}
        self.docs[name].update(update["$set"])

    def delete_one(self, filter):
        self.calls.append(("delete_one", filter))
        self.docs.pop(filter["name"], None)

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def five_keys():
    """Environment with five candidates for API_KEY_ plus noise."""
    return {
        "API_KEY_1": "key-one",
        "OTHER_VAR": "ignored",
        "API_KEY_2": "key-two",
        "API_KEY_3": "key-three",
        "API_KEY_4": "key-four",
        "API_KEY_5": "key-five",
    }


@pytest.fixture(autouse=True)
def reset_process_state():
    """Memory cursors and the cached Mongo client are process-wide."""
    memory_store.clear()
    mongo_client._get_mongo_client.cache_clear()
    yield
    memory_store.clear()
    mongo_client._get_mongo_client.cache_clear()


def make_settings(**overrides) -> Settings:
    values = {
        "db_username": "rotator",
        "db_password": "p@ss:word/1",
        "db_name": "keys",
        "db_cluster": "cluster0.example.mongodb.net",
        "db_connect_attempts": 5,
        "db_connect_backoff_seconds": 1.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def db_settings():
    """Patch the settings seen by the Mongo client module."""
    test_settings = make_settings()
    with patch.object(mongo_client, "get_settings", return_value=test_settings):
        yield test_settings
