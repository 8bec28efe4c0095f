import pytest

from domain.athletes import AthleteRegistry, AthleteStorage, StorageReadError, StorageWriteError
from infrastructure.key_value import InMemoryKeyValueStore, KeyValueStore
from khelbharat import create_app


class BrokenStore(KeyValueStore):
    """Storage that is disabled or over quota: every read and write fails."""

    def get_item(self, key):
        raise StorageReadError("storage disabled")

    def set_item(self, key, value):
        raise StorageWriteError("quota exceeded")


class CountingStorage(AthleteStorage):
    def __init__(self, store):
        super().__init__(store)
        self.saves = 0

    def save(self, athletes):
        self.saves += 1
        return super().save(athletes)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def storage(store):
    return CountingStorage(store)


@pytest.fixture
def registry(storage):
    """Registry over an empty store, so it starts from the seed roster."""
    return AthleteRegistry(storage)


@pytest.fixture
def empty_registry(storage):
    return AthleteRegistry(storage, athletes=[])


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_registry(app):
    return app.extensions["athlete_registry"]


@pytest.fixture
def json_headers():
    return {"Accept": "application/json"}
