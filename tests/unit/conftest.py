from concurrent.futures import Executor, Future

import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.models import URLMapping
from urlshortener.dao.base import ShortURLBaseDAO, ShortURLCacheBaseDAO
from urlshortener.dao.exceptions import (
    CacheMissError,
    CacheUnavailableError,
    DataStoreError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
)


class InMemoryStore(ShortURLBaseDAO):
    """Dict-backed durable store. Set `available = False` to simulate an outage."""

    def __init__(self):
        self.mappings: dict[str, URLMapping] = {}
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise DataStoreError('store down')

    def insert(self, mapping, **kwargs):
        self._check()
        if mapping.short_id in self.mappings:
            raise ShortURLAlreadyExistsError(mapping.short_id)
        self.mappings[mapping.short_id] = mapping
        return self

    def get(self, short_id, **kwargs):
        self._check()
        try:
            return self.mappings[short_id]
        except KeyError as e:
            raise ShortURLNotFoundError(short_id) from e

    def find_and_increment(self, short_id, **kwargs):
        self.increment_access_count(short_id)
        return self.mappings[short_id]

    def increment_access_count(self, short_id, **kwargs):
        mapping = self.get(short_id)
        self.mappings[short_id] = URLMapping(
            short_id=mapping.short_id,
            long_url=mapping.long_url,
            created_at=mapping.created_at,
            access_count=mapping.access_count + 1,
        )

    def delete(self, short_id, **kwargs):
        self._check()
        return 1 if self.mappings.pop(short_id, None) is not None else 0


class InMemoryCache(ShortURLCacheBaseDAO):
    """Dict-backed cache without expiration. Set `available = False` to simulate an outage."""

    def __init__(self):
        self.entries: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise CacheUnavailableError('cache down')

    def set(self, short_id, long_url, ttl):
        self._check()
        self.entries[short_id] = long_url
        self.ttls[short_id] = ttl
        return self

    def get(self, short_id):
        self._check()
        try:
            return self.entries[short_id]
        except KeyError as e:
            raise CacheMissError(short_id) from e

    def delete(self, *short_ids):
        self._check()
        return sum(1 for short_id in short_ids if self.entries.pop(short_id, None) is not None)


class SynchronousExecutor(Executor):
    """Run submitted callables immediately so background work is observable in tests."""

    def __init__(self):
        self.shut_down = False

    def submit(self, fn, /, *args, **kwargs):
        if self.shut_down:
            raise RuntimeError('cannot schedule new futures after shutdown')
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True, *, cancel_futures=False):
        self.shut_down = True


@pytest.fixture(autouse=True)
def remote_environment(monkeypatch: MonkeyPatch) -> None:
    """Run every test as if deployed, so handlers turn unexpected errors into 500s."""
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def executor() -> SynchronousExecutor:
    return SynchronousExecutor()
