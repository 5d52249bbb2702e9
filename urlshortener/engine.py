"""Shortening/resolution engine

The engine implements the cache-aside protocol between a volatile cache
(ShortURLCacheBaseDAO) and an authoritative durable store (ShortURLBaseDAO):

    create(long_url)   -> store insert, then cache write; returns the short URL
    resolve(short_id)  -> cache lookup; on a miss, atomic store find-and-increment
                          followed by a best-effort cache repopulation
    delete(short_id)   -> cache removal (best effort), then store removal
    stats(short_id)    -> store read

Collaborators are injected, so the engine never creates clients on its own.
`build_engine()` wires them from a lambda's AppConfig section.

Example:
    >>> with ShortenerEngine(store, cache, base_url='https://sho.rt/') as engine:
    ...     short_url = engine.create('https://example.com/some/long/path')
    ...     short_id = short_url.rsplit('/', 1)[-1]
    ...     engine.resolve(short_id)
    'https://example.com/some/long/path'
"""

import logging
import functools
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime, UTC
from typing import Any, Optional

from urlshortener.models import URLMapping
from urlshortener.constants import TTL, Defaults, Backend
from urlshortener.exceptions import ShortIDGenerationError, BadConfigurationError
from urlshortener.types import LambdaConfiguration
from urlshortener.dao.base import ShortURLBaseDAO, ShortURLCacheBaseDAO
from urlshortener.dao.cache import ShortURLCacheDAO
from urlshortener.dao.redis import ShortURLRedisDAO
from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO
from urlshortener.dao.exceptions import (
    CacheMissError,
    CacheUnavailableError,
    DataStoreError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
)
from urlshortener.utils.config import app_prefix
from urlshortener.utils.deadline import Deadline
from urlshortener.utils.helpers import get_short_url
from urlshortener.utils.shortener import generate_short_id
from urlshortener.utils.validators import validate_long_url, validate_short_id


logger = logging.getLogger(__name__)


class ShortenerEngine:
    """Cache-aside URL shortening engine

    Attributes:
        store (ShortURLBaseDAO):
            Authoritative record store. Source of truth for existence.
        cache (ShortURLCacheBaseDAO):
            Volatile short ID -> long URL cache.
        base_url (str):
            Externally addressable prefix of every short URL.
        cache_ttl (int):
            Expiration of cache entries in seconds.
        max_collision_retries (int):
            Extra identifier generations allowed after a collision in create().
        strict_cache_writes (bool):
            If True, a failed cache write in create() is raised as
            CacheUnavailableError (the durable record is kept). If False it
            is only logged.
        timeout (Optional[float]):
            Default per-operation deadline in seconds. None means no deadline.
    """

    def __init__(
        self,
        store: ShortURLBaseDAO,
        cache: ShortURLCacheBaseDAO,
        base_url: str = Defaults.BASE_URL,
        cache_ttl: int = TTL.ONE_DAY,
        max_collision_retries: int = Defaults.MAX_COLLISION_RETRIES,
        strict_cache_writes: bool = True,
        timeout: Optional[float] = None,
        executor: Optional[Executor] = None,
    ):
        if cache_ttl <= 0:
            raise ValueError(f'Cache TTL must be a positive number of seconds (given value: {cache_ttl}).')
        if max_collision_retries < 0:
            raise ValueError(f'Collision retries must be non-negative (given value: {max_collision_retries}).')

        self.store = store
        self.cache = cache
        self.base_url = base_url
        self.cache_ttl = cache_ttl
        self.max_collision_retries = max_collision_retries
        self.strict_cache_writes = strict_cache_writes
        self.timeout = timeout

        self._owns_executor = executor is None
        if executor is None:
            executor = ThreadPoolExecutor(max_workers=Defaults.BACKGROUND_WORKERS, thread_name_prefix='access-count')
        self._executor = executor

    def __enter__(self) -> 'ShortenerEngine':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self, wait: bool = True) -> None:
        """Shut down the background executor if the engine created it.

        With wait=True, pending access-count increments finish first.
        """
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def create(self, long_url: str, timeout: Optional[float] = None) -> str:
        """Shorten a long URL and return the short URL

        Raises:
            ValidationError:
                If the URL is malformed. Neither layer is touched.
            ShortIDGenerationError:
                If every generated short ID collided with an existing one.
            DataStoreError:
                If the durable store insert failed or the deadline expired before it.
            CacheUnavailableError:
                If strict cache writes are enabled and the cache write failed.
                The durable record exists at that point.
        """
        validate_long_url(long_url)
        deadline = self._deadline(timeout)

        mapping = self._insert_unique(long_url, deadline)
        logger.info('Stored new short URL mapping.', extra={'shortId': mapping.short_id})

        try:
            deadline.ensure(CacheUnavailableError, 'cache write')
            self.cache.set(mapping.short_id, mapping.long_url, ttl=self.cache_ttl)
        except CacheUnavailableError:
            if self.strict_cache_writes:
                logger.error('Cache write failed after durable insert.', extra={'shortId': mapping.short_id})
                raise
            logger.warning('Cache write failed after durable insert. Continuing.', extra={'shortId': mapping.short_id})

        return get_short_url(mapping.short_id, self.base_url)

    def resolve(self, short_id: str, timeout: Optional[float] = None) -> str:
        """Return the long URL for a short ID, counting the access

        Cache errors are never surfaced: an unreachable cache is treated as a miss.

        Raises:
            ValidationError:
                If the short ID is malformed.
            ShortURLNotFoundError:
                If the durable store has no mapping for the short ID.
            DataStoreError:
                If the store lookup failed or the deadline expired before it.
        """
        validate_short_id(short_id)
        deadline = self._deadline(timeout)

        try:
            deadline.ensure(CacheUnavailableError, 'cache lookup')
            long_url = self.cache.get(short_id)
        except CacheMissError:
            logger.debug('Cache miss.', extra={'shortId': short_id})
        except CacheUnavailableError:
            logger.warning('Cache lookup failed. Falling back to durable store.', exc_info=True, extra={'shortId': short_id})
        else:
            logger.debug('Cache hit.', extra={'shortId': short_id})
            self._record_hit(short_id)
            return long_url

        deadline.ensure(DataStoreError, 'store lookup')
        mapping = self.store.find_and_increment(short_id)

        try:
            deadline.ensure(CacheUnavailableError, 'cache repopulation')
            self.cache.set(short_id, mapping.long_url, ttl=self.cache_ttl)
        except CacheUnavailableError:
            logger.warning('Cache repopulation failed.', extra={'shortId': short_id})

        return mapping.long_url

    def delete(self, short_id: str, timeout: Optional[float] = None) -> None:
        """Remove a mapping from the cache and the durable store

        The cache entry is removed first. If the store deletion then fails, the
        mapping still exists and the cache is repopulated on the next resolve.

        Raises:
            ValidationError:
                If the short ID is malformed.
            ShortURLNotFoundError:
                If the durable store had no mapping for the short ID.
            DataStoreError:
                If the store deletion failed or the deadline expired before it.
        """
        validate_short_id(short_id)
        deadline = self._deadline(timeout)

        try:
            deadline.ensure(CacheUnavailableError, 'cache delete')
            self.cache.delete(short_id)
        except CacheUnavailableError:
            logger.warning('Cache delete failed. Entry expires on its own.', extra={'shortId': short_id})

        deadline.ensure(DataStoreError, 'store delete')
        if self.store.delete(short_id) == 0:
            raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.")
        logger.info('Deleted short URL mapping.', extra={'shortId': short_id})

    def stats(self, short_id: str, timeout: Optional[float] = None) -> URLMapping:
        """Return the durable record of a mapping, including its access count

        Raises:
            ValidationError, ShortURLNotFoundError, DataStoreError
        """
        validate_short_id(short_id)
        deadline = self._deadline(timeout)

        deadline.ensure(DataStoreError, 'store read')
        return self.store.get(short_id)

    def _deadline(self, timeout: Optional[float]) -> Deadline:
        return Deadline(self.timeout if timeout is None else timeout)

    def _insert_unique(self, long_url: str, deadline: Deadline) -> URLMapping:
        for attempt in range(self.max_collision_retries + 1):
            deadline.ensure(DataStoreError, 'store insert')
            mapping = URLMapping(
                short_id=generate_short_id(long_url),
                long_url=long_url,
                created_at=datetime.now(UTC),
            )
            try:
                self.store.insert(mapping)
            except ShortURLAlreadyExistsError:
                logger.warning('Short ID collision. Regenerating.', extra={'shortId': mapping.short_id, 'attempt': attempt})
            else:
                return mapping

        raise ShortIDGenerationError(f'Failed to generate a unique short ID after {self.max_collision_retries + 1} attempts.')

    def _record_hit(self, short_id: str) -> None:
        # Fire-and-forget: a lost increment only skews the access count
        try:
            future = self._executor.submit(self.store.increment_access_count, short_id)
        except RuntimeError:
            logger.warning('Executor is shut down. Access count not recorded.', extra={'shortId': short_id})
            return
        future.add_done_callback(functools.partial(_log_hit_failure, short_id))


def _log_hit_failure(short_id: str, future: Future) -> None:
    error = future.exception()
    if error is not None:
        logger.warning(
            'Failed to record access count.',
            exc_info=(type(error), error, error.__traceback__),
            extra={'shortId': short_id},
        )


def _redis_kwargs(section: dict[str, Any], timeout: Optional[float]) -> dict[str, Any]:
    kwargs = {f'redis_{k}': v for k, v in section.items()}
    if timeout is not None:
        kwargs.setdefault('redis_socket_timeout', timeout)
    return kwargs


def build_engine(config: LambdaConfiguration, base_url: Optional[str] = None) -> ShortenerEngine:
    """Wire a ShortenerEngine from a lambda's configuration section

    Args:
        config (LambdaConfiguration):
            Output of `load_config()`: 'active_backend', the backend's
            settings, 'cache' and 'engine'.
        base_url (Optional[str]):
            Fallback short URL base when 'engine.base_url' is not configured.

    Raises:
        BadConfigurationError:
            If 'active_backend' names an unsupported backend.

    Example:
        >>> config = load_config('redirect_url')
        >>> with build_engine(config, base_url='https://sho.rt') as engine:
        ...     engine.resolve('abc12345')
    """
    settings = config.get('engine', {})
    timeout = settings.get('timeout')
    backend = config.get('active_backend')

    # Clients skip the startup PING: outages surface per operation instead
    if backend == Backend.REDIS:
        store = ShortURLRedisDAO(**_redis_kwargs(config[backend], timeout), prefix=app_prefix(), healthcheck=False)
    elif backend == Backend.DYNAMODB:
        store_kwargs = dict(config[backend])
        if timeout is not None:
            store_kwargs.setdefault('timeout', timeout)
        store = ShortURLDynamoDBDAO(**store_kwargs)
    else:
        raise BadConfigurationError(f"Unsupported active backend '{backend}'. Expected one of: {', '.join(Backend)}.")

    cache = ShortURLCacheDAO(**_redis_kwargs(config.get('cache', {}), timeout), prefix=app_prefix(), healthcheck=False)

    logger.debug('Built shortener engine.', extra={'backend': backend})
    return ShortenerEngine(
        store,
        cache,
        base_url=settings.get('base_url') or base_url or Defaults.BASE_URL,
        cache_ttl=int(settings.get('cache_ttl', TTL.ONE_DAY)),
        max_collision_retries=int(settings.get('max_collision_retries', Defaults.MAX_COLLISION_RETRIES)),
        strict_cache_writes=bool(settings.get('strict_cache_writes', True)),
        timeout=timeout,
    )
