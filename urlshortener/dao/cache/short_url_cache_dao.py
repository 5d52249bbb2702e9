"""DAO for caching short ID -> long URL entries in Redis

Responsibilities:
    - Write cache entries with a fixed expiration (SET ... EX <ttl>)
    - Read cache entries, signalling misses with CacheMissError
    - Remove cache entries (missing keys are not an error)
    - Translate Redis connectivity issues and command errors into CacheUnavailableError

Classes:
    ShortURLCacheDAO:
        Concrete cache DAO backed by Redis. Reuses RedisClientMixin for client
        setup and assigns CacheKeySchema for key generation.

Example:
    >>> dao = ShortURLCacheDAO(redis_host="localhost", redis_db=1, prefix="urlshortener:dev")
    >>> dao.set("abc12345", "https://example.com", ttl=86400)
    <ShortURLCacheDAO>
    >>> dao.get("abc12345")
    'https://example.com'
    >>> dao.delete("abc12345")
    1
    >>> dao.get("abc12345")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.CacheMissError: Short ID 'abc12345' not found in cache.
"""

from beartype import beartype

from urlshortener.dao.base import ShortURLCacheBaseDAO
from urlshortener.dao.cache.cache_key_schema import CacheKeySchema
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_errors
from urlshortener.dao.exceptions import CacheMissError, CacheUnavailableError


class ShortURLCacheDAO(RedisClientMixin, ShortURLCacheBaseDAO):
    """Redis-backed cache for short URL entries

    Attributes (via mixins):
        redis (redis.Redis):
            Redis client used to communicate with the cache.
        keys (CacheKeySchema):
            Key schema helper for generating namespaced cache keys.

    Methods:
        set(short_id: str, long_url: str, ttl: int) -> ShortURLCacheDAO
        get(short_id: str) -> str
        delete(*short_ids: str) -> int

        All methods raise CacheUnavailableError on connectivity issues or command errors from Redis.
    """

    unavailable_error = CacheUnavailableError

    def __init__(self, *args, prefix: str | None = None, **kwargs):
        super().__init__(*args, prefix=prefix, **kwargs)
        self.keys = CacheKeySchema(prefix=prefix)

    @handle_redis_errors
    @beartype
    def set(self, short_id: str, long_url: str, ttl: int) -> 'ShortURLCacheDAO':
        """Cache a long URL under its short ID for `ttl` seconds

        Raises:
            ValueError:
                If ttl is not a positive number of seconds.
            CacheUnavailableError:
                If Redis is unreachable or rejects the command.
        """
        if ttl <= 0:
            raise ValueError(f'Cache TTL must be a positive number of seconds (given value: {ttl}).')

        self.redis.set(self.keys.link_key(short_id), long_url, ex=ttl)
        return self

    @handle_redis_errors
    @beartype
    def get(self, short_id: str) -> str:
        """Return the cached long URL for a short ID

        Raises:
            CacheMissError:
                If the entry is missing or has expired.
            CacheUnavailableError:
                If Redis is unreachable or rejects the command.
        """
        long_url = self.redis.get(self.keys.link_key(short_id))
        if long_url is None:
            raise CacheMissError(f"Short ID '{short_id}' not found in cache.")
        return long_url

    @handle_redis_errors
    @beartype
    def delete(self, *short_ids: str) -> int:
        """Remove cached entries and return how many of them existed

        Raises:
            CacheUnavailableError:
                If Redis is unreachable or rejects the command.
        """
        if not short_ids:
            return 0
        return int(self.redis.delete(*(self.keys.link_key(short_id) for short_id in short_ids)))
