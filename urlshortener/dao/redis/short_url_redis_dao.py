"""Data Access Object (DAO) implementation for storing URL mappings in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO. Each
URLMapping is persisted as a single Redis hash:

    <prefix>:links:<short_id>  ->  {long_url, created_at, access_count}

Responsibilities:
    - Insert URL mappings while enforcing short ID uniqueness;
    - Retrieve URL mappings with or without incrementing their access count;
    - Atomically increment access counts without resurrecting deleted mappings;
    - Delete URL mappings;
    - Raise appropriate DAO exceptions on missing records and Redis failures.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving URLMapping in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from urlshortener.models import URLMapping
    >>> from urlshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")

    >>> mapping = URLMapping(
    ...     short_id="abc12345",
    ...     long_url="https://example.com/page",
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.insert(mapping)
    <ShortURLRedisDAO>

    >>> dao.find_and_increment("abc12345").access_count
    1
    >>> dao.get("abc12345").access_count
    1
    >>> dao.delete("abc12345")
    1
"""

from datetime import datetime

import redis
from beartype import beartype

from urlshortener.models import URLMapping
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_errors
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


# NOTE: HINCRBY on a missing key would create a partial hash holding only
#       'access_count'. Both scripts check existence first so that a concurrent
#       delete() can never be undone by an increment.
FIND_AND_INCREMENT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
redis.call('HINCRBY', KEYS[1], 'access_count', 1)
return redis.call('HGETALL', KEYS[1])
"""

INCREMENT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
return redis.call('HINCRBY', KEYS[1], 'access_count', 1)
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL mappings

    This class implements the ShortURLBaseDAO interface using Redis hashes.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(mapping: URLMapping, **kwargs) -> ShortURLRedisDAO:
            Insert a URL mapping. Raises ShortURLAlreadyExistsError when the short ID is taken.

        get(short_id: str, **kwargs) -> URLMapping:
            Retrieve a URL mapping. Raises ShortURLNotFoundError when missing.

        find_and_increment(short_id: str, **kwargs) -> URLMapping:
            Increment the access count and return the updated mapping in one round trip.

        increment_access_count(short_id: str, **kwargs) -> None:
            Increment the access count without reading the mapping back.

        delete(short_id: str, **kwargs) -> int:
            Delete a URL mapping and return the number of removed hashes.

        All methods raise DataStoreError on connectivity issues or command errors from Redis.
    """

    @handle_redis_errors
    @beartype
    def insert(self, mapping: URLMapping, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a URL mapping into Redis

        The existence check and the write are guarded with WATCH/MULTI so that
        two concurrent inserts of the same short ID cannot both succeed.

        Args:
            mapping (URLMapping):
                URLMapping instance to persist.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a mapping with the same short ID already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(mapping.short_id)

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                if pipe.exists(link_key):
                    raise ShortURLAlreadyExistsError(f"Short URL with ID '{mapping.short_id}' already exists.")

                pipe.multi()
                # fmt: off
                pipe.hset(link_key, mapping={
                    'long_url': mapping.long_url,
                    'created_at': mapping.created_at.isoformat(),
                    'access_count': mapping.access_count,
                })
                # fmt: on
                pipe.execute()
            except redis.exceptions.WatchError as e:
                # Another client wrote the same key between WATCH and EXEC
                raise ShortURLAlreadyExistsError(f"Short URL with ID '{mapping.short_id}' already exists.") from e
        return self

    @handle_redis_errors
    @beartype
    def get(self, short_id: str, **kwargs) -> URLMapping:
        """Retrieve a stored URL mapping by short ID

        Args:
            short_id (str):
                The short ID identifier of the mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            URLMapping: The stored mapping.

        Raises:
            ShortURLNotFoundError:
                If the mapping does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        fields = self.redis.hgetall(self.keys.link_key(short_id))
        if not fields:
            raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.")
        return self._to_mapping(short_id, fields)

    @handle_redis_errors
    @beartype
    def find_and_increment(self, short_id: str, **kwargs) -> URLMapping:
        """Increment the access count and return the updated mapping

        Executed as a single Lua script, so the existence check, the increment
        and the read are atomic with respect to other clients.

        Raises:
            ShortURLNotFoundError:
                If the mapping does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        script = self.redis.register_script(FIND_AND_INCREMENT_SCRIPT)
        reply = script(keys=[self.keys.link_key(short_id)])
        if reply is None:
            raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.")

        # HGETALL inside Lua returns a flat [field, value, field, value, ...] list
        fields = dict(zip(reply[::2], reply[1::2]))
        return self._to_mapping(short_id, fields)

    @handle_redis_errors
    @beartype
    def increment_access_count(self, short_id: str, **kwargs) -> None:
        """Increment the access count of a mapping

        Raises:
            ShortURLNotFoundError:
                If the mapping does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        script = self.redis.register_script(INCREMENT_SCRIPT)
        if script(keys=[self.keys.link_key(short_id)]) is None:
            raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.")

    @handle_redis_errors
    @beartype
    def delete(self, short_id: str, **kwargs) -> int:
        """Delete a mapping

        Returns:
            int: 1 if the mapping existed, 0 otherwise.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        return int(self.redis.delete(self.keys.link_key(short_id)))

    @staticmethod
    def _to_mapping(short_id: str, fields: dict) -> URLMapping:
        return URLMapping(
            short_id=short_id,
            long_url=fields['long_url'],
            created_at=datetime.fromisoformat(fields['created_at']),
            access_count=int(fields.get('access_count', 0)),
        )
