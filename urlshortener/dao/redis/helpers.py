import functools
from typing import Any
from collections.abc import Callable

import redis


__all__ = []

# Connectivity failures: refused/dropped connections and socket timeouts
REDIS_UNAVAILABLE_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_errors[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis errors

    The raised exception type is taken from the DAO's `unavailable_error`
    attribute, so the same decorator serves the durable store (DataStoreError)
    and the cache (CacheUnavailableError).

    Besides connectivity issues, any other redis.exceptions.RedisError reaching
    the wrapper (OOM under `noeviction`, READONLY replicas, WRONGTYPE keys, ...)
    means the operation failed on the server, and is translated the same way.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises `self.unavailable_error` when Redis fails.

    Example:
        >>> @handle_redis_errors
        ... def get(self, short_id):
        ...     return self.redis.hgetall(self.keys.link_key(short_id))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_UNAVAILABLE_ERRORS as e:
            raise self.unavailable_error(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise self.unavailable_error(f'Redis at {redis_location(self.redis)} rejected the command: {e}') from e

    return wrapper
