import functools
from collections.abc import Callable


__all__ = ['CacheKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}'

    return wrapper


class CacheKeySchema:
    """Provide standardized Redis keys for cached short URL entries.

    All keys live under the 'cache' namespace, optionally followed by an
    app/environment prefix, e.g. "cache:urlshortener:prod:links:abc12345".

    NOTE: Yes, this class mirrors RedisKeySchema, but cache keys must never
    collide with durable store keys when both share a Redis instance.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = f'cache:{prefix}' if prefix is not None else 'cache'

    @prefix_key
    def link_key(self, short_id: str) -> str:
        return f'links:{short_id}'
