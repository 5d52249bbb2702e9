"""Abstract base class for short URL cache DAOs.

The cache is an expiration-based accelerator in front of the durable store.
It is never authoritative: entries map a short ID to its long URL and expire
after a fixed TTL.
"""

from abc import ABC, abstractmethod


class ShortURLCacheBaseDAO(ABC):
    """Interface for short URL cache data access objects (DAOs).

    Methods:
        set(short_id: str, long_url: str, ttl: int) -> ShortURLCacheBaseDAO:
            Cache a short ID -> long URL entry which expires after `ttl` seconds.
            Raises CacheUnavailableError on connection or write failure.

        get(short_id: str) -> str:
            Return the cached long URL.
            Raises CacheMissError if the entry is missing or expired.
            Raises CacheUnavailableError on connection or read failure.

        delete(*short_ids: str) -> int:
            Remove cache entries and return how many existed.
            Missing entries are not an error.
            Raises CacheUnavailableError on connection or write failure.
    """

    @abstractmethod
    def set(self, short_id: str, long_url: str, ttl: int) -> 'ShortURLCacheBaseDAO':
        pass

    @abstractmethod
    def get(self, short_id: str) -> str:
        pass

    @abstractmethod
    def delete(self, *short_ids: str) -> int:
        pass
