"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a URLMapping is not found in the durable store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a URLMapping whose short ID is taken.

    DataStoreError:
        Raised when the durable store is unavailable (connection issues, timeouts, throttling, etc.).

    CacheMissError:
        Raised when a requested cache entry is missing or expired.

    CacheUnavailableError:
        Raised when a cache read, write or delete fails (connection issues, timeouts, etc.).

Example:
    >>> from urlshortener.dao.exceptions import CacheMissError
    >>> raise CacheMissError("Short ID 'abc12345' not found in cache.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.CacheMissError: Short ID 'abc12345' not found in cache.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a URLMapping is not found in the durable store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a URLMapping that already exists in the durable store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the durable store.

    e.g. connection issues, timeouts, throttling, etc.
    """

    pass


class CacheMissError(DAOError):
    """Exception raised when a requested cache entry is missing."""

    pass


class CacheUnavailableError(DAOError):
    """Exception raised when the cache cannot be read from or written to."""

    pass
