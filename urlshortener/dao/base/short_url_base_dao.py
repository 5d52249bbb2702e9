"""Abstract base class for durable short URL data access objects (DAOs).

This class establishes a consistent contract for all durable store DAO
implementations, regardless of the underlying storage mechanism (e.g., Redis,
DynamoDB).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting URLMapping objects.
    - Provide both a synchronous increment-on-read and a fire-and-forget increment
      of the access counter.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from urlshortener.models import URLMapping
        >>> from urlshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> mapping = URLMapping(
        ...     short_id="abc12345",
        ...     long_url="https://example.com/blog/article-123",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.insert(mapping)

        >>> dao.find_and_increment("abc12345").access_count
        1

        >>> dao.delete("abc12345")
        1
"""

from abc import ABC, abstractmethod

from urlshortener.models import URLMapping


class ShortURLBaseDAO(ABC):
    """Interface for durable short URL data access objects (DAOs).

    The durable store is the single source of truth for the existence of a
    short ID. Implementations must enforce short ID uniqueness on insert and
    perform find_and_increment() atomically.

    Methods:
        insert(mapping: URLMapping, **kwargs) -> ShortURLBaseDAO:
            Insert a new URLMapping into the data store.
            Raises ShortURLAlreadyExistsError if the short ID already exists.
            Raises DataStoreError on connection or write failure.

        get(short_id: str, **kwargs) -> URLMapping:
            Retrieve a URLMapping by short ID without touching its access count.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        find_and_increment(short_id: str, **kwargs) -> URLMapping:
            Atomically increment the access count and return the updated URLMapping.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

        increment_access_count(short_id: str, **kwargs) -> None:
            Increment the access count without reading the record back.
            Raises ShortURLNotFoundError / DataStoreError; callers may ignore them.

        delete(short_id: str, **kwargs) -> int:
            Delete a URLMapping and return the number of removed records (0 or 1).
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLDynamoDBDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def insert(self, mapping: URLMapping, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new URLMapping into the data store.

        Args:
            mapping (URLMapping):
                The URLMapping instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a URLMapping with the same short ID already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_id: str, **kwargs) -> URLMapping:
        """Retrieve a URLMapping from the data store by its short ID.

        Args:
            short_id (str):
                The short ID of the URLMapping to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            URLMapping: The stored URLMapping.

        Raises:
            ShortURLNotFoundError:
                If no URLMapping with the given short ID exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_and_increment(self, short_id: str, **kwargs) -> URLMapping:
        """Atomically increment the access count and return the updated URLMapping.

        Args:
            short_id (str):
                The short ID of the URLMapping to be resolved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            URLMapping: The URLMapping after the increment.

        Raises:
            ShortURLNotFoundError:
                If no URLMapping with the given short ID exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def increment_access_count(self, short_id: str, **kwargs) -> None:
        """Increment the access count of a URLMapping.

        Args:
            short_id (str):
                The short ID of the URLMapping to be updated.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            ShortURLNotFoundError:
                If no URLMapping with the given short ID exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, short_id: str, **kwargs) -> int:
        """Delete a URLMapping from the data store.

        Args:
            short_id (str):
                The short ID of the URLMapping to be deleted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: Number of deleted records (0 if the short ID did not exist).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
