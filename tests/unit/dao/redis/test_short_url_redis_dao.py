"""Unit tests for the ShortURLRedisDAO

Test coverage includes:

1. Insertion behavior
   - Validates inserting a mapping writes one hash inside a WATCH/MULTI transaction.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
   - Confirms duplicate short IDs raise ShortURLAlreadyExistsError (existing key or lost WATCH).
   - Confirms Redis connection and command errors (e.g. OOM) raise DataStoreError.

2. Retrieval behavior
   - Ensures fetching valid short IDs returns a populated URLMapping.
   - Confirms missing keys raise ShortURLNotFoundError.

3. Access count operations
   - Ensures find_and_increment() returns the updated mapping from the Lua script.
   - Ensures increment_access_count() runs the increment script.
   - Confirms missing mappings raise ShortURLNotFoundError.

4. Deletion behavior
   - Ensures delete() returns the number of removed hashes.
"""

import re
from datetime import datetime, UTC

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from urlshortener.models import URLMapping
from urlshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from urlshortener.dao.redis import ShortURLRedisDAO
from urlshortener.dao.redis.short_url_redis_dao import FIND_AND_INCREMENT_SCRIPT, INCREMENT_SCRIPT


LINK_KEY = 'testapp:test:links:abc12345'


@pytest.fixture
def dao(redis_client, app_prefix) -> ShortURLRedisDAO:
    return ShortURLRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def mapping() -> URLMapping:
    return URLMapping(short_id='abc12345', long_url='https://example.com/test', created_at=datetime(2025, 10, 15, 12, tzinfo=UTC))


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_short_url(dao, redis_client, mapping):
    assert dao.insert(mapping) is dao

    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.watch.assert_called_once_with(LINK_KEY)
    redis_client.exists.assert_called_once_with(LINK_KEY)
    redis_client.multi.assert_called_once()
    redis_client.hset.assert_called_once_with(
        LINK_KEY,
        mapping={
            'long_url': 'https://example.com/test',
            'created_at': '2025-10-15T12:00:00+00:00',
            'access_count': 0,
        },
    )
    redis_client.execute.assert_called_once()


def test_insert_short_url_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_insert_short_url_which_already_exists(dao, redis_client, mapping):
    redis_client.exists.return_value = True

    with pytest.raises(ShortURLAlreadyExistsError, match=re.escape("Short URL with ID 'abc12345' already exists.")):
        dao.insert(mapping)

    redis_client.hset.assert_not_called()


def test_insert_short_url_with_concurrent_write(dao, redis_client, mapping):
    redis_client.execute.side_effect = redis.exceptions.WatchError('Watched variable changed.')

    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert(mapping)


def test_insert_short_url_with_redis_connection_error(dao, redis_client, mapping):
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection error')
    redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.insert(mapping)


def test_insert_short_url_with_redis_out_of_memory(dao, redis_client, mapping):
    redis_client.execute.side_effect = redis.exceptions.ResponseError("OOM command not allowed when used memory > 'maxmemory'.")

    with pytest.raises(DataStoreError, match='rejected the command: OOM'):
        dao.insert(mapping)


# -------------------------------
# 2. Retrieval behavior
# -------------------------------


def test_get_short_url(dao, redis_client):
    redis_client.hgetall.return_value = {
        'long_url': 'https://example.com/test',
        'created_at': '2025-10-15T12:00:00+00:00',
        'access_count': '41',
    }

    mapping = dao.get('abc12345')

    redis_client.hgetall.assert_called_once_with(LINK_KEY)
    assert mapping == URLMapping(
        short_id='abc12345',
        long_url='https://example.com/test',
        created_at=datetime(2025, 10, 15, 12, tzinfo=UTC),
        access_count=41,
    )


def test_get_short_url_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345678)


def test_get_short_url_that_does_not_exist(dao, redis_client):
    redis_client.hgetall.return_value = {}

    with pytest.raises(ShortURLNotFoundError, match=re.escape("Short URL with ID 'abc12345' not found.")):
        dao.get('abc12345')


def test_get_short_url_with_redis_timeout(dao, redis_client):
    redis_client.hgetall.side_effect = redis.exceptions.TimeoutError('Timeout reading from socket')

    with pytest.raises(DataStoreError):
        dao.get('abc12345')


# -------------------------------
# 3. Access count operations
# -------------------------------


def test_find_and_increment(dao, redis_client):
    script = redis_client.register_script.return_value
    script.return_value = [
        'long_url', 'https://example.com/test',
        'created_at', '2025-10-15T12:00:00+00:00',
        'access_count', '42',
    ]

    mapping = dao.find_and_increment('abc12345')

    redis_client.register_script.assert_called_once_with(FIND_AND_INCREMENT_SCRIPT)
    script.assert_called_once_with(keys=[LINK_KEY])
    assert mapping.short_id == 'abc12345'
    assert mapping.long_url == 'https://example.com/test'
    assert mapping.access_count == 42


def test_find_and_increment_missing_short_url(dao, redis_client):
    redis_client.register_script.return_value.return_value = None

    with pytest.raises(ShortURLNotFoundError):
        dao.find_and_increment('abc12345')


def test_find_and_increment_with_redis_connection_error(dao, redis_client):
    redis_client.register_script.return_value.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        dao.find_and_increment('abc12345')


def test_find_and_increment_on_read_only_replica(dao, redis_client):
    redis_client.register_script.return_value.side_effect = redis.exceptions.ReadOnlyError("You can't write against a read only replica.")

    with pytest.raises(DataStoreError):
        dao.find_and_increment('abc12345')


def test_increment_access_count(dao, redis_client):
    script = redis_client.register_script.return_value
    script.return_value = 7

    assert dao.increment_access_count('abc12345') is None

    redis_client.register_script.assert_called_once_with(INCREMENT_SCRIPT)
    script.assert_called_once_with(keys=[LINK_KEY])


def test_increment_access_count_missing_short_url(dao, redis_client):
    redis_client.register_script.return_value.return_value = None

    with pytest.raises(ShortURLNotFoundError):
        dao.increment_access_count('abc12345')


def test_increment_scripts_never_recreate_deleted_mappings():
    for script in (FIND_AND_INCREMENT_SCRIPT, INCREMENT_SCRIPT):
        assert script.index("'EXISTS'") < script.index("'HINCRBY'")


# -------------------------------
# 4. Deletion behavior
# -------------------------------


@pytest.mark.parametrize('deleted', [0, 1])
def test_delete(dao, redis_client, deleted):
    redis_client.delete.return_value = deleted

    assert dao.delete('abc12345') == deleted
    redis_client.delete.assert_called_once_with(LINK_KEY)


def test_delete_with_redis_connection_error(dao, redis_client):
    redis_client.delete.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        dao.delete('abc12345')
