import pytest

from urlshortener.dao.redis import RedisKeySchema


def test_link_key_with_prefix():
    keys = RedisKeySchema(prefix='urlshortener:prod')
    assert keys.link_key('abc12345') == 'urlshortener:prod:links:abc12345'


def test_link_key_without_prefix():
    keys = RedisKeySchema()
    assert keys.link_key('abc12345') == 'links:abc12345'


def test_invalid_prefix_type():
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=42)
