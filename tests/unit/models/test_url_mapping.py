import dataclasses
from datetime import datetime, UTC

import pytest

from urlshortener.models import URLMapping


def test_url_mapping_defaults():
    mapping = URLMapping(short_id='abc12345', long_url='https://example.com', created_at=datetime(2025, 10, 15, tzinfo=UTC))

    assert mapping.access_count == 0


def test_url_mapping_is_immutable():
    mapping = URLMapping(short_id='abc12345', long_url='https://example.com', created_at=datetime(2025, 10, 15, tzinfo=UTC))

    with pytest.raises(dataclasses.FrozenInstanceError):
        mapping.long_url = 'https://evil.com'


def test_url_mapping_to_dict():
    mapping = URLMapping(
        short_id='abc12345',
        long_url='https://example.com',
        created_at=datetime(2025, 10, 15, 12, 30, tzinfo=UTC),
        access_count=7,
    )

    assert mapping.to_dict() == {
        'short_id': 'abc12345',
        'long_url': 'https://example.com',
        'created_at': '2025-10-15T12:30:00+00:00',
        'access_count': 7,
    }
