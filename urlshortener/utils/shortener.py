"""Short identifier generation utility

Functions:
    generate_short_id(long_url, timestamp_ns=None, length=8):
        Derive a fixed-length, URL-safe short identifier for a long URL.
    is_valid_short_id(short_id, length=8):
        Check that a string looks like a generated short identifier.

Example:
    >>> from urlshortener.utils import generate_short_id
    >>> generate_short_id('https://example.com', timestamp_ns=1700000000000000000)
    'hDhATM6s'
"""

import time
import base64
import hashlib

from urlshortener.constants import ShortID


def generate_short_id(long_url: str, timestamp_ns: int | None = None, length: int = ShortID.LENGTH) -> str:
    """Generate a short identifier from a long URL and a high-resolution timestamp.

    The identifier is the URL-safe base64 encoding of SHA-1(long_url + timestamp),
    truncated to `length` characters. Mixing in the timestamp makes repeated
    shortening of the same URL yield distinct identifiers.

    Args:
        long_url (str):
            The URL being shortened.

        timestamp_ns (int, optional):
            Nanosecond timestamp mixed into the digest. Defaults to time.time_ns().

        length (int, optional):
            Length of the identifier. Defaults to 8. At most 27 (the unpadded
            base64 length of a SHA-1 digest).

    Returns:
        str: identifier over the alphabet [A-Za-z0-9_-].

    NOTE:
        Collisions are astronomically unlikely (64^8 space) but not impossible.
        Uniqueness is enforced by the durable store on insert.
    """
    if not isinstance(long_url, str):
        raise TypeError(f'URL must be of type string (given type: {type(long_url)}).')
    if not 0 < length <= 27:
        raise ValueError(f'Short ID length must be between 1 and 27 (given value: {length}).')

    if timestamp_ns is None:
        timestamp_ns = time.time_ns()

    digest = hashlib.sha1(f'{long_url}{timestamp_ns}'.encode(), usedforsecurity=False).digest()
    return base64.urlsafe_b64encode(digest).decode('ascii')[:length]


def is_valid_short_id(short_id: str, length: int = ShortID.LENGTH) -> bool:
    """Return True if `short_id` has the generated length and only URL-safe characters."""
    return isinstance(short_id, str) and len(short_id) == length and all(c in ShortID.ALPHABET for c in short_id)
