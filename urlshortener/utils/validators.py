"""Input validation for long URLs and short identifiers.

Both validators raise ValidationError so that malformed input is rejected
before the cache or the durable store is touched.
"""

from urllib.parse import urlparse

from urlshortener.constants import Defaults
from urlshortener.exceptions import ValidationError
from urlshortener.utils.shortener import is_valid_short_id


def validate_long_url(long_url: str, max_length: int = Defaults.MAX_URL_LENGTH) -> str:
    """Return the URL unchanged if it is an absolute http(s) URL, else raise ValidationError.

    Example:
        >>> validate_long_url('https://example.com')
        'https://example.com'
        >>> validate_long_url('ftp://example.com')
        Traceback (most recent call last):
            ...
        urlshortener.exceptions.ValidationError: URL must use http or https scheme.
    """
    if not isinstance(long_url, str) or not long_url.strip():
        raise ValidationError('URL is required.')
    if len(long_url) > max_length:
        raise ValidationError(f'URL is too long (max {max_length} characters).')
    if any(c.isspace() for c in long_url):
        raise ValidationError('URL must not contain whitespace.')

    try:
        components = urlparse(long_url)
        # Accessing .port validates it is numeric and in range
        components.port
    except ValueError as e:
        raise ValidationError(f'Invalid URL format: {e}') from e

    if components.scheme not in {'http', 'https'}:
        raise ValidationError('URL must use http or https scheme.')
    if not components.hostname:
        raise ValidationError('URL must have a valid host.')
    return long_url


def validate_short_id(short_id: str) -> str:
    """Return the short ID unchanged if well-formed, else raise ValidationError."""
    if not is_valid_short_id(short_id):
        raise ValidationError(f'Invalid short ID {short_id!r}.')
    return short_id
