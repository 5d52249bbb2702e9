"""Bearer token authentication for mutating lambda handlers.

The expected token is read from the AUTH_TOKEN environment variable on every
request. When it is unset, every request is rejected.

Example:
    >>> @require_bearer_token
    ... def lambda_handler(event, context):
    ...     ...
    >>> lambda_handler({'headers': {'Authorization': 'Bearer s3cret'}}, None)
"""

import os
import hmac
import logging
import functools
from collections.abc import Callable

from urlshortener.constants import ENV
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.responses import response_401


logger = logging.getLogger(__name__)

MISSING_TOKEN = 'MISSING_TOKEN'  # noqa: S105
INVALID_TOKEN = 'INVALID_TOKEN'  # noqa: S105

BEARER_PREFIX = 'Bearer '


def bearer_token(event: LambdaEvent) -> str | None:
    """Return the token from the event's Authorization header, or None if absent or not a Bearer header."""
    headers = event.get('headers') or {}
    # API Gateway preserves the client's header casing
    authorization = next((v for k, v in headers.items() if k.lower() == 'authorization'), None)
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].strip() or None


def require_bearer_token(handler: Callable) -> Callable:
    """Decorator: respond with 401 unless the request carries `Bearer <AUTH_TOKEN>`."""

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        provided = bearer_token(event)
        if provided is None:
            logger.info('Missing bearer token. Responding with 401.', extra={'event': MISSING_TOKEN})
            return response_401(message='missing or malformed bearer token', error_code=MISSING_TOKEN)

        expected = os.environ.get(ENV.App.AUTH_TOKEN)
        if not expected:
            logger.error('AUTH_TOKEN is not configured. Rejecting request with 401.', extra={'event': INVALID_TOKEN})
            return response_401(message='invalid bearer token', error_code=INVALID_TOKEN)

        if not hmac.compare_digest(provided.encode(), expected.encode()):
            logger.info('Invalid bearer token. Responding with 401.', extra={'event': INVALID_TOKEN})
            return response_401(message='invalid bearer token', error_code=INVALID_TOKEN)

        return handler(event, context)

    return wrapper
