import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import STORE_UNAVAILABLE, CACHE_UNAVAILABLE
from urlshortener.engine import build_engine
from urlshortener.exceptions import ConfigurationError, ShortIDGenerationError, ValidationError
from urlshortener.dao.exceptions import CacheUnavailableError, DataStoreError
from urlshortener.utils import load_config, base_url, initialize_logging, guarantee_500_response
from urlshortener.utils.auth import require_bearer_token
from urlshortener.utils.responses import response_200, response_400, response_500
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON,
    MISSING_URL,
    INVALID_URL,
    SHORT_ID_GENERATION_FAILED,
    SHORTEN_SUCCESS,
)


initialize_logging()
logger = logging.getLogger(__name__)


@guarantee_500_response
@require_bearer_token
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract long URL from request body
    - Step 2: Create the mapping (durable store, then cache)
    - Step 3: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            short_url: newly generated short url
        400: Bad client request
            message: invalid JSON, missing or malformed 'url'
        401: Unauthorized
            message: missing or invalid bearer token
        500: Internal server error
            message: durable store or cache unavailable, or unexpected error

    Example:
        >>> event = {
        ...     'headers': {'Authorization': 'Bearer s3cret'},
        ...     'body': '{"url": "https://example.com"}',
        ... }
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['short_url']
        'https://sho.rt/hDhATM6s'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except (KeyError, ConfigurationError):
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500()

    # 1- Extract long URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    long_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not long_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 2- Create the mapping
    with build_engine(app_config, base_url=base_url(event)) as engine:
        try:
            short_url = engine.create(long_url)
        except ValidationError as e:
            logger.info('Invalid long URL. Responding with 400.', extra={'event': INVALID_URL})
            return response_400(message=str(e), error_code=INVALID_URL)
        except ShortIDGenerationError:
            logger.exception('Short ID generation failed. Responding with 500.', extra={'event': SHORT_ID_GENERATION_FAILED})
            return response_500(message='failed to generate a unique short ID', error_code=SHORT_ID_GENERATION_FAILED)
        except DataStoreError:
            logger.exception('Durable store unavailable. Responding with 500.', extra={'event': STORE_UNAVAILABLE})
            return response_500(message='durable store unavailable', error_code=STORE_UNAVAILABLE)
        except CacheUnavailableError:
            logger.exception('Cache unavailable. Responding with 500.', extra={'event': CACHE_UNAVAILABLE})
            return response_500(message='cache unavailable', error_code=CACHE_UNAVAILABLE)

    # 3- Respond with the short URL
    logger.info('Shortened URL. Responding with 200.', extra={'shortUrl': short_url, 'event': SHORTEN_SUCCESS})
    return response_200({'short_url': short_url})
