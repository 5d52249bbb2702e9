import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import STORE_UNAVAILABLE
from urlshortener.engine import build_engine
from urlshortener.exceptions import ConfigurationError, ValidationError
from urlshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from urlshortener.utils import load_config, base_url, initialize_logging, guarantee_500_response
from urlshortener.utils.responses import response_302, response_400, response_404, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORT_ID,
    INVALID_SHORT_ID,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


initialize_logging()
logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract short ID from request path
    - Step 2: Resolve short ID (cache first, durable store on a miss)
    - Step 3: Redirect client to long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL destination
        400: Bad client request
            message: missing or invalid short ID in path parameters
        404: Not found
            message: short URL doesn't exist
        500: Internal server error
            message: server experienced an internal error (e.g. durable store unavailable)

    Args:
        event (dict):
            API Gateway event payload containing the short_id path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'short_id': 'abc12345'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (KeyError, ConfigurationError):
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()

    # 1- Extract short ID from request's path
    short_id = (event.get('pathParameters') or {}).get('short_id')
    if not short_id:
        logger.info('Missing "short_id" in path. Responding with 400.', extra={'event': MISSING_SHORT_ID})
        return response_400(message="missing 'short_id' in path", error_code=MISSING_SHORT_ID)

    with build_engine(app_config, base_url=base_url(event)) as engine:
        # 2- Resolve short ID
        try:
            long_url = engine.resolve(short_id)
        except ValidationError as e:
            logger.info('Invalid short ID. Responding with 400.', extra={'shortId': short_id, 'event': INVALID_SHORT_ID})
            return response_400(message=str(e), error_code=INVALID_SHORT_ID)
        except ShortURLNotFoundError:
            logger.info('Short URL not found. Responding with 404.', extra={'shortId': short_id, 'event': SHORT_URL_NOT_FOUND})
            return response_404(message=f"short url with ID '{short_id}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)
        except DataStoreError:
            logger.exception('Durable store unavailable. Responding with 500.', extra={'shortId': short_id, 'event': STORE_UNAVAILABLE})
            return response_500(message='durable store unavailable', error_code=STORE_UNAVAILABLE)

    # 3- Redirect client to long URL
    logger.info('Redirecting client to long URL. Responding with 302.', extra={'shortId': short_id, 'event': REDIRECT_SUCCESS})
    return response_302(location=long_url)
