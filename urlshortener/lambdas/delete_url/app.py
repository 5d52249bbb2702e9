import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import STORE_UNAVAILABLE
from urlshortener.engine import build_engine
from urlshortener.exceptions import ConfigurationError, ValidationError
from urlshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from urlshortener.utils import load_config, base_url, initialize_logging, guarantee_500_response
from urlshortener.utils.auth import require_bearer_token
from urlshortener.utils.responses import response_200, response_400, response_404, response_500
from urlshortener.lambdas.delete_url.constants import (
    MISSING_SHORT_ID,
    INVALID_SHORT_ID,
    SHORT_URL_NOT_FOUND,
    DELETE_SUCCESS,
)


initialize_logging()
logger = logging.getLogger(__name__)


@guarantee_500_response
@require_bearer_token
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Delete a short URL from the cache and the durable store

    HTTP responses:
        200: short URL deleted
        400: missing or invalid short ID
        401: missing or invalid bearer token
        404: short URL doesn't exist
        500: durable store unavailable
    """
    try:
        app_config = load_config('delete_url')
    except (KeyError, ConfigurationError):
        logger.exception('Failed to load AppConfig for delete URL function. Responding with 500.')
        return response_500()

    short_id = (event.get('pathParameters') or {}).get('short_id')
    if not short_id:
        logger.info('Missing "short_id" in path. Responding with 400.', extra={'event': MISSING_SHORT_ID})
        return response_400(message="missing 'short_id' in path", error_code=MISSING_SHORT_ID)

    with build_engine(app_config, base_url=base_url(event)) as engine:
        try:
            engine.delete(short_id)
        except ValidationError as e:
            logger.info('Invalid short ID. Responding with 400.', extra={'shortId': short_id, 'event': INVALID_SHORT_ID})
            return response_400(message=str(e), error_code=INVALID_SHORT_ID)
        except ShortURLNotFoundError:
            logger.info('Short URL not found. Responding with 404.', extra={'shortId': short_id, 'event': SHORT_URL_NOT_FOUND})
            return response_404(message=f"short url with ID '{short_id}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)
        except DataStoreError:
            logger.exception('Durable store unavailable. Responding with 500.', extra={'shortId': short_id, 'event': STORE_UNAVAILABLE})
            return response_500(message='durable store unavailable', error_code=STORE_UNAVAILABLE)

    logger.info('Deleted short URL. Responding with 200.', extra={'shortId': short_id, 'event': DELETE_SUCCESS})
    return response_200({'message': 'short URL deleted successfully'})
