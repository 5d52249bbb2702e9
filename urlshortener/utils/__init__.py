from urlshortener.utils.config import app_env, app_name, app_prefix, load_config
from urlshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_short_id, is_valid_short_id
from urlshortener.utils.validators import validate_long_url, validate_short_id
from urlshortener.utils.deadline import Deadline
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_short_id',
    'is_valid_short_id',
    'validate_long_url',
    'validate_short_id',
    'Deadline',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
