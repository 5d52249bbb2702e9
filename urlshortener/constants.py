from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Cache entry TTL for short URL mappings (24 hours in seconds)
    ONE_DAY = 86_400  # 60 * 60 * 24


class ShortID:
    """Short identifier format."""

    LENGTH = 8
    ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_'  # URL-safe base64


class Defaults:
    """Default engine settings."""

    BASE_URL = 'http://localhost:8080/'
    MAX_COLLISION_RETRIES = 5
    MAX_URL_LENGTH = 2048
    BACKGROUND_WORKERS = 4


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        AUTH_TOKEN = 'AUTH_TOKEN'  # noqa: S105

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class Backend(StrEnum):
    """Durable store backends selectable via AppConfig 'active_backend'."""

    REDIS = 'redis'
    DYNAMODB = 'dynamodb'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CACHE_UNAVAILABLE = 'CACHE_UNAVAILABLE'
