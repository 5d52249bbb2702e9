class UrlShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlshortener_error'


class ValidationError(UrlShortenerError):
    """Raised when a long URL or short identifier is malformed."""

    error_code = 'app:validation_error'


class ShortIDGenerationError(UrlShortenerError):
    """Raised when no unique short identifier could be minted within the retry budget."""

    error_code = 'app:short_id_generation_error'


class ConfigurationError(UrlShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
