class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class InvalidInputError(ShortLinksError, ValueError):
    """Raised when a caller passes a blank URL or an invalid link/owner value."""

    error_code = 'app:invalid_input_error'


class MalformedUrlError(ShortLinksError, ValueError):
    """Raised when a URL cannot be parsed after protocol normalization."""

    error_code = 'app:malformed_url_error'


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
