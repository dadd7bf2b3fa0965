"""Utility functions for application configuration management.

Configuration lives in **AWS AppConfig**. Each environment (`APP_ENV`) has a
dedicated AppConfig *Environment* within the AppConfig *Application* named by
`APP_NAME`. The deployed JSON document follows this structure:

    {
        "build": 7,
        "configs": {
            "link_registry": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "keys": {
                    "alphabet": "abcdefghijklmnopqrstuvwxyz0123456789",
                    "length": 5,
                    "forbidden": ["admin", "login"]
                }
            }
        }
    }

Each component loads its own section (e.g. `"link_registry"`).

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(section: str) -> dict
        Load one section of the AppConfig document as a Python dictionary.

Classes:
    ShortenerSettings:
        Validated key generation settings (alphabet, length, forbidden keys).

Example:
    >>> from shortlinks.utils.config import load_config, ShortenerSettings
    >>> section = load_config('link_registry')
    >>> ShortenerSettings.from_config(section).unique_key_length
    5
"""

import os
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import boto3

from shortlinks.constants import ENV, Keys
from shortlinks.exceptions import BadConfigurationError
from shortlinks.types import AppConfigSection
from shortlinks.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(section: str) -> AppConfigSection:
    """Load one configuration section from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        section (str):
            Name of the section under "configs" (e.g. "link_registry").

    Returns:
        dict: The section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any of the required environment variables is missing.
        BadConfigurationError:
            If the document has no such section.

    Example:
        >>> load_config('link_registry')['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'section': section})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    try:
        data = document['configs'][section]
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no section '{section}'.") from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'section': section, 'build': document.get('build')})
    return data


@dataclass(frozen=True)
class ShortenerSettings:
    """Key generation settings.

    Attributes:
        key_chars (str):
            Alphabet keys are drawn from.
        unique_key_length (int):
            Number of characters per key, > 0.
        forbidden_keys (frozenset[str]):
            Keys that must never be issued (e.g. route names).
    """

    key_chars: str = Keys.DEFAULT_CHARS
    unique_key_length: int = Keys.DEFAULT_LENGTH
    forbidden_keys: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.key_chars, str) or not self.key_chars:
            raise BadConfigurationError(f'Key alphabet must be a non-empty string (given value: {self.key_chars!r}).')
        if isinstance(self.unique_key_length, bool) or not isinstance(self.unique_key_length, int):
            raise BadConfigurationError(f'Key length must be of type integer (given type: {type(self.unique_key_length)}).')
        if self.unique_key_length <= 0:
            raise BadConfigurationError(f'Key length must be a positive integer (given value: {self.unique_key_length}).')

    @classmethod
    def from_config(cls, section: Mapping) -> 'ShortenerSettings':
        """Build settings from the "keys" entry of a config section.

        Missing entries fall back to the defaults.

        Example:
            >>> ShortenerSettings.from_config({'keys': {'alphabet': 'abc123', 'length': 6}})
            ShortenerSettings(key_chars='abc123', unique_key_length=6, forbidden_keys=frozenset())
        """
        keys = section.get('keys') or {}
        forbidden = keys.get('forbidden') or ()
        if isinstance(forbidden, str):
            raise BadConfigurationError('Forbidden keys must be a list of strings, not a string.')

        return cls(
            key_chars=keys.get('alphabet', Keys.DEFAULT_CHARS),
            unique_key_length=keys.get('length', Keys.DEFAULT_LENGTH),
            forbidden_keys=frozenset(forbidden),
        )
