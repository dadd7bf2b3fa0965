import string
from enum import StrEnum


class Keys:
    """Short key generation defaults."""

    # Lowercase only, short URLs are typed by hand and read case-insensitively
    DEFAULT_CHARS = string.ascii_lowercase + string.digits
    DEFAULT_LENGTH = 5
    # Uniqueness violations tolerated before key assignment gives up
    MAX_ATTEMPTS = 5


class URL:
    """URL normalization constants."""

    DEFAULT_SCHEME = 'http'
    DEFAULT_PORTS = {'http': 80, 'https': 443}


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
