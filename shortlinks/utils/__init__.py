from shortlinks.utils.config import app_env, app_name, app_prefix, load_config, ShortenerSettings
from shortlinks.utils.helpers import utcnow, require_environment
from shortlinks.utils.normalizer import normalize_url
from shortlinks.utils.keygen import KeyGenerator
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'normalize_url',
    'KeyGenerator',
    'ShortenerSettings',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utcnow',
    'require_environment',
    'initialize_logging',
]
