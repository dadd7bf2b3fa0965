from shortlinks.models import OwnerRef, ShortenedLink
from shortlinks.registry import LinkRegistry
from shortlinks.utils import KeyGenerator, normalize_url


__all__ = [
    'OwnerRef',
    'ShortenedLink',
    'LinkRegistry',
    'KeyGenerator',
    'normalize_url',
]
