from shortlinks.dao.base import ShortenedLinkBaseDAO
from shortlinks.dao.exceptions import DAOError, DuplicateKeyError, LinkNotFoundError, PersistenceError


__all__ = [
    'ShortenedLinkBaseDAO',
    'DAOError',
    'DuplicateKeyError',
    'LinkNotFoundError',
    'PersistenceError',
]
