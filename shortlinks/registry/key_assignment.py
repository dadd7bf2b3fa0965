"""Collision-safe key assignment

Keys are random, so two links can draw the same candidate. Rather than
checking for a free key first (racy across processes), the candidate is
written straight away and the data store's uniqueness constraint arbitrates:
a DuplicateKeyError means "draw again".

    Attempting(0) --insert ok--> Succeeded
         |
         +--DuplicateKeyError--> Attempting(n + 1) ... Attempting(4) --DuplicateKeyError--> Failed (re-raise)
         |
         +--any other error--> Failed (propagate, no retry)
"""

import logging
from dataclasses import replace

from shortlinks.constants import Keys
from shortlinks.dao.base import ShortenedLinkBaseDAO
from shortlinks.dao.exceptions import DuplicateKeyError
from shortlinks.models import ShortenedLink
from shortlinks.utils.keygen import KeyGenerator


logger = logging.getLogger(__name__)


def assign_key(
    link: ShortenedLink,
    dao: ShortenedLinkBaseDAO,
    generator: KeyGenerator,
    max_attempts: int = Keys.MAX_ATTEMPTS,
) -> ShortenedLink:
    """Give a pending link a fresh key and store it.

    Args:
        link (ShortenedLink):
            Pending link. Its key, if any, is replaced.
        dao (ShortenedLinkBaseDAO):
            Store whose insert() enforces key uniqueness.
        generator (KeyGenerator):
            Source of key candidates.
        max_attempts (int):
            Number of uniqueness violations tolerated before giving up.

    Returns:
        ShortenedLink: the stored link, with its key.

    Raises:
        DuplicateKeyError:
            If every one of the `max_attempts` candidates was already taken.
        Exception:
            Anything else raised by `dao.insert()`, unchanged and without retry.
    """
    attempt = 0
    while True:
        candidate = replace(link, key=generator.draw())
        try:
            return dao.insert(candidate)
        except DuplicateKeyError:
            attempt += 1
            if attempt >= max_attempts:
                logger.info('Too many key collisions, giving up.', extra={'attempt': attempt, 'url': link.url})
                raise
            logger.info('Retrying with a different key.', extra={'attempt': attempt, 'key': candidate.key})
