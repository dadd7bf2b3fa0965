"""Shortened-link registry

The registry is the entry point for issuing short links. It normalizes the
URL, reuses the link already issued for the same (owner, url) when there is
one, and otherwise creates a new link with a collision-safe random key.

Classes:
    LinkRegistry:
        generate(), try_generate(), unexpired() and resolve() over a DAO.

Example:
    >>> from shortlinks.registry import LinkRegistry
    >>> from shortlinks.models import OwnerRef
    >>> registry = LinkRegistry.from_config(load_config('link_registry'))
    >>> link = registry.generate('Example.com/page', owner=OwnerRef('user', '42'))
    >>> link.url
    'http://example.com/page'
    >>> registry.generate('http://example.com/page', owner=OwnerRef('user', '42')).key == link.key
    True
"""

import logging
from datetime import datetime
from typing import Optional

from shortlinks.dao.base import ShortenedLinkBaseDAO
from shortlinks.dao.exceptions import LinkNotFoundError
from shortlinks.exceptions import InvalidInputError
from shortlinks.models import OwnerRef, ShortenedLink
from shortlinks.models.shortened_link import require_aware
from shortlinks.registry.key_assignment import assign_key
from shortlinks.types import AppConfigSection, Clock, RandomSource
from shortlinks.utils.config import ShortenerSettings, app_prefix
from shortlinks.utils.helpers import utcnow
from shortlinks.utils.keygen import KeyGenerator
from shortlinks.utils.normalizer import normalize_url


logger = logging.getLogger(__name__)


class LinkRegistry:
    """Issue and deduplicate shortened links.

    Attributes:
        dao (ShortenedLinkBaseDAO):
            Durable store with a uniqueness constraint on keys.
        generator (KeyGenerator):
            Source of key candidates.
        clock (Clock):
            Returns the current aware UTC time. Defaults to utcnow().

    NOTE:
        - The dedup lookup and the create are not atomic. Two callers asking
          for the same (owner, url) at the same time can both create a link;
          later lookups return the first one indexed.
        - The dedup lookup ignores expiration: generating a link for a URL
          whose link has expired returns (and, given expires_at, revives)
          that link.
    """

    def __init__(self, dao: ShortenedLinkBaseDAO, generator: Optional[KeyGenerator] = None, clock: Optional[Clock] = None):
        self.dao = dao
        self.generator = generator if generator is not None else KeyGenerator()
        self.clock = clock if clock is not None else utcnow

    @classmethod
    def from_config(cls, app_config: AppConfigSection, rng: Optional[RandomSource] = None) -> 'LinkRegistry':
        """Build a Redis-backed registry from a loaded config section

        Args:
            app_config (dict):
                Section as returned by load_config(), with "redis" connection
                parameters and optional "keys" settings.
            rng (Optional[RandomSource]):
                Randomness for key generation. Defaults to random.SystemRandom().
        """
        from shortlinks.dao.redis import ShortenedLinkRedisDAO

        redis_config = {f'redis_{k}': v for k, v in app_config.get('redis', {}).items()}
        dao = ShortenedLinkRedisDAO(**redis_config, prefix=app_prefix())
        settings = ShortenerSettings.from_config(app_config)
        return cls(dao, KeyGenerator.from_settings(settings, rng=rng))

    def generate(
        self,
        link: str | ShortenedLink,
        owner: Optional[OwnerRef] = None,
        expires_at: Optional[datetime] = None,
    ) -> ShortenedLink:
        """Return the shortened link for a URL, creating it if needed

        Args:
            link (str | ShortenedLink):
                Raw URL, or an existing link. An existing link owned by
                `owner` is returned as is; one owned by someone else yields a
                separate link for `owner` (ownership never changes).
            owner (Optional[OwnerRef]):
                Scope of the link. None for a global link.
            expires_at (Optional[datetime]):
                Expiration to set. When the link already exists, its
                expiration is overwritten; None leaves it untouched.

        Returns:
            ShortenedLink: the existing or newly created link.

        Raises:
            InvalidInputError:
                If the URL is blank or the owner is not an OwnerRef,
                or expires_at is not timezone-aware.
            MalformedUrlError:
                If the URL cannot be parsed.
            DuplicateKeyError:
                If key assignment ran out of attempts.
            DAOError:
                On any other data store failure.
        """
        require_aware('expires_at', expires_at)

        if isinstance(link, ShortenedLink):
            if link.owner == owner:
                return link
            return self.generate(link.url, owner, expires_at)

        if owner is not None and not isinstance(owner, OwnerRef):
            raise InvalidInputError(f'Owner must be an OwnerRef or None (given type: {type(owner)}).')
        url = normalize_url(link)

        existing = self.dao.find(url, owner)
        if existing is not None:
            if expires_at is not None:
                logger.debug('Updating link expiration.', extra={'key': existing.key, 'expires_at': expires_at})
                existing = self.dao.update_expiration(existing, expires_at, self.clock())
            return existing

        now = self.clock()
        pending = ShortenedLink(url=url, owner=owner, expires_at=expires_at, created_at=now, updated_at=now)
        created = assign_key(pending, self.dao, self.generator)
        logger.debug('Created shortened link.', extra={'key': created.key, 'url': url, 'owner': owner})
        return created

    def try_generate(
        self,
        link: str | ShortenedLink,
        owner: Optional[OwnerRef] = None,
        expires_at: Optional[datetime] = None,
    ) -> ShortenedLink | None:
        """Like generate(), but return None instead of raising

        Callers that need to know why generation failed must use generate().
        """
        try:
            return self.generate(link, owner, expires_at)
        except Exception:
            return None

    def unexpired(self, owner: Optional[OwnerRef] = None, now: Optional[datetime] = None) -> list[ShortenedLink]:
        """Return links without an expiration or expiring strictly after now

        Args:
            owner (Optional[OwnerRef]):
                Restrict to links of this owner. None returns links of every scope.
            now (Optional[datetime]):
                Evaluation time. Defaults to the registry clock.
        """
        now = now or self.clock()
        return [
            link
            for link in self.dao.all()
            if link.is_unexpired(now) and (owner is None or link.owner == owner)
        ]

    def resolve(self, key: str, now: Optional[datetime] = None) -> ShortenedLink | None:
        """Return the unexpired link for a short key, or None

        This is the lookup a redirect endpoint performs.
        """
        try:
            link = self.dao.get(key)
        except LinkNotFoundError:
            return None
        return link if link.is_unexpired(now or self.clock()) else None
