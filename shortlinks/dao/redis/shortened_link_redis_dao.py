"""Data Access Object (DAO) implementation for managing shortened links in Redis

This module provides a Redis-based implementation of ShortenedLinkBaseDAO.

Responsibilities:
    - Claim short keys atomically (SET NX is the uniqueness constraint);
    - Maintain per-scope url -> key indexes for dedup lookups;
    - Overwrite link expirations;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    ShortenedLinkRedisDAO:
        DAO for storing and retrieving ShortenedLink in a Redis datastore.

Example:
    >>> from shortlinks.models import ShortenedLink
    >>> from shortlinks.dao.redis import ShortenedLinkRedisDAO

    >>> dao = ShortenedLinkRedisDAO(prefix="shortlinks:dev")
    >>> dao.insert(ShortenedLink(url='http://example.com/page', key='ab12c'))
    ShortenedLink(url='http://example.com/page', key='ab12c', ...)

    >>> dao.find('http://example.com/page').key
    'ab12c'
    >>> dao.get('ab12c').url
    'http://example.com/page'
"""

from dataclasses import replace
from datetime import datetime

from beartype import beartype

from shortlinks.models import OwnerRef, ShortenedLink
from shortlinks.dao.base import ShortenedLinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error, decode, dump_link, load_link
from shortlinks.dao.exceptions import DuplicateKeyError, LinkNotFoundError


class ShortenedLinkRedisDAO(RedisClientMixin, ShortenedLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing shortened links

    This class implements the ShortenedLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    NOTE:
        - Links are stored without a Redis TTL. Expired links stay in the
          store and can be revived by a later generation with a new expiration.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, link: ShortenedLink) -> ShortenedLink:
        """Insert a shortened link into Redis

        The record is written with SET NX, so of two writers racing for the
        same key exactly one succeeds. The scope index is then filled with
        HSETNX: when the same (owner, url) was already indexed by another
        writer, the earlier entry is kept.

        Args:
            link (ShortenedLink):
                Link to store, with its key assigned.

        Returns:
            ShortenedLink: the stored link.

        Raises:
            ValueError:
                If the link has no key.
            DuplicateKeyError:
                If a link with the same key already exists.
            PersistenceError:
                If a Redis connection issue occurs.
        """
        if link.key is None:
            raise ValueError('Cannot insert a link without a key.')

        # NOTE: claiming the key and indexing the url are two commands. A
        #       crash in between leaves a reachable-by-key link that dedup
        #       lookups don't see; the next generation for that url simply
        #       creates another link.
        if not self.redis.set(self.keys.link_key(link.key), dump_link(link), nx=True):
            raise DuplicateKeyError(f"Shortened link with key '{link.key}' already exists.")
        self.redis.hsetnx(self.keys.index_key(link.owner), link.url, link.key)
        return link

    @handle_redis_connection_error
    @beartype
    def find(self, url: str, owner: OwnerRef | None = None) -> ShortenedLink | None:
        """Look up the link indexed for url in the owner's (or global) scope

        An index entry whose record no longer exists is removed and
        reported as a miss.

        Example:
            >>> dao.find('http://example.com/page', OwnerRef('user', '42'))
            ShortenedLink(url='http://example.com/page', key='ab12c', ...)
        """
        index_key = self.keys.index_key(owner)
        key = self.redis.hget(index_key, url)
        if key is None:
            return None

        document = self.redis.get(self.keys.link_key(decode(key)))
        if document is None:
            # Record removed outside the registry. Drop the dangling entry so
            # the next insert for this url gets indexed by HSETNX.
            self.redis.hdel(index_key, url)
            return None
        return load_link(document)

    @handle_redis_connection_error
    @beartype
    def get(self, key: str) -> ShortenedLink:
        """Retrieve a stored link by its short key

        Raises:
            LinkNotFoundError:
                If no link with this key exists.
            PersistenceError:
                If Redis connectivity issues occur.
        """
        document = self.redis.get(self.keys.link_key(key))
        if document is None:
            raise LinkNotFoundError(f"Shortened link with key '{key}' not found.")
        return load_link(document)

    @handle_redis_connection_error
    @beartype
    def update_expiration(self, link: ShortenedLink, expires_at: datetime | None, updated_at: datetime) -> ShortenedLink:
        """Overwrite the expiration of a stored link

        Uses SET XX so a link removed behind our back is not resurrected.

        Raises:
            LinkNotFoundError:
                If the link no longer exists.
            PersistenceError:
                If Redis connectivity issues occur.
        """
        updated = replace(link, expires_at=expires_at, updated_at=updated_at)
        if not self.redis.set(self.keys.link_key(link.key), dump_link(updated), xx=True):
            raise LinkNotFoundError(f"Shortened link with key '{link.key}' not found.")
        return updated

    @handle_redis_connection_error
    def all(self) -> list[ShortenedLink]:
        """Return every stored link

        Walks the link keyspace with SCAN (non-blocking for Redis) and fetches
        the records with a single MGET.
        """
        record_keys = [k for k in map(decode, self.redis.scan_iter(match=self.keys.link_pattern())) if not self.keys.is_index_key(k)]
        if not record_keys:
            return []

        # Records may disappear between SCAN and MGET
        return [load_link(document) for document in self.redis.mget(record_keys) if document is not None]
