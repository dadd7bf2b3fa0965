"""Abstract base class for ShortenedLink data access objects (DAOs).

This class establishes a consistent contract for all ShortenedLink DAO
implementations, regardless of the underlying storage mechanism (e.g. Redis,
PostgreSQL).

Responsibilities:
    - Atomically create links, enforcing uniqueness of the short key.
    - Look links up by (owner, url) and by key.
    - Overwrite a link's expiration.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.models import ShortenedLink
        >>> from shortlinks.dao.redis import ShortenedLinkRedisDAO

        >>> dao = ShortenedLinkRedisDAO(...)
        >>> dao.insert(ShortenedLink(url='http://example.com/', key='ab12c'))
        >>> dao.find('http://example.com/').key
        'ab12c'
"""

from abc import ABC, abstractmethod
from datetime import datetime

from shortlinks.models import OwnerRef, ShortenedLink


class ShortenedLinkBaseDAO(ABC):
    """Interface for ShortenedLink data access objects (DAOs).

    Methods:
        insert(link: ShortenedLink) -> ShortenedLink:
            Create a link. Raises DuplicateKeyError if the key is taken.

        find(url: str, owner: OwnerRef | None) -> ShortenedLink | None:
            Return the link stored for url in the owner's (or the global) scope.

        get(key: str) -> ShortenedLink:
            Return the link with the given key. Raises LinkNotFoundError.

        update_expiration(link, expires_at, updated_at) -> ShortenedLink:
            Overwrite a stored link's expiration. Raises LinkNotFoundError.

        all() -> list[ShortenedLink]:
            Return every stored link.

    All methods raise PersistenceError on connection or read/write failure.

    NOTE:
        - Links are never deleted through the DAO.
    """

    @abstractmethod
    def insert(self, link: ShortenedLink) -> ShortenedLink:
        """Create a new link in the data store.

        The key must be claimed atomically: two concurrent inserts of the same
        key must result in exactly one success and one DuplicateKeyError.

        Args:
            link (ShortenedLink):
                Link with its key already assigned.

        Returns:
            ShortenedLink: the stored link.

        Raises:
            DuplicateKeyError:
                If a link with the same key already exists.

            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find(self, url: str, owner: OwnerRef | None = None) -> ShortenedLink | None:
        """Look up the link stored for a normalized url within a scope.

        Args:
            url (str):
                Normalized URL.

            owner (OwnerRef | None):
                Scope of the lookup. None searches global links.

        Returns:
            ShortenedLink | None: The first link found, None if there is none.
        """
        pass

    @abstractmethod
    def get(self, key: str) -> ShortenedLink:
        """Retrieve a link by its short key.

        Raises:
            LinkNotFoundError:
                If no link with the given key exists.
        """
        pass

    @abstractmethod
    def update_expiration(self, link: ShortenedLink, expires_at: datetime | None, updated_at: datetime) -> ShortenedLink:
        """Overwrite the expiration of a stored link.

        Returns:
            ShortenedLink: the updated link.

        Raises:
            LinkNotFoundError:
                If the link is no longer in the data store.
        """
        pass

    @abstractmethod
    def all(self) -> list[ShortenedLink]:
        """Return every stored link, expired or not, in no particular order."""
        pass
