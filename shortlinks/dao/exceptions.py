"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DuplicateKeyError:
        Raised when inserting a ShortenedLink whose key is already taken.

    LinkNotFoundError:
        Raised when a ShortenedLink is not found in the data store.

    PersistenceError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from shortlinks.dao.exceptions import DuplicateKeyError
    >>> raise DuplicateKeyError("Shortened link with key 'abc12' already exists.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.DuplicateKeyError: Shortened link with key 'abc12' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DuplicateKeyError(DAOError):
    """Exception raised when the uniqueness constraint on a link's key is violated."""

    pass


class LinkNotFoundError(DAOError):
    """Exception raised when a ShortenedLink is not found in the data store."""

    pass


class PersistenceError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
