from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Optional

from shortlinks.exceptions import InvalidInputError


def require_aware(name: str, value: Optional[datetime]) -> None:
    """Reject naive datetimes, they can't be compared with the UTC clock."""
    if value is None:
        return
    if not isinstance(value, datetime):
        raise InvalidInputError(f'{name} must be a datetime or None (given type: {type(value)}).')
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInputError(f'{name} must be timezone-aware (given value: {value!r}).')


@dataclass(frozen=True)
class OwnerRef:
    """Reference to the entity a shortened link belongs to.

    The registry never needs anything from an owner beyond its identity,
    so an owner is just a (type, id) pair compared by value.

    Attributes:
        owner_type (str):
            Kind of the owning entity, e.g. 'user' or 'campaign'.
        owner_id (str):
            Identifier of the owning entity within its type.

    Example:
        >>> OwnerRef('user', '42') == OwnerRef('user', '42')
        True
    """

    owner_type: str
    owner_id: str

    def __post_init__(self):
        for name in ('owner_type', 'owner_id'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidInputError(f'Owner {name} must be a non-blank string (given value: {value!r}).')
        # ':' separates owner parts inside store keys
        if ':' in self.owner_type:
            raise InvalidInputError(f"Owner type must not contain ':' (given value: {self.owner_type!r}).")


@dataclass(frozen=True)
class ShortenedLink:
    """Represent a short key mapped to a normalized long URL.

    Attributes:
        url (str):
            Normalized absolute URL the short key stands for.
        key (Optional[str]):
            The unique short identifier. None until the link is persisted.
        owner (Optional[OwnerRef]):
            Entity the link is scoped to. None for global links.
        expires_at (Optional[datetime]):
            Moment after which the link is considered expired.
        created_at (Optional[datetime]):
            When the link was first stored.
        updated_at (Optional[datetime]):
            When the link was last written.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> link = ShortenedLink(
        ...     url='http://example.com/page',
        ...     key='ab12c',
        ...     expires_at=datetime.now(UTC) + timedelta(days=1),
        ... )
        >>> link.persisted
        True
        >>> link.is_expired()
        False
    """

    url: str
    key: Optional[str] = None
    owner: Optional[OwnerRef] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.url, str) or not self.url.strip():
            raise InvalidInputError(f'Link url must be a non-blank string (given value: {self.url!r}).')
        if self.owner is not None and not isinstance(self.owner, OwnerRef):
            raise InvalidInputError(f'Link owner must be an OwnerRef or None (given type: {type(self.owner)}).')
        for name in ('expires_at', 'created_at', 'updated_at'):
            require_aware(name, getattr(self, name))

    @property
    def persisted(self) -> bool:
        return self.key is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """True if an expiration is set and `now` is past it."""
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) > self.expires_at

    def is_unexpired(self, now: Optional[datetime] = None) -> bool:
        return not self.is_expired(now)
