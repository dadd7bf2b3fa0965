import json
import functools
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from shortlinks.dao.exceptions import PersistenceError
from shortlinks.models import OwnerRef, ShortenedLink


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises PersistenceError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise PersistenceError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e

    return wrapper


def decode(value: str | bytes) -> str:
    """Return Redis replies as text, whatever decode_responses the client uses."""
    return value.decode('utf-8') if isinstance(value, bytes) else value


def redis_address(client: redis.Redis) -> str:
    """Render a client's connection target as host:port/db."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def _dump_datetime(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _load_datetime(value: str | None) -> datetime | None:
    return None if value is None else datetime.fromisoformat(value)


def dump_link(link: ShortenedLink) -> str:
    """Serialize a link into the JSON document stored in Redis."""
    owner = link.owner
    return json.dumps(
        {
            'key': link.key,
            'url': link.url,
            'owner_type': None if owner is None else owner.owner_type,
            'owner_id': None if owner is None else owner.owner_id,
            'expires_at': _dump_datetime(link.expires_at),
            'created_at': _dump_datetime(link.created_at),
            'updated_at': _dump_datetime(link.updated_at),
        }
    )


def load_link(document: str | bytes) -> ShortenedLink:
    """Deserialize a JSON document stored in Redis into a link.

    Raises:
        PersistenceError:
            If the stored document is corrupt.
    """
    try:
        data = json.loads(document)
        owner = None
        if data.get('owner_type') is not None:
            owner = OwnerRef(owner_type=data['owner_type'], owner_id=data['owner_id'])
        return ShortenedLink(
            url=data['url'],
            key=data['key'],
            owner=owner,
            expires_at=_load_datetime(data.get('expires_at')),
            created_at=_load_datetime(data.get('created_at')),
            updated_at=_load_datetime(data.get('updated_at')),
        )
    except (ValueError, KeyError, TypeError) as e:
        raise PersistenceError(f'Corrupt link document in Redis: {document!r}.') from e
