import functools
from collections.abc import Callable

from shortlinks.models import OwnerRef


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing shortened links.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortlinks:prod" or "shortlinks:dev".

    Layout:
        <prefix>:links:<key>                               link record (JSON)
        <prefix>:links:index:global                        url -> key, unowned links
        <prefix>:links:index:owners:<owner type>:<id>      url -> key, owned links
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, key: str) -> str:
        return f'links:{key}'

    @prefix_key
    def link_pattern(self) -> str:
        return 'links:*'

    @prefix_key
    def index_key(self, owner: OwnerRef | None = None) -> str:
        if owner is None:
            return 'links:index:global'
        return f'links:index:owners:{owner.owner_type}:{owner.owner_id}'

    def is_index_key(self, redis_key: str) -> bool:
        return redis_key.startswith(self.index_key().rsplit(':', 1)[0] + ':')
