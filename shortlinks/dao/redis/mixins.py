"""Redis client setup shared by Redis-backed DAOs.

Classes:
    - RedisClientMixin: build (or adopt) a Redis client, namespace its keys and
      make sure the server answers before the DAO is used.

Example:
    >>> class ShortenedLinkRedisDAO(RedisClientMixin, ShortenedLinkBaseDAO):
    ...     pass
    ...
    >>> dao = ShortenedLinkRedisDAO(redis_host='redis.internal', prefix='shortlinks:prod')
    >>> dao.keys.link_key('ab12c')
    'shortlinks:prod:links:ab12c'
"""

from typing import Optional

import redis

from shortlinks.dao.redis.helpers import redis_address
from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.exceptions import PersistenceError


class RedisClientMixin:
    """Own the Redis client and key schema of a DAO.

    Attributes:
        redis (redis.Redis):
            Client used by the DAO methods.
        keys (RedisKeySchema):
            Namespaced key names for this app and environment.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Adopt `redis_client`, or connect with the `redis_*` parameters

        The `redis_*` names match the keys of the "redis" config section once
        prefixed, so a section can be splatted in directly.

        Raises:
            PersistenceError:
                If Redis does not answer PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING Redis, raising PersistenceError when it is unreachable."""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise PersistenceError(f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters.") from e
