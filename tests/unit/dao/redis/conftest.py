from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client that answers PING."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    return client


@pytest.fixture
def dict_redis_client(redis_client) -> redis.Redis:
    """Mock Redis client backed by dicts, for multi-step DAO scenarios."""
    strings, hashes = {}, {}

    def set_(name, value, nx=False, xx=False):
        if (nx and name in strings) or (xx and name not in strings):
            return None
        strings[name] = value
        return True

    def hsetnx(name, field, value):
        fields = hashes.setdefault(name, {})
        if field in fields:
            return 0
        fields[field] = value
        return 1

    def hdel(name, *fields):
        existing = hashes.get(name, {})
        return sum(existing.pop(field, None) is not None for field in fields)

    redis_client.set.side_effect = set_
    redis_client.get.side_effect = strings.get
    redis_client.hsetnx.side_effect = hsetnx
    redis_client.hget.side_effect = lambda name, field: hashes.get(name, {}).get(field)
    redis_client.hdel.side_effect = hdel
    redis_client.strings = strings
    redis_client.hashes = hashes
    return redis_client
