"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures correct initialization with or without a Redis client.
       - Confirms invalid Redis configuration raises PersistenceError.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong or timeout from Redis raises PersistenceError.
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from shortlinks.dao.exceptions import PersistenceError
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure DAO creates a Redis client when none is provided."""
    redis_config = {
        'redis_host': 'redis',
        'redis_port': '6379',
        'redis_db': 0,
        'redis_decode_responses': True,
        'redis_username': 'default',
        'redis_password': 'password',
    }

    with patch('shortlinks.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(host='redis', port=6379, db=0, decode_responses=True, username='default', password='password')
        assert mixin.redis is redis_mock_instance
        assert isinstance(mixin.keys, RedisKeySchema)
        assert mixin.keys.prefix == 'testapp:test'


def test_initialize_with_redis_client(redis_client):
    """Ensure DAO correctly uses a pre-initialized Redis client."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    assert mixin.redis is redis_client


def test_initialize_with_invalid_redis_config():
    """Ensure unreachable Redis raises PersistenceError."""
    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."

    with patch('shortlinks.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        redis_mock_instance.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        redis_mock_instance.connection_pool = MagicMock()
        redis_mock_instance.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

        with pytest.raises(PersistenceError, match=exception_message):
            RedisClientMixin(redis_host='203.0.113.1', redis_port=18000, redis_db=5)


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_passes(redis_client):
    """Ensure healthcheck passes when Redis responds."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    redis_client.ping.assert_called_once()  # initialization performs a healthcheck

    mixin._healthcheck()
    assert redis_client.ping.call_count == 2


def test_healthcheck_fails(redis_client):
    """Ensure healthcheck raises PersistenceError when Redis is unreachable."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(PersistenceError, match="redis.test:6379/0"):
        RedisClientMixin(redis_client=redis_client, prefix='testapp:test')


def test_healthcheck_timeout(redis_client):
    """Ensure a PING timeout is reported as PersistenceError too."""
    redis_client.ping.side_effect = redis.exceptions.TimeoutError('Timeout')

    with pytest.raises(PersistenceError, match="redis.test:6379/0"):
        RedisClientMixin(redis_client=redis_client)
