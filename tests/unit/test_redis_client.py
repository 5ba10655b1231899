"""Tests for the Redis helpers used by the change feed."""

from typing import List, Tuple

import pytest
import redis
import redis.asyncio

from couple_journal.config import RedisConfig
from couple_journal.db.redis_client import get_async_redis, get_redis, make_change_publisher, redis_publish
from couple_journal.models import ChangeEvent


class RecordingRedis:
    def __init__(self, fail: bool = False) -> None:
        self.published: List[Tuple[str, str]] = []
        self.fail = fail

    def publish(self, channel: str, message: str) -> int:
        if self.fail:
            raise redis.ConnectionError("redis down")
        self.published.append((channel, message))
        return 1


def test_clients_are_built_from_config():
    config = RedisConfig(host="redis.internal", port=6380, db=2)

    client = get_redis(config)
    assert isinstance(client, redis.Redis)
    assert client.connection_pool.connection_kwargs["host"] == "redis.internal"
    assert client.connection_pool.connection_kwargs["port"] == 6380

    assert isinstance(get_async_redis(config), redis.asyncio.Redis)


def test_change_publisher_sends_event_json():
    client = RecordingRedis()
    publish = make_change_publisher(client, "couple_records")

    publish(ChangeEvent(event_type="INSERT", record_id=3))

    channel, message = client.published[0]
    assert channel == "couple_records"
    assert ChangeEvent.model_validate_json(message) == ChangeEvent(event_type="INSERT", record_id=3)


def test_publish_errors_propagate():
    with pytest.raises(redis.RedisError):
        redis_publish(RecordingRedis(fail=True), "couple_records", "{}")
