"""
Change notifier for the remote provider.

Subscribes to the couple_records change-feed channel and yields one
ChangeEvent per message. The reaction to an event is always a full reload,
never a patch, so the payload only needs to say "something changed".
"""
from typing import Any, Optional

import redis
from loguru import logger
from pydantic import ValidationError

from ..errors import SubscriptionError
from ..models.report import ChangeEvent


class ChangeSubscription:
    """Cancellable async stream of change events."""

    def __init__(self, pubsub: Any, channel: str, poll_timeout: float = 1.0) -> None:
        self._pubsub = pubsub
        self.channel = channel
        self.poll_timeout = poll_timeout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "ChangeSubscription":
        return self

    async def __anext__(self) -> ChangeEvent:
        while not self._closed:
            try:
                message = await self._pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=self.poll_timeout
                )
            except redis.RedisError as e:
                logger.error(f"Change feed {self.channel} dropped: {e}")
                raise SubscriptionError(str(e)) from e
            if message is None or message.get("type") != "message":
                continue
            return self._parse(message.get("data"))
        raise StopAsyncIteration

    def _parse(self, data: Optional[str]) -> ChangeEvent:
        if not data:
            return ChangeEvent()
        try:
            return ChangeEvent.model_validate_json(data)
        except ValidationError as e:
            # 不认识的消息也算一次变更
            logger.warning(f"Unrecognized change payload on {self.channel}: {e}")
            return ChangeEvent()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._pubsub.unsubscribe(self.channel)
            await self._pubsub.aclose()
        except redis.RedisError as e:
            logger.warning(f"Error closing change feed {self.channel}: {e}")
        logger.info(f"Unsubscribed from {self.channel}")


class RecordChangeNotifier:
    def __init__(self, redis_client: Any, channel: str = "couple_records") -> None:
        self.redis_client = redis_client
        self.channel = channel

    async def subscribe(self) -> ChangeSubscription:
        """Attach to the change feed; SubscriptionError if that fails."""
        try:
            pubsub = self.redis_client.pubsub()
            await pubsub.subscribe(self.channel)
        except (redis.RedisError, OSError) as e:
            logger.error(f"Failed to subscribe to {self.channel}: {e}")
            raise SubscriptionError(str(e)) from e
        logger.info(f"Subscribed to change feed {self.channel}")
        return ChangeSubscription(pubsub, self.channel)
