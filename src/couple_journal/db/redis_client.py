from typing import TYPE_CHECKING, Callable, Optional, cast

import redis
import redis.asyncio
from loguru import logger

from ..config.configuration import RedisConfig
from ..models.report import ChangeEvent

# 为Redis客户端定义明确的类型
if TYPE_CHECKING:
    # 类型检查时使用泛型参数
    RedisClient = redis.Redis[str]
    AsyncRedisClient = redis.asyncio.Redis[str]
else:
    # 运行时使用的代码 - 避免运行时错误
    RedisClient = redis.Redis  # type: ignore
    AsyncRedisClient = redis.asyncio.Redis  # type: ignore

ChangePublisher = Callable[[ChangeEvent], None]


###################################################################################################
def get_redis(redis_config: Optional[RedisConfig] = None) -> "RedisClient":
    """
    获取Redis连接实例。

    返回:
        RedisClient: Redis客户端实例，已配置为返回字符串
    """
    redis_config = redis_config or RedisConfig()
    pool = redis.ConnectionPool(
        host=redis_config.host,
        port=redis_config.port,
        db=redis_config.db,
        decode_responses=True,
    )
    return cast(RedisClient, redis.Redis(connection_pool=pool))


###################################################################################################
def get_async_redis(redis_config: Optional[RedisConfig] = None) -> "AsyncRedisClient":
    """
    获取异步Redis连接实例，变更订阅用。
    """
    redis_config = redis_config or RedisConfig()
    return cast(
        AsyncRedisClient,
        redis.asyncio.Redis(
            host=redis_config.host,
            port=redis_config.port,
            db=redis_config.db,
            decode_responses=True,
        ),
    )


###################################################################################################
def redis_publish(client: "RedisClient", channel: str, message: str) -> int:
    """
    向频道发布一条消息。

    返回:
        int: 收到消息的订阅者数量

    抛出:
        redis.RedisError: 当Redis操作失败时
    """
    try:
        return int(client.publish(channel, message))
    except redis.RedisError as e:
        logger.error(f"Redis error while publishing to {channel}: {e}")
        raise e


###################################################################################################
def make_change_publisher(
    client: "RedisClient", channel: str
) -> ChangePublisher:
    """
    生成一个发布 ChangeEvent 的函数, 远程存储写入成功后调用。
    """

    def _publish(event: ChangeEvent) -> None:
        receivers = redis_publish(client, channel, event.model_dump_json())
        logger.debug(f"Published {event.event_type} on {channel} to {receivers} subscriber(s)")

    return _publish
