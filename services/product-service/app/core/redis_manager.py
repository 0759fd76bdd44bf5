"""
Redis connection management for the product store.

Builds the single pooled client the service shares across requests.
The client is created without a retry policy: failed commands surface
to the caller immediately.
"""

import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from ..config import Settings

logger = logging.getLogger(__name__)


def create_redis_client(config: Settings) -> Redis:
    """
    Create Redis client with connection pool.

    Args:
        config: Service settings holding the Redis URL and pool limits

    Returns:
        Async Redis client; payloads are returned as raw bytes
    """
    pool = ConnectionPool.from_url(
        config.REDIS_URL,
        max_connections=config.REDIS_MAX_CONNECTIONS,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=config.REDIS_CONNECT_TIMEOUT,
        decode_responses=False,
    )
    client = Redis(connection_pool=pool)

    logger.info(
        "Redis client created with pool (max_connections=%d)",
        config.REDIS_MAX_CONNECTIONS,
    )
    return client


async def redis_health_check(client: Redis) -> bool:
    """
    Check Redis health.

    Returns:
        True if healthy, False otherwise
    """
    try:
        await client.ping()
        return True
    except (RedisError, OSError) as e:
        logger.error("Redis health check failed: %s", e)
        return False


async def close_redis_client(client: Redis) -> None:
    """Close Redis client and its connection pool."""
    await client.aclose()
    await client.connection_pool.disconnect()
    logger.info("Redis client closed")
