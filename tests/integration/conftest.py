"""
Integration test fixtures and configuration.

Provides a Redis client for running the repository against a real
server. Tests are skipped when Redis is not reachable.
"""

import logging
import os
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[redis.Redis, None]:
    """Provide a Redis client; skip the test if the server is unavailable."""
    client = redis.from_url(REDIS_URL, decode_responses=False)

    try:
        await client.ping()
    except (RedisError, OSError) as e:
        await client.aclose()
        pytest.skip(f"Redis not available at {REDIS_URL}: {e}")

    try:
        yield client
    finally:
        await client.aclose()


@pytest_asyncio.fixture
async def products_set_key(redis_client) -> AsyncGenerator[str, None]:
    """Per-test membership set; its members and the set are removed afterwards."""
    set_key = f"test-products:{uuid.uuid4()}"

    yield set_key

    members = await redis_client.smembers(set_key)
    if members:
        await redis_client.delete(*members)
    await redis_client.delete(set_key)
    logger.info(f"Cleaned up {len(members)} products from {set_key}")
