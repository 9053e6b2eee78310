"""
Redis client initialization and connection management.

Redis holds the sign-out token blacklist.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError
from freightbid.app.core.config import settings


redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)


async def get_redis():
    """Return the module Redis client; tests swap `redis_client` for a fake."""
    return redis_client


async def ping_redis() -> bool:
    """True if Redis answers a PING."""
    try:
        return await redis_client.ping()
    except (RedisError, OSError):
        return False


async def close_redis():
    await redis_client.aclose()
