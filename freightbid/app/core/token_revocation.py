"""
Token Revocation using Redis.

Signing out blacklists the session's JWT until it would have expired anyway.
"""

import logging

from redis.exceptions import RedisError

from freightbid.app.core.redis_client import get_redis
from freightbid.app.core.config import settings

logger = logging.getLogger("freightbid")

# Redis key prefix for blacklisted tokens
TOKEN_BLACKLIST_PREFIX = "blacklist:token:"


async def revoke_token(token: str, user_id: int) -> bool:
    """
    Revoke a specific JWT token by adding it to the blacklist.

    Args:
        token: The JWT token string to revoke
        user_id: User ID who owns the token

    Returns:
        True if successfully revoked, False otherwise
    """
    try:
        redis_client = await get_redis()
        # Tokens auto-expire, so the blacklist entry only needs to outlive them
        ttl_seconds = settings.access_token_expire_minutes * 60
        await redis_client.setex(f"{TOKEN_BLACKLIST_PREFIX}{token}", ttl_seconds, str(user_id))
        return True
    except RedisError as e:
        logger.error("Error revoking token", extra={"user_id": user_id, "error": repr(e)})
        return False


async def is_token_revoked(token: str) -> bool:
    """
    Check if a token has been revoked.

    Fails open when Redis is unreachable.
    """
    try:
        redis_client = await get_redis()
        exists = await redis_client.exists(f"{TOKEN_BLACKLIST_PREFIX}{token}")
        return exists > 0
    except RedisError as e:
        logger.warning("Error checking token revocation", extra={"error": repr(e)})
        return False
