"""
Query cache for analytics reads.

Memory-based, one instance per application (held on `app.state`). Entries
expire after a stale time; misses are loaded through a fixed-count retry
policy. Signing out drops the user's entries.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Request

from freightbid.app.core.exceptions import AnalyticsQueryError
from freightbid.app.core.reliability import RetryPolicy, RetryExhaustedError

logger = logging.getLogger("freightbid")


def user_scope(user_id: int) -> str:
    return f"user:{user_id}:"


def query_key(user_id: int, *parts: Any) -> str:
    """Build a cache key scoped to one signed-in user."""
    return user_scope(user_id) + ":".join(str(p) for p in parts)


class QueryCache:

    def __init__(self, retry_policy: RetryPolicy, default_ttl_seconds: int = 300):
        self.retry_policy = retry_policy
        self.default_ttl_seconds = default_ttl_seconds
        self._store: Dict[str, dict] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if not entry:
            return None

        if datetime.now(timezone.utc) >= entry["expires_at"]:
            del self._store[key]
            return None

        return entry["data"]

    async def set(self, key: str, data: Any, ttl_seconds: Optional[int] = None):
        self._evict_expired()
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._store[key] = {
            "data": data,
            "expires_at": datetime.now(timezone.utc) + timedelta(seconds=ttl)
        }

    def _evict_expired(self):
        now = datetime.now(timezone.utc)
        expired = [k for k, entry in self._store.items() if now >= entry["expires_at"]]
        for key in expired:
            del self._store[key]

    async def invalidate_prefix(self, prefix: str) -> int:
        keys = [k for k in self._store if k.startswith(prefix)]
        for key in keys:
            del self._store[key]
        if keys:
            logger.info("Query cache invalidated", extra={"prefix": prefix, "entries": len(keys)})
        return len(keys)

    async def clear(self):
        self._store.clear()

    async def fetch(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[int] = None,
        on_retry: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> Any:
        """
        Return the cached value for `key`, loading it on a miss.

        Raises:
            AnalyticsQueryError: if the loader keeps failing after all retries
        """
        cached = await self.get(key)
        if cached is not None:
            return cached

        try:
            data = await self.retry_policy.call(loader, on_retry=on_retry)
        except RetryExhaustedError as e:
            logger.error(
                "Query failed after retries",
                extra={"key": key, "attempts": e.attempts, "error": repr(e.last_error)},
            )
            raise AnalyticsQueryError(key.split(":")[-1], e.attempts, e.last_error) from e

        await self.set(key, data, ttl_seconds)
        return data


def get_query_cache(request: Request) -> QueryCache:
    """FastAPI dependency returning the application's query cache."""
    return request.app.state.query_cache
