"""
Reliability Utilities.

Fixed-count retry for store reads issued through the query cache.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

logger = logging.getLogger("freightbid")


class RetryExhaustedError(Exception):
    """Raised when every attempt failed. `last_error` holds the final failure."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error!r}")


class RetryPolicy:
    """
    Retry a coroutine a fixed number of times with a fixed delay.

    `retries` counts the extra attempts, so retries=3 allows four calls in
    total. Only exceptions listed in `retry_on` are retried; anything else
    propagates on the first failure.
    """
    def __init__(
        self,
        retries: int = 3,
        delay_seconds: float = 0.5,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        self.retries = retries
        self.delay_seconds = delay_seconds
        self.retry_on = retry_on

    async def call(
        self,
        func: Callable[[], Awaitable[Any]],
        on_retry: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> Any:
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await func()
            except self.retry_on as e:
                if attempt == attempts:
                    raise RetryExhaustedError(attempts, e) from e

                logger.warning(
                    "Query attempt failed, retrying",
                    extra={"attempt": attempt, "max_attempts": attempts, "error": repr(e)},
                )
                if on_retry is not None:
                    await on_retry()
                if self.delay_seconds:
                    await asyncio.sleep(self.delay_seconds)
