"""Retry policy for data source calls."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from tracker.errors import PoolNotFound, TransientFetchError
from .clock import Clock

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE: Tuple[Type[Exception], ...] = (TransientFetchError, PoolNotFound)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-delay retry.

    max_attempts=None retries forever. Only exceptions listed in `retry_on`
    are retried, anything else propagates on the first failure.
    """
    delay: float = 0.0
    max_attempts: Optional[int] = None
    retry_on: Tuple[Type[Exception], ...] = RETRYABLE

    def __post_init__(self):
        if self.delay < 0:
            raise ValueError(f"delay must be non-negative: {self.delay}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1: {self.max_attempts}")

    async def call(self, operation: Callable[[], Awaitable[T]], clock: Clock, what: str = "operation") -> T:
        """Run `operation` until it succeeds or attempts are exhausted."""
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except self.retry_on as e:
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    logger.error(f"Unable to {what} after {attempt} attempts: {e}")
                    raise
                logger.error(f"Unable to {what}: {e}. Retrying after {self.delay:.2f} seconds")
            # zero delay still goes through the clock so a stop request is seen
            await clock.sleep(self.delay)
