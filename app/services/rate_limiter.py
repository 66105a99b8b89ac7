"""
Async token bucket.

Paces outbound GitHub calls between org-search batches. The clock and sleep
function are injectable so tests can drive time explicitly.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class AsyncTokenBucket:
    """Token bucket rate limiter for asyncio callers.

    Tokens refill continuously at ``rate`` per second up to ``capacity``.
    ``acquire()`` waits until enough tokens are available. A non-positive
    rate disables limiting.
    """

    def __init__(
        self,
        rate: float,
        capacity: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.rate = rate
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = capacity
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def from_interval(cls, seconds: float, **kwargs) -> "AsyncTokenBucket":
        """One token every ``seconds`` (0 means unlimited)."""
        rate = 1.0 / seconds if seconds > 0 else 0.0
        return cls(rate=rate, capacity=1.0, **kwargs)

    @property
    def tokens(self) -> float:
        return self._tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._last_refill = now

    async def acquire(self, tokens: float = 1.0) -> None:
        """
        Take ``tokens`` from the bucket, waiting for a refill if needed.

        Raises:
            ValueError: If more tokens are requested than the bucket can hold
        """
        if self.rate <= 0:
            return
        if tokens > self.capacity:
            raise ValueError(f"Cannot acquire {tokens} tokens from a bucket of {self.capacity}")

        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    return
                wait = (tokens - self._tokens) / self.rate
                logger.debug(f"Rate limited, waiting {wait:.3f}s")
                await self._sleep(wait)
