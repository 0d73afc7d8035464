"""Token bucket rate limiter for asyncio callers."""

from __future__ import annotations

import asyncio
import time


class TokenBucket:
    """Token bucket rate limiter shared by coroutines on one event loop.

    Args:
        rate: Tokens added per second (e.g. 5.0 = 5 requests per second).
        capacity: Maximum burst capacity. Defaults to rate (no burst beyond 1s).
    """

    def __init__(self, rate: float = 5.0, capacity: float | None = None) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        self._rate = rate
        self._capacity = capacity if capacity is not None else rate
        self._tokens = self._capacity
        self._last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def capacity(self) -> float:
        return self._capacity

    def try_acquire(self, tokens: float = 1.0) -> bool:
        """Take tokens if available right now; never waits."""
        self._refill()
        if self._tokens >= tokens:
            self._tokens -= tokens
            return True
        return False

    async def acquire(self, tokens: float = 1.0) -> None:
        """Wait until tokens are available, then consume them."""
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    return
                wait_time = (tokens - self._tokens) / self._rate
                await asyncio.sleep(wait_time)

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)
        self._last_refill = now
