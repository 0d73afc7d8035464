"""Tests for yt_dashboard.utils.rate_limit."""

import asyncio
import time

import pytest

from yt_dashboard.utils.rate_limit import TokenBucket


class TestTokenBucketInit:
    def test_defaults(self):
        bucket = TokenBucket()
        assert bucket.rate == 5.0
        assert bucket.capacity == 5.0

    def test_custom_capacity(self):
        bucket = TokenBucket(rate=2.0, capacity=10.0)
        assert bucket.rate == 2.0
        assert bucket.capacity == 10.0

    def test_rejects_non_positive_rate(self):
        with pytest.raises(ValueError):
            TokenBucket(rate=0)


class TestTryAcquire:
    def test_within_capacity(self):
        bucket = TokenBucket(rate=10.0, capacity=10.0)
        for _ in range(10):
            assert bucket.try_acquire() is True

    def test_exceeds_capacity(self):
        bucket = TokenBucket(rate=2.0, capacity=2.0)
        assert bucket.try_acquire() is True
        assert bucket.try_acquire() is True
        assert bucket.try_acquire() is False

    def test_refills_over_time(self):
        bucket = TokenBucket(rate=100.0, capacity=1.0)
        assert bucket.try_acquire() is True
        assert bucket.try_acquire() is False
        time.sleep(0.02)  # 100 tokens/sec * 0.02s = 2 tokens
        assert bucket.try_acquire() is True

    def test_capacity_caps_tokens(self):
        bucket = TokenBucket(rate=100.0, capacity=2.0)
        time.sleep(0.1)  # would add 10 tokens, but capped at 2
        count = 0
        while bucket.try_acquire():
            count += 1
        assert count == 2


class TestAcquire:
    def test_waits_for_refill(self):
        async def go():
            bucket = TokenBucket(rate=100.0, capacity=1.0)
            await bucket.acquire()  # drain
            start = time.monotonic()
            await bucket.acquire()  # should wait ~0.01s
            return time.monotonic() - start

        assert asyncio.run(go()) < 0.5

    def test_concurrent_waiters_are_paced(self):
        async def go():
            bucket = TokenBucket(rate=50.0, capacity=1.0)
            start = time.monotonic()
            await asyncio.gather(*(bucket.acquire() for _ in range(5)))
            return time.monotonic() - start

        # 1 immediate + 4 refills at 50/s
        assert asyncio.run(go()) >= 0.07
