from __future__ import annotations

import asyncio

import pytest

from core.errors import PlatformError
from core.rate_limit import RateLimiter, SlidingWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_default_limiter_never_blocks() -> None:
    limiter = RateLimiter()
    for _ in range(1000):
        asyncio.run(limiter.acquire("tweets/create"))


def test_sliding_window_blocks_then_recovers() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(2, 60, clock=clock)

    asyncio.run(limiter.acquire("tweets/create"))
    asyncio.run(limiter.acquire("tweets/create"))
    with pytest.raises(PlatformError) as info:
        asyncio.run(limiter.acquire("tweets/create"))
    assert info.value.is_rate_limit

    clock.now = 60.0
    asyncio.run(limiter.acquire("tweets/create"))


def test_endpoints_are_counted_separately() -> None:
    limiter = SlidingWindowRateLimiter(1, 60, clock=FakeClock())
    asyncio.run(limiter.acquire("tweets/create"))
    asyncio.run(limiter.acquire("tweets/search/recent"))


def test_rejects_non_positive_settings() -> None:
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(0, 60)
