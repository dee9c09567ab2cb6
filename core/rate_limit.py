# =============================================================================
# core/rate_limit.py  —  Client-side Rate Limiting (extension point)
# =============================================================================
#
# The Twitter client awaits `limiter.acquire(endpoint)` before every remote
# call.  By default that is a no-op: we find out about Twitter's limits only
# when a call comes back with a 429.
#
# SlidingWindowRateLimiter is the opt-in alternative.  It counts calls per
# endpoint over a rolling window and refuses the call locally, raising the
# same rate-limit PlatformError a real 429 would produce, so the agent sees
# one consistent "please wait" message either way.
# =============================================================================

import time
from collections import defaultdict, deque
from typing import Callable

from core.errors import RATE_LIMIT_STATUS, PlatformError


class RateLimiter:
    """No-op limiter.  Subclasses override acquire()."""

    async def acquire(self, endpoint: str) -> None:
        return None


class SlidingWindowRateLimiter(RateLimiter):
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit <= 0 or window_seconds <= 0:
            raise ValueError("limit and window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._calls: dict[str, deque] = defaultdict(deque)

    async def acquire(self, endpoint: str) -> None:
        now = self._clock()
        calls = self._calls[endpoint]
        while calls and now - calls[0] >= self.window_seconds:
            calls.popleft()
        if len(calls) >= self.limit:
            retry_in = self.window_seconds - (now - calls[0])
            raise PlatformError(
                f"Client-side rate limit for {endpoint}: {self.limit} calls per "
                f"{self.window_seconds:g}s (retry in {retry_in:.0f}s)",
                code=str(RATE_LIMIT_STATUS),
            )
        calls.append(now)
