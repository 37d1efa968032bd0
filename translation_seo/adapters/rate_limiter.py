from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable

from translation_seo.config import Settings


class TokenBucket:
    """
    Async token bucket: ``quota`` tokens per ``period`` seconds.

    The bucket starts full and refills continuously. ``acquire`` waits until a
    token is available; waiters are served one at a time.
    """

    def __init__(
        self,
        quota: int,
        period: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], "asyncio.Future[None]"] = asyncio.sleep,
    ) -> None:
        if quota <= 0:
            raise ValueError("quota must be positive")
        if period <= 0:
            raise ValueError("period must be positive")
        self.quota = quota
        self.period = period
        self._rate = quota / period
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(quota)
        self._updated = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def per_second(cls, quota: int, **kwargs) -> "TokenBucket":
        return cls(quota, 1.0, **kwargs)

    @classmethod
    def per_minute(cls, quota: int, **kwargs) -> "TokenBucket":
        return cls(quota, 60.0, **kwargs)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated)
        self._updated = now
        self._tokens = min(float(self.quota), self._tokens + elapsed * self._rate)

    @property
    def available(self) -> float:
        self._refill()
        return self._tokens

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return
                await self._sleep((1.0 - self._tokens) / self._rate)


@dataclass
class RateLimiters:
    """One independent bucket per downstream service."""

    scrape: TokenBucket
    chat: TokenBucket
    trends: TokenBucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiters":
        return cls(
            # a ballpark figure that the news site has never pushed back on
            scrape=TokenBucket.per_second(settings.scrape_rate_per_second),
            # 90k tokens per minute at roughly 100 words per description
            chat=TokenBucket.per_minute(settings.chat_rate_per_minute),
            trends=TokenBucket.per_minute(settings.trends_rate_per_minute),
        )

    async def acquire(self, service: str) -> None:
        bucket = getattr(self, service, None)
        if not isinstance(bucket, TokenBucket):
            raise KeyError(f"no rate limit configured for {service!r}")
        await bucket.acquire()


__all__ = ["RateLimiters", "TokenBucket"]
