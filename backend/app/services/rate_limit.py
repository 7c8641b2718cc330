from __future__ import annotations

import math
import time
from collections.abc import Callable
from threading import Lock

from app.core.config import settings


class RateLimitExceeded(RuntimeError):
    def __init__(self, retry_after_seconds: int):
        super().__init__(f"Rate limit exceeded. Please wait {retry_after_seconds} seconds before making another request.")
        self.retry_after_seconds = retry_after_seconds


class FixedWindowRateLimiter:
    """Counts requests per fixed window; the window restarts on the first request after it elapses."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = Lock()
        self._window_started_at: float | None = None
        self._count = 0

    def reset(self) -> None:
        with self._lock:
            self._window_started_at = None
            self._count = 0

    def acquire(self) -> None:
        with self._lock:
            now = self._clock()
            if self._window_started_at is None or now - self._window_started_at >= self.window_seconds:
                self._window_started_at = now
                self._count = 0

            if self._count >= self.max_requests:
                remaining = self.window_seconds - (now - self._window_started_at)
                raise RateLimitExceeded(retry_after_seconds=max(1, math.ceil(remaining)))

            self._count += 1


analysis_rate_limiter = FixedWindowRateLimiter(
    max_requests=settings.ai_rate_limit_max_requests,
    window_seconds=settings.ai_rate_limit_window_seconds,
)
