"""In-memory fixed-window request throttle.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: a lock guards the per-key window table.
- Windows of idle clients are dropped once they expire, so the table only
  holds clients seen in the current window.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from tutor_proxy.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _Window:
    start: int
    hits: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Fixed window counter per key (e.g. 60 requests per hour per address).

    Windows are aligned to multiples of ``window_seconds`` since the epoch,
    so every key resets at the same instant.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the throttle.

        Args:
            limit: Maximum number of allowed units per window.
            window_seconds: Size of the fixed window in seconds.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._windows: dict[str, _Window] = {}
        self._pruned_window_start: int | None = None

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _window_start(self, now: float) -> int:
        return int(now // self._window_seconds) * self._window_seconds

    def _prune_locked(self, window_start: int) -> None:
        # Once per window boundary, drop every key still on an older window.
        if self._pruned_window_start == window_start:
            return
        stale = [key for key, w in self._windows.items() if w.start != window_start]
        for key in stale:
            del self._windows[key]
        self._pruned_window_start = window_start

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Count ``cost`` hits for ``key`` if the window still has room.

        Blocked attempts are not counted.

        Raises:
            ValueError: If key is empty or cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()
        window_start = self._window_start(now)
        reset_at = window_start + self._window_seconds

        with self._lock:
            self._prune_locked(window_start)
            window = self._windows.setdefault(key, _Window(start=window_start, hits=0))

            allowed = window.hits + cost <= self._limit
            if allowed:
                window.hits += cost
            remaining = max(0, self._limit - window.hits)

        return RateLimitResult(
            allowed=allowed,
            limit=self._limit,
            remaining=remaining,
            reset_at=reset_at,
            retry_after_seconds=None if allowed else max(0, math.ceil(reset_at - now)),
        )

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)
