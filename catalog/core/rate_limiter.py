"""
Fixed-window attempt counters for the unauthenticated auth endpoints.

One limiter lives on ``app.state``; counters are kept per ``scope:client``
key in process memory, so limits apply per worker.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import Request

from catalog.domain.errors import RateLimitedError


class RateLimiter:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, *, limit: int, window_seconds: int) -> None:
        """Count one attempt for ``key``; raise once ``limit`` is exceeded."""
        now = self._clock()
        with self._lock:
            count, window_end = self._windows.get(key, (0, now + window_seconds))
            if now >= window_end:
                count, window_end = 0, now + window_seconds
            count += 1
            self._windows[key] = (count, window_end)
        if count > limit:
            retry_after = max(1, math.ceil(window_end - now))
            raise RateLimitedError("Too many attempts, try again later", retry_after)


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For when behind a proxy, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"
