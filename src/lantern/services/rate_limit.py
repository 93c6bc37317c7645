"""Per-address request rate limiting."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from threading import Lock
from typing import Final

from fastapi import Request

logger = logging.getLogger(__name__)

UNKNOWN_ADDRESS: Final[str] = "unknown"


def client_address(request: Request) -> str:
    """Return the caller address used as the rate-limit key.

    The first hop of ``X-Forwarded-For`` wins, then the socket peer, then a
    shared ``unknown`` bucket.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client is not None and request.client.host:
        return request.client.host
    return UNKNOWN_ADDRESS


class SlidingWindowRateLimiter:
    """Sliding-window counter keyed by caller address.

    Each address keeps the monotonic timestamps of its admitted requests.
    Rejected requests are not recorded, so a throttled caller regains capacity
    as soon as its oldest admitted request leaves the window. Idle addresses
    are swept at most once per window.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    def hit(self, address: str) -> bool:
        """Record a request from ``address``; return False if it must be rejected."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            hits = self._hits.setdefault(address, deque())
            self._expire(hits, now)
            if len(hits) >= self.max_requests:
                logger.warning("Rate limit exceeded for %s", address)
                return False
            hits.append(now)
            return True

    def count(self, address: str) -> int:
        """Return how many requests from ``address`` are inside the window."""
        now = self._clock()
        with self._lock:
            hits = self._hits.get(address)
            if hits is None:
                return 0
            self._expire(hits, now)
            return len(hits)

    def prune(self) -> int:
        """Drop addresses with no requests left in the window; return how many."""
        with self._lock:
            return self._sweep(self._clock())

    def reset(self) -> None:
        """Forget every address."""
        with self._lock:
            self._hits.clear()

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float) -> int:
        stale = []
        for address, hits in self._hits.items():
            self._expire(hits, now)
            if not hits:
                stale.append(address)
        for address in stale:
            del self._hits[address]
        self._last_sweep = now
        return len(stale)

    def _expire(self, hits: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
