# src/lantern/db/time.py
"""Time utilities for database rows."""

from __future__ import annotations

import time
from threading import Lock

_LAST_TIMESTAMP_MS = 0
_TIMESTAMP_LOCK = Lock()


def now_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def next_timestamp_ms() -> int:
    """Return an epoch-millisecond timestamp strictly greater than the previous one.

    Posts created within the same millisecond still sort deterministically
    newest-first.
    """
    global _LAST_TIMESTAMP_MS
    with _TIMESTAMP_LOCK:
        _LAST_TIMESTAMP_MS = max(now_ms(), _LAST_TIMESTAMP_MS + 1)
        return _LAST_TIMESTAMP_MS
