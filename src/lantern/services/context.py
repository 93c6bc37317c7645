"""Process-wide mutable state shared by request handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock

from lantern.core.settings import Settings
from lantern.services.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """Runtime state built once per application instance.

    Attributes:
        auto_publish: When on, unflagged posts are published immediately.
        rate_limiter: Per-address limiter guarding post submission.
    """

    auto_publish: bool
    rate_limiter: SlidingWindowRateLimiter
    _lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceContext:
        """Build a fresh context from configuration."""
        return cls(
            auto_publish=settings.auto_publish,
            rate_limiter=SlidingWindowRateLimiter(
                max_requests=settings.rate_limit_max_requests,
                window_seconds=settings.rate_limit_window_seconds,
            ),
        )

    def toggle_auto_publish(self) -> bool:
        """Flip the auto-publish flag and return the new value."""
        with self._lock:
            self.auto_publish = not self.auto_publish
            value = self.auto_publish
        logger.info("Auto-publish is now %s", "on" if value else "off")
        return value
