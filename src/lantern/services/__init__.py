# src/lantern/services/__init__.py
"""Business logic services for the Lantern application."""

from .context import ServiceContext
from .moderation import check_for_flags
from .post_service import PostNotFoundError, PostService, PostValidationError
from .rate_limit import SlidingWindowRateLimiter, client_address

__all__ = [
    "PostNotFoundError",
    "PostService",
    "PostValidationError",
    "ServiceContext",
    "SlidingWindowRateLimiter",
    "check_for_flags",
    "client_address",
]
