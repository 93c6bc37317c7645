# src/lantern/api/endpoints/__init__.py
"""API endpoint modules."""

from .admin import router as admin_router
from .posts import router as posts_router

__all__ = [
    "admin_router",
    "posts_router",
]
