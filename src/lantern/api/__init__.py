"""HTTP API for the Lantern board."""

from .endpoints import admin_router, posts_router

__all__ = [
    "admin_router",
    "posts_router",
]
