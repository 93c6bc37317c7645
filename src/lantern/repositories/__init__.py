"""Repositories wrapping database access."""

from .post_repo import PostRepository

__all__ = ["PostRepository"]
