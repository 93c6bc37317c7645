# src/lantern/models/__init__.py
"""SQLAlchemy models for the Lantern application."""

from .audit import AuditEntry
from .post import Post
from .reaction import Reaction

__all__ = [
    "AuditEntry",
    "Post",
    "Reaction",
]
