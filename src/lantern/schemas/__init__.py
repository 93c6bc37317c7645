# src/lantern/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import AuditEntryResponse, AutoPublishResponse, OkResponse
from .post import (
    PostCreate,
    PostCreatedResponse,
    PostResponse,
    PostUpdate,
    ReactedPostResponse,
    ReactionCreate,
    ReactionResponse,
    ReportCreate,
)

__all__ = [
    "AuditEntryResponse", "AutoPublishResponse", "OkResponse",
    "PostCreate", "PostCreatedResponse", "PostResponse", "PostUpdate",
    "ReactedPostResponse", "ReactionCreate", "ReactionResponse", "ReportCreate",
]
