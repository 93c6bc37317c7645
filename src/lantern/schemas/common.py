"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OkResponse(BaseModel):
    """Bare acknowledgement."""

    ok: bool = True


class AutoPublishResponse(BaseModel):
    """Result of flipping the auto-publish flag."""

    ok: bool = True
    auto_publish: bool = Field(..., alias="autoPublish")

    model_config = ConfigDict(populate_by_name=True)


class AuditEntryResponse(BaseModel):
    """Audit trail row as exposed to admins."""

    id: int
    action: str
    target: str | None
    details: str | None
    ts: int

    model_config = ConfigDict(from_attributes=True)
