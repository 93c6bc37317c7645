# src/lantern/schemas/post.py
"""Post-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for submitting a new post.

    Fields are optional at the schema level so a missing ``text`` is reported
    as a validation failure by the service rather than a schema error.
    """

    text: str | None = Field(None, description="Confession text")
    channel: str | None = Field(None, description="Channel tag, defaults to confess-here")


class PostUpdate(BaseModel):
    """Schema for admin edits; empty values are ignored."""

    state: str | None = Field(None, description="New state: held or published")
    text: str | None = Field(None, description="Replacement text")


class ReactionCreate(BaseModel):
    """Schema for reacting to a post."""

    kind: str | None = Field(None, description="Reaction kind, e.g. heart")


class ReportCreate(BaseModel):
    """Schema for reporting a post."""

    reason: str | None = Field(None, description="Optional reason shown to moderators")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    text: str
    channel: str
    state: str
    ts: int

    model_config = ConfigDict(from_attributes=True)


class ReactedPostResponse(PostResponse):
    """Post with its reaction counts keyed by kind."""

    reactions: dict[str, int] = Field(default_factory=dict)


class PostCreatedResponse(BaseModel):
    """Envelope returned after a successful submission."""

    ok: bool = True
    post: PostResponse


class ReactionResponse(BaseModel):
    """Envelope returned after a reaction is counted."""

    ok: bool = True
    post: ReactedPostResponse
