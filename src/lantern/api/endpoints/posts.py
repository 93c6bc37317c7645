# src/lantern/api/endpoints/posts.py
"""Public post endpoints: listing, submission, reactions and reports."""

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from lantern.api.dependencies import PostServiceDep, enforce_rate_limit, storage_errors
from lantern.models import Post
from lantern.schemas.common import OkResponse
from lantern.schemas.post import (
    PostCreate,
    PostCreatedResponse,
    PostResponse,
    ReactedPostResponse,
    ReactionCreate,
    ReactionResponse,
    ReportCreate,
)
from lantern.services.post_service import PostNotFoundError, PostValidationError

router = APIRouter(prefix="/api", tags=["posts"])


@router.get("/public/posts", response_model=list[PostResponse])
async def list_published_posts(
    service: PostServiceDep,
    channel: str | None = Query(None, description="Only return posts from this channel"),
) -> list[Post]:
    """List published posts, newest first.

    Args:
        service: Post lifecycle service
        channel: Optional channel filter

    Returns:
        Published posts in descending timestamp order
    """
    with storage_errors("list published posts"):
        return service.list_published(channel)


@router.post(
    "/posts",
    response_model=PostCreatedResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_post(
    service: PostServiceDep,
    payload: PostCreate | None = Body(None),
) -> PostCreatedResponse:
    """Submit an anonymous post.

    Flagged text is always held; unflagged text is published only while
    auto-publish is on.

    Raises:
        HTTPException: 400 if text is missing or blank
    """
    payload = payload or PostCreate()
    with storage_errors("create post"):
        try:
            post = service.create(payload.text, payload.channel)
        except PostValidationError as err:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
        return PostCreatedResponse(post=PostResponse.model_validate(post))


@router.post("/reactions/{post_id}", response_model=ReactionResponse)
async def add_reaction(
    post_id: str,
    service: PostServiceDep,
    payload: ReactionCreate | None = Body(None),
) -> ReactionResponse:
    """Count one reaction of the given kind on a post.

    Raises:
        HTTPException: 400 if kind is missing, 404 if the post does not exist
    """
    payload = payload or ReactionCreate()
    with storage_errors("add reaction"):
        try:
            post, counts = service.add_reaction(post_id, payload.kind)
        except PostValidationError as err:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
        except PostNotFoundError as err:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found",
            ) from err
        base = PostResponse.model_validate(post)
        return ReactionResponse(post=ReactedPostResponse(**base.model_dump(), reactions=counts))


@router.post("/report/{post_id}", response_model=OkResponse)
async def report_post(
    post_id: str,
    service: PostServiceDep,
    payload: ReportCreate | None = Body(None),
) -> OkResponse:
    """Flag a post for moderator review; it returns to the held queue."""
    reason = payload.reason if payload else None
    with storage_errors("report post"):
        service.report(post_id, reason)
    return OkResponse()
