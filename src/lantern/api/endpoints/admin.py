# src/lantern/api/endpoints/admin.py
"""Moderator endpoints for reviewing, editing and exporting posts."""

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from lantern.api.dependencies import PostServiceDep, require_admin, storage_errors
from lantern.core.settings import settings
from lantern.models import AuditEntry, Post
from lantern.schemas.common import AuditEntryResponse, AutoPublishResponse, OkResponse
from lantern.schemas.post import PostResponse, PostUpdate
from lantern.services.post_service import PostNotFoundError, PostValidationError

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/posts", response_model=list[PostResponse])
async def list_all_posts(service: PostServiceDep) -> list[Post]:
    """List every post regardless of state, newest first."""
    with storage_errors("list all posts"):
        return service.list_all()


@router.patch("/posts/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    service: PostServiceDep,
    payload: PostUpdate | None = Body(None),
) -> Post:
    """Change a post's state and/or text.

    Empty values are ignored. Every call is written to the audit log.

    Raises:
        HTTPException: 400 for an unknown state, 404 if the post does not exist
    """
    payload = payload or PostUpdate()
    with storage_errors("update post"):
        try:
            return service.admin_update(post_id, state=payload.state, text=payload.text)
        except PostValidationError as err:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
        except PostNotFoundError as err:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Post not found",
            ) from err


@router.delete("/posts/{post_id}", response_model=OkResponse)
async def delete_post(post_id: str, service: PostServiceDep) -> OkResponse:
    """Delete a post and its reactions; audit history is kept."""
    with storage_errors("delete post"):
        service.admin_delete(post_id)
    return OkResponse()


@router.post("/toggle-auto-publish", response_model=AutoPublishResponse)
async def toggle_auto_publish(service: PostServiceDep) -> AutoPublishResponse:
    """Flip the in-memory auto-publish flag."""
    return AutoPublishResponse(auto_publish=service.toggle_auto_publish())


@router.get("/export")
async def export_posts(service: PostServiceDep) -> JSONResponse:
    """Download every post as a JSON attachment."""
    with storage_errors("export posts"):
        posts = [PostResponse.model_validate(post) for post in service.export()]
    return JSONResponse(
        content=jsonable_encoder(posts),
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"',
        },
    )


@router.get("/audit", response_model=list[AuditEntryResponse])
async def list_audit_entries(
    service: PostServiceDep,
    target: str | None = Query(None, description="Only entries about this post id"),
) -> list[AuditEntry]:
    """List audit entries newest first, including those for deleted posts."""
    with storage_errors("list audit entries"):
        return service.list_audit(target)
