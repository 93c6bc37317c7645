"""Shared API dependencies for authentication, rate limiting and services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lantern.core.security import is_admin_request
from lantern.core.settings import settings
from lantern.db.session import get_db
from lantern.repositories.post_repo import PostRepository
from lantern.services.context import ServiceContext
from lantern.services.post_service import PostService
from lantern.services.rate_limit import client_address

logger = logging.getLogger(__name__)

SERVER_ERROR_DETAIL = "server error"

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_service_context(request: Request) -> ServiceContext:
    """Return the context attached to the running application."""
    return request.app.state.context


ContextDep = Annotated[ServiceContext, Depends(get_service_context)]


def get_post_service(db: SessionDep, context: ContextDep) -> PostService:
    """Build a post service bound to the request's session."""
    return PostService(
        PostRepository(db),
        context,
        default_channel=settings.default_channel,
    )


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


def enforce_rate_limit(request: Request, context: ContextDep) -> None:
    """Reject the request with 429 once the caller exceeds its allowance.

    Raises:
        HTTPException: If the caller's address is over the limit
    """
    if not context.rate_limiter.hit(client_address(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="rate limit exceeded",
        )


def require_admin(
    request: Request,
    admin_pass: Annotated[str | None, Query(include_in_schema=False)] = None,
) -> None:
    """Accept Basic credentials or the legacy shared secret.

    The secret may arrive as the ``x-admin-pass`` header or the
    ``admin_pass`` query parameter.

    Raises:
        HTTPException: If no valid credentials were supplied
    """
    shared_secret = request.headers.get("x-admin-pass") or admin_pass
    if is_admin_request(
        authorization=request.headers.get("authorization"),
        shared_secret=shared_secret,
        admin_user=settings.admin_user,
        admin_pass=settings.admin_pass,
    ):
        return
    logger.warning("Rejected admin request to %s", request.url.path)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{settings.admin_realm}"'},
    )


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate storage failures into a generic 500 response.

    Args:
        action: Short label included in the server-side log line
    """
    try:
        yield
    except SQLAlchemyError as err:
        logger.exception("Storage error while trying to %s", action)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR_DETAIL,
        ) from err
