# src/lantern/main.py
"""Main entry point for the Lantern application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from lantern.api import admin_router, posts_router
from lantern.api.dependencies import SERVER_ERROR_DETAIL
from lantern.core.settings import settings
from lantern.db.session import create_tables
from lantern.services.context import ServiceContext

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Lantern API",
    description="Anonymous confession board with a moderated publishing queue",
    version=settings.app_version,
)
app.state.context = ServiceContext.from_settings(settings)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router)
app.include_router(admin_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the client."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SERVER_ERROR_DETAIL},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    logger.info(
        "%s %s started (auto-publish %s)",
        settings.app_name,
        settings.app_version,
        "on" if app.state.context.auto_publish else "off",
    )


@app.get("/health")
async def health_check() -> dict[str, bool]:
    """Health check endpoint to verify the service is running."""
    return {"ok": True}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Lantern API",
        "version": settings.app_version,
        "description": "Anonymous confession board",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lantern.main:app", host=settings.host, port=settings.port, reload=settings.debug)
