# tests/conftest.py
from __future__ import annotations

import base64
import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app's own engine in memory; tests swap in their own session anyway.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from lantern.api.dependencies import get_service_context
from lantern.core.settings import Settings, settings
from lantern.db.session import Base
from lantern.db.session import get_db as app_get_session
from lantern.main import app as fastapi_app
from lantern.repositories.post_repo import PostRepository
from lantern.services.context import ServiceContext
from lantern.services.post_service import PostService
from lantern.services.rate_limit import SlidingWindowRateLimiter

TEST_DB_URL = "sqlite://"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def service_context(fake_clock: FakeClock) -> ServiceContext:
    """Fresh runtime state per test: auto-publish off, default rate limit."""
    return ServiceContext(
        auto_publish=False,
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            clock=fake_clock,
        ),
    )


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    service_context: ServiceContext,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    overrides: dict[Callable[..., Any], Callable[..., Any]] = {
        app_get_session: _get_session_override,
        get_service_context: lambda: service_context,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_settings() -> Settings:
    """Provide the Settings instance the app is running with."""
    return settings


@pytest.fixture()
def repo(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


@pytest.fixture()
def post_service(repo: PostRepository, service_context: ServiceContext) -> PostService:
    return PostService(repo, service_context)


def _basic_auth_header(username: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture()
def basic_auth() -> Callable[[str, str], dict[str, str]]:
    """Return a helper building Basic authorization headers."""
    return _basic_auth_header


@pytest.fixture()
def admin_headers(test_settings: Settings) -> dict[str, str]:
    """Return Basic authorization headers for the configured admin."""
    return _basic_auth_header(test_settings.admin_user, test_settings.admin_pass)


@pytest.fixture()
def make_post(post_service: PostService) -> Callable[..., Any]:
    """Create a post directly through the service with a chosen state."""

    def _make_post(text: str = "Test post content", channel: str | None = None, state: str = "held"):
        post = post_service.create(text, channel)
        if state != post.state:
            post = post_service.repo.update_fields(post.id, state=state)
        return post

    return _make_post
