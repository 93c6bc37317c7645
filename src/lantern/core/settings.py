"""Application settings and configuration.

This module defines all configuration options for the Lantern application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Lantern", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server binding for the uvicorn entry point
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Database configuration
    database_url: str = Field(default="sqlite:///./lantern.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Admin credentials (Basic auth user/pass; the pass doubles as the legacy shared secret)
    admin_user: str = Field(default="admin", alias="ADMIN_USER")
    admin_pass: str = Field(default="lantern-admin-demo-CHANGE_ME", alias="ADMIN_PASS")
    admin_realm: str = Field(default="Lantern Admin", alias="ADMIN_REALM")

    # Publishing workflow
    auto_publish: bool = Field(default=False, alias="AUTO_PUBLISH")
    default_channel: str = Field(default="confess-here", alias="DEFAULT_CHANNEL")
    export_filename: str = Field(default="lantern_posts.json", alias="EXPORT_FILENAME")

    # Per-address rate limiting on post submission
    rate_limit_max_requests: int = Field(default=300, ge=1, alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_window_seconds: float = Field(
        default=60.0,
        gt=0,
        alias="RATE_LIMIT_WINDOW_SECONDS",
    )

    # CORS configuration for the browser front-end
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic.

        Returns:
            Database URL compatible with synchronous database drivers
        """
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite", 1)
        return url


settings = Settings()
