# src/lantern/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from lantern.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the schema to ``revision``."""
    logger.info("Upgrading database schema to %s", revision)
    command.upgrade(build_config(database_url), revision)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply Lantern database migrations.")
    parser.add_argument("revision", nargs="?", default="head", help="Target revision (default: head)")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    run_upgrade(args.revision, args.database_url)
    print("Migration complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
