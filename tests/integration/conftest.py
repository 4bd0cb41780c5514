"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Initialize / close the global connection pool

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from psycopg import connect

from mail_scheduler.crosscutting.config import get_settings
from mail_scheduler.infrastructure.db.pool import close_pool, init_pool

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")
DB_PORT = os.getenv("POSTGRES_HOST_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "mail_scheduler")
DEFAULT_DATABASE_URL = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)


def _ensure_reachable(url: str) -> str:
    try:
        with connect(url, autocommit=True, connect_timeout=2) as conn:
            conn.execute("SELECT 1")
    except Exception as exc:
        raise RuntimeError(
            "PostgreSQL is required for integration tests. "
            "Start a local server or point DATABASE_URL at one."
        ) from exc
    return url


if os.getenv("RUN_INTEGRATION") == "1":
    os.environ["APP_ENV"] = "integration"
    os.environ["DATABASE_URL"] = _ensure_reachable(
        os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    )
    get_settings.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def apply_migrations() -> None:
    """Run Alembic migrations for integration tests."""
    if os.getenv("RUN_INTEGRATION") != "1":
        return

    repo_root = Path(__file__).resolve().parents[2]
    config = Config(str(repo_root / "alembic.ini"))
    config.set_main_option("script_location", str(repo_root / "alembic"))

    command.upgrade(config, "head")


@pytest.fixture(scope="session", autouse=True)
def init_db_pool(apply_migrations):
    if os.getenv("RUN_INTEGRATION") != "1":
        yield
        return

    settings = get_settings()
    init_pool(
        settings.database_url,
        settings.db_pool_min_size,
        settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
    )
    yield
    close_pool()
