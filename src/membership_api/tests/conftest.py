"""
Core pytest configuration for the entire test suite.

Only the essentials live here: logging installation and the database fixtures.
Domain-specific fixtures are in:
- tests/test_fixtures/repository_fixtures.py   (entity factories, created rows)
- tests/test_fixtures/fake_store.py            (in-memory Store used by the API tests)
"""

from __future__ import annotations

import os
import logging
from typing import AsyncGenerator
from urllib.parse import urlparse

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the project imports so collection is not spammed by Faker/SQLAlchemy.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from membership_api.config import get_settings
from membership_api.core.logging.builder import setup_logging
from membership_api.database.base import Base
from membership_api.database.session import create_engine, create_session_factory
from membership_api.repositories.store import SQLStore
from membership_api import models  # noqa: F401 - registers the tables on Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application's dictConfig logging once for the session.

    dictConfig replaces the root handlers, so pytest's capture handler is re-attached
    (best effort) to keep `caplog.records` populated.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------

def safe_log_db_url(db_url: str) -> str:
    """Return the URL without credentials, for logging."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path) -> str:
    """
    1. `TEST_DATABASE_URL` (CI, e.g. a throw-away Postgres database)
    2. otherwise a fresh SQLite file inside the test's tmp_path
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_path / 'membership_test.db'}"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------
# The repositories commit on every call, so isolation comes from a fresh schema per test
# rather than from an outer rolled-back transaction.

@pytest.fixture()
async def async_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    db_url = get_test_database_url(tmp_path)
    logger.debug("Using test DB: %s", safe_log_db_url(db_url))

    engine = create_engine(db_url, echo=False, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest.fixture()
def store(session_factory: async_sessionmaker[AsyncSession]) -> SQLStore:
    return SQLStore(session_factory)


# Shared fixtures made available to every test module
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    member_repository,
    sport_repository,
    membership_repository,
    make_member,
    make_sport,
    make_membership,
    created_member,
    created_sport,
)
from .test_fixtures.fake_store import fake_store  # noqa: E402,F401
