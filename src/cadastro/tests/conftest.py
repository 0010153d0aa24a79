"""
Core pytest configuration for the entire test suite.

Only the database setup and the logging installation live here. Domain fixtures
(payload factories, repositories, services) are in:
- tests/test_fixtures/repository_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before the modules that
# initialize them are imported (Faker, SQLAlchemy, aiosqlite).
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from cadastro.database.base import Base
from cadastro import models  # noqa: F401 – import to register models with Base.metadata
from cadastro.database.session import make_engine
from cadastro.config import get_settings
from cadastro.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's dictConfig logging once for the whole session.

    pytest attaches its capture handler to the root logger per test phase, so `caplog`
    keeps working after dictConfig replaces the root handlers.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Determining the Test Database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials, for logging.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a Postgres instance)
    2. In-memory SQLite for local runs: no server needed, a fresh schema per test
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    One engine and one fresh schema per test.

    Function scope keeps the engine on the same event loop as the test. With SQLite,
    StaticPool makes every session share the single in-memory connection.
    """
    kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        kwargs = {"poolclass": StaticPool}

    engine = make_engine(TEST_DATABASE_URL, **kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    A session for one test. Repositories only flush, so nothing outlives the test;
    the schema is dropped by `async_engine` anyway.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()


# Repository / service test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    faker_br,
    associado_payload,
    dependente_payload,
    associado_repository,
    dependente_repository,
    associado_service,
    dependente_service,
    create_associado,
    create_dependente,
)
