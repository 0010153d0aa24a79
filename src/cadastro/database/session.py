import json
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from ..config import get_settings


def _json_default(value):
    # Parsed datetimes can end up inside nested object/array fields
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_serializer(value) -> str:
    return json.dumps(value, default=_json_default)


def make_engine(url: str, *, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Create an AsyncEngine wired with the JSON serializer used by object/array columns.
    """
    return create_async_engine(
        url,
        echo=echo,
        json_serializer=json_serializer,
        **kwargs,
    )


settings = get_settings()

# Create the AsyncEngine. No connection is opened until first use.
engine: AsyncEngine = make_engine(
    settings.DATABASE_URL,
    echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
    pool_pre_ping=True,              # Enables connection health checks
)

# `async_sessionmaker` returns an async session factory.
AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and ensure it's closed afterwards.

    Repositories only flush; committing is the caller's decision.
    """
    async with AsyncSessionMaker() as session:
        yield session


@asynccontextmanager
async def session_scope(session_maker: async_sessionmaker | None = None) -> AsyncIterator[AsyncSession]:
    """
    Unit of work: commit when the block exits cleanly, roll back otherwise.

    Usage:
        async with session_scope() as db:
            await EntityService(get_descriptor("associado"), db).create(payload, actor="MARIA")
    """
    maker = session_maker or AsyncSessionMaker
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
