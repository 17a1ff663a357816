"""Async engine, session factory and request transaction for PostgreSQL.

Each request gets one session from the factory; the DI provider opens it
through ``transaction`` so it commits when the request succeeds.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Optional

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from roost.config import Settings

APPLICATION_NAME = "roost-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine from the database settings.

    Args:
        settings: Application settings

    Returns:
        Engine with a pre-pinged connection pool
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        # Shows up in pg_stat_activity
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded rows usable after commit and never autoflush."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def transaction(
    session_factory: Callable[[], AsyncSession],
    after_commit: Optional[Callable[[], Awaitable[None]]] = None,
) -> AsyncIterator[AsyncSession]:
    """Run one request as one transaction.

    The session is committed when the block exits cleanly and rolled back
    when it raises or the commit fails. ``after_commit`` runs only once the
    commit has succeeded.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
            logfire.debug("Session committed")
        except Exception as e:
            logfire.warn("Session rollback", error=str(e))
            await session.rollback()
            raise

    if after_commit is not None:
        await after_commit()
