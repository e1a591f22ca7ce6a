"""
Database engine and session management for CoronaTracker.

Provides async SQLAlchemy engine, session factory, and schema utilities.
Uses the aiosqlite driver for the local country store.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import inspect, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from coronatracker.config import Config
from coronatracker.database.models import Base
from coronatracker.logger import get_logger

logger = get_logger(__name__)


def _is_memory_url(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def create_engine(url: Optional[str] = None, echo: bool = False) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        url: Database URL (defaults to config)
        echo: Log all SQL statements

    Returns:
        AsyncEngine instance
    """
    db_url = url or Config().DATABASE_URL
    logger.info(f"Creating async database engine: {db_url}")

    parsed = make_url(db_url)
    kwargs = {}
    if _is_memory_url(db_url):
        # One shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    elif parsed.get_backend_name() == "sqlite":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(db_url, echo=echo, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory.

    Returns:
        Async session maker bound to engine
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions.

    Commits on clean exit, rolls back and re-raises on error.

    Usage:
        async with session_scope(factory) as session:
            await session.execute(...)

    Yields:
        AsyncSession instance
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine, drop_all: bool = False) -> bool:
    """
    Initialize database schema.

    Args:
        engine: Engine to create the tables on
        drop_all: Drop all existing tables first (DANGEROUS!)

    Returns:
        True if the countries table did not exist before this call
    """
    async with engine.begin() as conn:
        if drop_all:
            logger.warning("Dropping all database tables!")
            await conn.run_sync(Base.metadata.drop_all)

        created = not await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).has_table("countries")
        )

        logger.info("Creating database tables...")
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialization complete")
    return created
