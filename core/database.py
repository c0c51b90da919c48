"""Async SQLAlchemy database engine and session management.

Provides the persistence layer for the SQL-backed catalog store:
- Engine construction from DatabaseConfig (pool_size/max_overflow, SSL)
- Automatic session lifecycle (commit on success, rollback on error)
- Startup connectivity check and table creation
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from patterns.domain_config import DatabaseConfig


# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------

def create_engine(config: DatabaseConfig) -> AsyncEngine:
    """Build an async engine for the configured database."""
    if config.is_sqlite:
        # SQLite has no server-side pool to tune.
        return create_async_engine(config.dsn, echo=config.echo)

    connect_args = {"ssl": "require"} if config.ssl else {}
    return create_async_engine(
        config.dsn,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        echo=config.echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that commits on success and rolls back on error.

    Usage::

        async with session_scope(factory) as session:
            session.add(row)
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def check_connection(engine: AsyncEngine) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Unable to connect to the database")
        raise
    logger.info("Database connection established")


async def init_db(engine: AsyncEngine) -> None:
    """Create tables for every registered model."""
    from core.models.base import Base
    import verticals.catalog.models.db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database models synced")


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()
