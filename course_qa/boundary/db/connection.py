"""
Async engine, session factory and the request-scoped session dependency.

One engine per process. HTTP requests get a session each through
``get_async_db``; the ingestion pipeline and queue open their own short
sessions from ``get_async_session_factory()`` because they outlive requests.

Dependencies: sqlalchemy, course_qa.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from course_qa.configs import get_settings
from course_qa.configs.database import DatabaseSettings


def build_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create an engine for the configured database.

    PostgreSQL (asyncpg) gets a sized pool with pre-ping; SQLite
    (aiosqlite) keeps the driver's default pool and may be used from the
    worker threads ingestion runs in.
    """
    if db_config.is_sqlite:
        return create_async_engine(
            db_config.async_database_url,
            echo=db_config.echo_sql,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_engine() -> AsyncEngine:
    return build_engine(get_settings().database)


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Process-wide session factory.

    ``expire_on_commit=False`` keeps loaded documents readable after the
    service commits, which the routers rely on when building responses.
    """
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    Usage:
        @router.get("/documents/{document_id}")
        async def get_document(document_id: str, db: AsyncSession = Depends(get_async_db)):
            ...
    """
    async with get_async_session_factory()() as session:
        yield session
