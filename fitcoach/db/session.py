"""Async engine, session factory and the per-request session dependency.

PostgreSQL (asyncpg) in production; a `sqlite+aiosqlite` DATABASE_URL is
accepted for local runs, with foreign keys switched on so ON DELETE CASCADE
behaves the same.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from fitcoach.core.config import get_settings

settings = get_settings()


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        sqlite_engine = create_async_engine(url, echo=settings.debug)
        event.listen(sqlite_engine.sync_engine, "connect", enable_sqlite_foreign_keys)
        return sqlite_engine
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


engine = build_engine(settings.async_database_url)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: commit on success, roll back on any error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
