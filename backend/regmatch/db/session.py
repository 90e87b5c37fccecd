"""Async SQLAlchemy engine and session factory for the rule store."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from regmatch.config import settings


def async_database_url(url: str) -> str:
    """Point plain Postgres URLs at the asyncpg driver; other URLs pass through."""
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


engine_options = {
    "echo": settings.ENVIRONMENT == "development",
    "pool_pre_ping": True,
}
if settings.ENVIRONMENT == "test":
    engine_options["poolclass"] = NullPool

engine = create_async_engine(async_database_url(settings.DATABASE_URL), **engine_options)

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session for one request.

    Commits when the request succeeds and rolls back when it raises,
    so a rejected catalog ingest leaves no partial rows behind.
    """
    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
