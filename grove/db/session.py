"""Async engine, session factory and the per-request session dependency."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from grove.core.config import get_settings

settings = get_settings()


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """PostgreSQL gets the configured pool; SQLite keeps SQLAlchemy's default pooling."""
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=settings.debug, **kwargs)
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
        **kwargs,
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Objects stay readable after commit so responses can be built from them
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine = build_engine(settings.async_database_url)
async_session_maker = build_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: commit when the handler returns, roll back on any error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
