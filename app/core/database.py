"""Async database engine and session management"""

from typing import AsyncGenerator

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings


class Base(DeclarativeBase):
    pass


# JSON columns map to JSONB on PostgreSQL and plain JSON elsewhere
JSONVariant = JSON().with_variant(JSONB(), "postgresql")


def _engine_options(url: str) -> dict:
    options = {"echo": settings.db_echo}
    # SQLite drivers use a static/singleton pool that rejects sizing arguments
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_async_engine(
    settings.database_url,
    **_engine_options(settings.database_url)
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def create_worker_session_maker() -> async_sessionmaker:
    """
    Session factory for Celery tasks.

    Each task runs on its own event loop, so pooled connections cannot be
    shared between tasks; NullPool opens and closes one per session.
    """
    worker_engine = create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        poolclass=NullPool
    )
    return async_sessionmaker(worker_engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session"""
    async with async_session_maker() as session:
        yield session


def get_session_factory() -> async_sessionmaker:
    """FastAPI dependency for endpoints that open their own sessions"""
    return async_session_maker
