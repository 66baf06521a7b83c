"""Shared fixtures: in-memory database, local storage and an API client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


@pytest_asyncio.fixture
async def db_engine():
    """SQLite engine with the full schema and foreign keys enforced."""
    from app.core.database import Base
    from app import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    from app.core.storage import LocalStorage

    return LocalStorage(
        root=str(tmp_path),
        bucket="content",
        public_base_url="http://testserver/media"
    )


@pytest_asyncio.fixture
async def content_item(db_session):
    """A ready article with extracted text."""
    from app.models.content_item import ContentItem

    item = ContentItem(
        title="Ten Ways to Grow a Newsletter",
        content_type="article",
        status="ready",
        url="https://blog.example.com/grow",
        content="Consistency beats volume. Write for one reader. Ask for replies.",
        description="Practical tips for newsletter growth"
    )
    db_session.add(item)
    await db_session.commit()
    await db_session.refresh(item)
    return item


@pytest_asyncio.fixture
async def client(session_factory, storage):
    """API client bound to the test database and storage."""
    from app.main import app
    from app.core.database import get_db, get_session_factory
    from app.core.storage import get_storage

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()
