"""
Wildtrail Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite) with
       all content tables created from the ORM metadata.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        In-memory async engine, schema created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       One AsyncSession for repository tests
    ├── mock_db_session:  AsyncMock session for storage-failure paths
    ├── test_client:      HTTPX AsyncClient over a fresh app instance
    └── *_payload:        Valid create payloads per collection
"""

import os

# Must run before any wildtrail import: settings and the engine read it once
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REORDER_STRICT_BOUNDARIES"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wildtrail.database import Base, enable_sqlite_foreign_keys, get_db_session
import wildtrail.models  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with every table created.

    StaticPool keeps a single connection, so all sessions in one test see
    the same database. Foreign keys are enforced so cascades behave as on
    PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
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
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StorageError):
            await repository.list(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Async HTTP client talking to a fresh app instance.

    get_db_session is overridden to use the test database with the same
    commit-on-success / rollback-on-error boundary as production.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from wildtrail.main import create_app

    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Sample Payloads
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def tip_payload():
    def build(title="Pack light for day hikes", **overrides):
        payload = {
            "title": title,
            "description": "Bring water, a layer and a map. Leave the rest at home.",
            "category": "hiking",
            "parent_category": "trails",
            "difficulty_level": "beginner",
            "seasonality": "all",
            "estimated_time": "5 min read",
            "image": "https://cdn.wildtrail.test/tips/pack-light.jpg",
            "icon_type": "backpack",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def destination_payload():
    def build(title="Torres del Paine", **overrides):
        payload = {
            "title": title,
            "image": "https://cdn.wildtrail.test/destinations/torres.jpg",
            "description": "Granite towers and glacial lakes.",
            "country": "Chile",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def slider_payload():
    def build(title="Into the Dolomites", **overrides):
        payload = {
            "title": title,
            "description": "Via ferratas, rifugios and alpine lakes.",
            "background_image": "https://cdn.wildtrail.test/sliders/dolomites.jpg",
            "youtube_url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "cta_text": "Explore",
            "cta_link": "/destinations/dolomites",
            "year": "2024",
            "rating": "4.8",
            "tags": ["alpine", "hiking"],
            "subtitles": ["Italy", "Summer"],
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def menu_payload():
    def build(label="Trails", category="hiking", **overrides):
        payload = {
            "category": category,
            "label": label,
            "path": f"/{category}/{label.lower()}",
            "has_mega_menu": False,
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def mega_category_payload():
    def build(header_menu_item_id, title="Gear", **overrides):
        payload = {"header_menu_item_id": header_menu_item_id, "title": title}
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def mega_item_payload():
    def build(mega_menu_category_id, label="Tents", **overrides):
        payload = {
            "mega_menu_category_id": mega_menu_category_id,
            "label": label,
            "path": f"/gear/{label.lower()}",
            "featured_item": False,
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def sidebar_payload():
    def build(title="Permit season", category="hiking", **overrides):
        payload = {
            "category": category,
            "title": title,
            "content": "Most national parks open permit lotteries in March.",
            "image_url": "https://cdn.wildtrail.test/sidebar/permits.jpg",
            "link_url": "/guides/permits",
            "link_text": "Read the guide",
        }
        payload.update(overrides)
        return payload

    return build
