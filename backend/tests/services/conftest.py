"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - HTTP requests go through the real get_db: db_manager is swapped for a
      DatabaseSessionManager bound to the test engine, so session-level error
      mapping matches production
    - make_user inserts committed users; friends= links both directions

Design Decisions:
    - SQLite in-memory with StaticPool: every session sees the same connection,
      so rows committed by one request are visible to the next
    - Actor identity passed per call via as_actor(), mirroring the upstream gateway header
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from tandem.db.base import Base
import tandem.infrastructure.database as database
from tandem.infrastructure.database import DatabaseSessionManager
from tandem.models.friend_link import FriendLink
from tandem.models.user import User
from tandem.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_db_manager(test_engine, monkeypatch):
    """Production session manager bound to the test engine."""
    manager = DatabaseSessionManager(engine=test_engine)
    monkeypatch.setattr(database, "db_manager", manager)
    return manager


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client over the production get_db dependency."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def as_actor():
    """Headers identifying the acting user."""
    def _headers(user) -> dict:
        return {"X-User-Id": str(user.id)}
    return _headers


@pytest.fixture
def make_user(test_db):
    """Insert a user. friends= adds symmetric friend edges to existing users."""
    counter = {"n": 0}

    async def _make(
        name: str | None = None,
        *,
        onboarded: bool = True,
        native: str = "english",
        learning: str = "spanish",
        friends: tuple = (),
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            full_name=name or f"User {n}",
            email=f"user{n}@example.com",
            bio=f"Learner number {n}",
            profile_pic=f"https://avatar.example.com/{n}.png",
            native_language=native,
            learning_language=learning,
            location="Lisbon",
            is_onboarded=onboarded,
        )
        test_db.add(user)
        await test_db.flush()
        for friend in friends:
            test_db.add(FriendLink(user_id=user.id, friend_id=friend.id))
            test_db.add(FriendLink(user_id=friend.id, friend_id=user.id))
        await test_db.commit()
        await test_db.refresh(user)
        return user

    return _make
