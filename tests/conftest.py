"""Shared pytest fixtures for backend tests."""

import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from typing import AsyncGenerator
from uuid import uuid4

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from notevault.database import Base, get_db
from notevault.main import app
from notevault.models import Folder, Note, User
from notevault.services.auth_service import create_access_token


def get_test_password_hash(password: str) -> str:
    """Hash a password for fixture users with bcrypt directly."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


@pytest_asyncio.fixture
async def engine(tmp_path):
    """
    Create a test database engine backed by a temporary SQLite file.

    A file (rather than :memory:) lets every request open its own
    connection, so concurrent requests really run on separate sessions.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data directly."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with a per-request database session."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    user = User(
        id=uuid4(),
        email="test@example.com",
        password_hash=get_test_password_hash("TestPassword123!"),
        display_name="Test User",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user_2(db_session: AsyncSession) -> User:
    """Create a second test user."""
    user = User(
        id=uuid4(),
        email="test2@example.com",
        password_hash=get_test_password_hash("TestPassword456!"),
        display_name="Test User 2",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authorization headers."""
    token = create_access_token(data={"sub": str(test_user.id), "email": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_2(test_user_2: User) -> dict:
    """Create authorization headers for second user."""
    token = create_access_token(data={"sub": str(test_user_2.id), "email": test_user_2.email})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_folder(db_session: AsyncSession, test_user: User) -> Folder:
    """Create a test folder."""
    folder = Folder(id=uuid4(), user_id=test_user.id, name="Work", icon="💼")
    db_session.add(folder)
    await db_session.commit()
    await db_session.refresh(folder)
    return folder


@pytest_asyncio.fixture
async def test_note(db_session: AsyncSession, test_user: User) -> Note:
    """Create a test note."""
    note = Note(
        id=uuid4(),
        user_id=test_user.id,
        title="Test Note",
        content="<p>Test note content</p>",
        tags=[],
    )
    db_session.add(note)
    await db_session.commit()
    await db_session.refresh(note)
    return note
