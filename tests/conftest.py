"""
Shared test fixtures for the store rating test suite.

Each test gets its own in-memory SQLite database (aiosqlite + AsyncSession).
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = ""
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
# CORS fix (JSON format)
os.environ["CORS_ORIGINS"] = '["*"]'

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storerate.api.deps import get_db
from storerate.core.security import create_access_token, get_password_hash
from storerate.db.base import Base
from storerate.db.session import enable_sqlite_foreign_keys
from storerate.main import app
from storerate.models.store import Store
from storerate.models.user import User

PASSWORD = "Secret@123"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app and the test database."""

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ── Data helpers ────────────────────────────────────────────────────
async def make_user(
    db: AsyncSession,
    email: str,
    role: str = "user",
    name: str = "Regular Platform Test User",
    password: str = PASSWORD,
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_store(
    db: AsyncSession,
    email: str,
    name: str = "Corner Street Grocery Store",
    address: str | None = "12 Market Road, Springfield",
    owner_id: int | None = None,
) -> Store:
    store = Store(name=name, email=email, address=address, owner_id=owner_id)
    db.add(store)
    await db.commit()
    await db.refresh(store)
    return store


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await make_user(
        db_session, "admin@example.com", role="admin", name="Platform Administrator Account"
    )


@pytest.fixture
async def customer(db_session: AsyncSession) -> User:
    return await make_user(db_session, "customer@example.com")


@pytest.fixture
async def owner(db_session: AsyncSession) -> User:
    return await make_user(
        db_session, "owner@example.com", role="owner", name="Corner Store Owner Person"
    )


@pytest.fixture
async def store(db_session: AsyncSession, owner: User) -> Store:
    return await make_store(db_session, "corner@example.com", owner_id=owner.id)
