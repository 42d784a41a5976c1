"""
Pytest configuration and shared fixtures.

Environment is pinned before any franchisenexus import so the global
settings object sees an in-memory database and a fixed token secret.
"""
import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-for-franchisenexus-tests"
os.environ["APPLICATION_STATUS_ALLOWLIST"] = ""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from franchisenexus.db.models import Base, UserModel
from franchisenexus.domain.roles import Caller, Role
from franchisenexus.utils.password_hash import hash_password


@pytest_asyncio.fixture
async def test_db():
    """Create an in-memory test database and return its session factory"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    yield async_session_maker

    await engine.dispose()


@pytest.fixture
def client():
    """
    TestClient with the app lifespan running.

    Each client gets a fresh in-memory database (init_db builds a new engine).
    """
    from franchisenexus.main import app

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def make_user(session, email: str, role: Role, password: str = "Password123!") -> UserModel:
    """Insert a user directly and return it"""
    user = UserModel(
        first_name="Test",
        last_name=role.label,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


def caller_for(user: UserModel) -> Caller:
    return Caller(user_id=user.id, email=user.email, role=user.role)
