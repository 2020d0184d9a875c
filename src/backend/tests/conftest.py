"""
Pytest configuration and fixtures for testing.

Provides:
- Database fixtures (in-memory SQLite through aiosqlite, one shared connection)
- An HTTP client bound to the app with the session dependencies overridden
- Staff and portal-client identities

Usage:
    pytest src/backend/tests -v
"""

import os

# Settings are read at import time; configure them before any app import.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECURITY_SECRET_KEY"] = "test-secret-key-for-signing-tokens-0123456789"
os.environ["API_DEBUG"] = "false"

from typing import AsyncGenerator, Dict  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

import db.models  # noqa: E402,F401
from app import create_app  # noqa: E402
from core.config import settings  # noqa: E402
from core.database import get_session, get_session_factory  # noqa: E402
from core.rate_limit import limiter  # noqa: E402
from core.security import create_staff_token  # noqa: E402
from db.models import Client, User  # noqa: E402
from tests.factories import ClientFactory, UserFactory  # noqa: E402

CLIENT_PASSWORD = "portal-pass"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test.

    StaticPool keeps every session on the same connection, otherwise each
    checkout would see its own empty in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Application Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def disable_rate_limits():
    limiter.enabled = False
    yield
    limiter.enabled = settings.rate_limit.enabled


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, with request sessions from the test engine."""
    app = create_app()

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                if session.in_transaction():
                    await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client

    app.dependency_overrides.clear()


# ============================================================================
# Identity Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def staff_user(db_session: AsyncSession) -> User:
    """An active staff user."""
    user = UserFactory.create()
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def staff_headers(staff_user: User) -> Dict[str, str]:
    token = create_staff_token(staff_user.id, staff_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def portal_client(db_session: AsyncSession) -> Client:
    """A portal client whose password is CLIENT_PASSWORD."""
    portal = ClientFactory.create(password=CLIENT_PASSWORD)
    db_session.add(portal)
    await db_session.commit()
    await db_session.refresh(portal)
    return portal


@pytest.fixture
def login_as(client: AsyncClient):
    """Sign a portal client in; the session cookie stays on ``client``."""

    async def _login(email: str, password: str = CLIENT_PASSWORD) -> str:
        response = await client.post(
            "/api/client/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.cookies.get(settings.security.client_cookie_name)
        assert token
        client.cookies.clear()
        client.cookies.set(settings.security.client_cookie_name, token)
        return token

    return _login
