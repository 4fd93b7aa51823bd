"""
Pytest configuration and fixtures for Campaigns API tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Point the application at an in-memory database BEFORE importing it
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from campaigns_api.database import AsyncSessionLocal, Base, engine  # noqa: E402
from main import app  # noqa: E402


def make_token(tenant_id: str | None, **claims) -> str:
    """Encode a bearer token; the access gate never verifies the signature."""
    if tenant_id is not None:
        claims["tenant_id"] = tenant_id
    return jwt.encode(claims, "test-secret", algorithm="HS256")


def auth_headers_for(tenant_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(tenant_id)}"}


@pytest.fixture(scope="function", autouse=True)
async def setup_test_database():
    """Create a fresh database for each test function"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for service-level tests."""
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict:
    """Bearer headers for tenant 'tenant-a'."""
    return auth_headers_for("tenant-a")


@pytest.fixture
def other_auth_headers() -> dict:
    """Bearer headers for tenant 'tenant-b'."""
    return auth_headers_for("tenant-b")
