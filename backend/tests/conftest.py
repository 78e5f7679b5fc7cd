"""
Transaction Ledger Backend — Test Configuration (conftest.py)
==============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches the database gets a fresh SQLite file
       database (aiosqlite) with both tables created, and drops them
       afterwards. HTTP tests go through httpx.AsyncClient + ASGITransport,
       so no server is started.

Fixture Hierarchy (all function-scoped):
    ├── database:        tables created / dropped, engine disposed
    │   ├── db_session:  an AsyncSession for service and store tests
    │   ├── client:      AsyncClient carrying a valid session cookie
    │   └── anon_client: AsyncClient without any cookie
    ├── auth_token:      signed JWT for the `id` claim "user-1"
    └── transaction_payload / type_payload: valid request bodies
"""

import os
import tempfile

# Settings are read at import time; point them at test values BEFORE any
# txledger import.
_db_dir = tempfile.mkdtemp(prefix="txledger_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-not-real"
os.environ["FRONTEND_ORIGIN"] = "http://frontend.test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from txledger.auth import create_access_token
from txledger.config import settings
from txledger.database import Base, async_session_factory, create_all, engine


@pytest_asyncio.fixture
async def database():
    await create_all()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest.fixture
def auth_token():
    return create_access_token("user-1")


@pytest.fixture
def auth_cookie_header(auth_token):
    return {"Cookie": f"{settings.auth_cookie_name}={auth_token}"}


@pytest_asyncio.fixture
async def client(database, auth_cookie_header):
    from txledger.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_cookie_header
    ) as c:
        yield c


@pytest_asyncio.fixture
async def anon_client(database):
    from txledger.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def type_payload():
    return {"name": "BCA", "type1": "Debit", "type2": "Credit"}


@pytest.fixture
def transaction_payload():
    """A complete, valid create body; tests fill in transaction_type."""
    return {
        "mid": "000071000123",
        "tid": "71A00123",
        "batch": "B-0042",
        "amount": 1500000,
        "net_amount": 1488750,
        "mdr": 11250,
        "status": "settled",
        "date": "03/15/2024",
        "difference": 0,
    }


@pytest_asyncio.fixture
async def bca_type(client, type_payload):
    """A stored transaction type, as returned by POST /transactions-type."""
    response = await client.post("/transactions-type", json=type_payload)
    assert response.status_code == 201
    return response.json()["data"]
