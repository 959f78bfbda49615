"""Route test fixtures — FastAPI test client over the in-memory database.

Invariants:
    - get_db, get_ai_client and get_education_service are overridden per test
    - db_manager patched so the readiness probe sees the test engine
    - Overrides are cleared after every test

Design Decisions:
    - signed_up fixture goes through POST /api/auth/signup: tokens are real HS256 tokens,
      the auth dependency is exercised rather than bypassed
"""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient

import app.infrastructure.database as db_module
from app.infrastructure.ai_client import get_ai_client
from app.infrastructure.database import DatabaseSessionManager, get_db
from app.main import app
from app.services.education_service import get_education_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def client(test_engine, test_session_factory, fake_ai, education):
    """FastAPI test client with DB and AI dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    app.dependency_overrides[get_education_service] = lambda: education

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _signup(client: AsyncClient, email: str) -> dict:
    res = await client.post(
        "/api/auth/signup",
        json={"email": email, "password": "correct-horse-1"},
    )
    assert res.status_code == 201, res.text
    data = res.json()["data"]
    return {
        "user": data["user"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
async def signed_up(client):
    """A registered user: {user, token, headers}."""
    return await _signup(client, "patient@example.com")


@pytest.fixture
async def other_user(client):
    return await _signup(client, "someone-else@example.com")


@pytest.fixture
def consent_id():
    return str(uuid.uuid4())


@pytest.fixture
def png_upload():
    return {"image": ("lesion.png", PNG_BYTES, "image/png")}
