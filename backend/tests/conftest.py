"""Root conftest — shared test configuration.

Invariants:
    - Environment defaults are set before app.main is imported (settings are cached)
    - Every test gets a fresh in-memory SQLite database
    - FakeAIClient stands in for AIServiceClient at the dependency boundary

Design Decisions:
    - Rate limit raised far above what a test run sends: the limiter is process-wide,
      its own behaviour is covered on a dedicated app in test_middleware.py
    - bcrypt cost 4 (the minimum): hashing speed is not under test
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "100000")
os.environ.setdefault("RAG_ENABLED", "false")
os.environ.setdefault("AI_PREDICT_URL", "http://ai.test/predict")
os.environ.setdefault("AI_CHAT_URL", "http://ai.test/chat")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.config import get_settings
from app.db.base import Base
import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.services.education_service import EducationService, load_disease_catalog


class FakeAIClient:
    """Records calls and replays canned payloads or errors."""

    def __init__(self):
        self.predict_payload: dict = {
            "success": True,
            "prediction": {"condition": "Atopic Dermatitis", "confidence": 0.87},
            "metadata": {"model_version": "test-1"},
        }
        self.chat_payload: dict = {
            "success": True,
            "answer": "Moisturize twice daily.",
            "sources": ["aad.org"],
        }
        self.error: Exception | None = None
        self.healthy = True
        self.predict_calls: list[dict] = []
        self.chat_calls: list[dict] = []

    async def predict(self, image, filename, content_type, consent_id):
        self.predict_calls.append({
            "image": image,
            "filename": filename,
            "content_type": content_type,
            "consent_id": consent_id,
        })
        if self.error:
            raise self.error
        return self.predict_payload

    async def chat(self, disease, question, consent_id=None):
        self.chat_calls.append({
            "disease": disease, "question": question, "consent_id": consent_id,
        })
        if self.error:
            raise self.error
        return self.chat_payload

    async def health_check(self):
        return self.healthy

    async def close(self):
        pass


@pytest.fixture
def fake_ai():
    return FakeAIClient()


@pytest.fixture
def education():
    return EducationService(load_disease_catalog(get_settings().diseases_path))


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
