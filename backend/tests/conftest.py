"""
HiddenHeu Backend — Test Configuration (conftest.py)
======================================================

Shared pytest fixtures.

Fixture Hierarchy (all function-scoped):
    ├── store:                fresh seeded MemStorage
    ├── empty_store:          MemStorage without sample data
    ├── sessions:             fresh SessionManager
    ├── fake_provider:        TranslationProvider recording its calls
    ├── translation_service:  TranslationService over fake_provider
    ├── app:                  create_app() with the above injected
    ├── test_client:          HTTPX AsyncClient bound to `app`
    └── register_user:        helper that signs up through the API
"""

import os

# Settings are read at import time, so these must be set before any
# hiddenheu import.
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["SEED_SAMPLE_DATA"] = "true"

from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hiddenheu.dependencies import get_sessions, get_storage, get_translation_service
from hiddenheu.main import create_app
from hiddenheu.security import SessionManager
from hiddenheu.services.llm_base import TranslationProvider
from hiddenheu.services.translation_service import TranslationService
from hiddenheu.storage import MemStorage


class FakeTranslationProvider(TranslationProvider):
    """Deterministic provider: prefixes the text with the language code."""

    def __init__(self):
        self.calls: List[Tuple[str, str, str]] = []
        self.reply = None
        self.state = "available"

    @property
    def status(self) -> str:
        return self.state

    async def translate(self, text: str, language_name: str, language_code: str) -> str:
        self.calls.append((text, language_name, language_code))
        if self.reply is not None:
            return self.reply
        return f"[{language_code}] {text}"

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def store():
    return MemStorage(seed=True)


@pytest.fixture
def empty_store():
    return MemStorage(seed=False)


@pytest.fixture
def sessions():
    return SessionManager(ttl_seconds=3600)


@pytest.fixture
def fake_provider():
    return FakeTranslationProvider()


@pytest.fixture
def translation_service(fake_provider):
    return TranslationService(fake_provider, cache_size=4)


@pytest.fixture
def app(store, sessions, translation_service):
    application = create_app()
    application.dependency_overrides[get_storage] = lambda: store
    application.dependency_overrides[get_sessions] = lambda: sessions
    application.dependency_overrides[get_translation_service] = lambda: translation_service
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _register(client: AsyncClient, username: str = "alice", email: str = None, password: str = "secret123"):
    return await client.post(
        "/api/auth/register",
        json={
            "username": username,
            "password": password,
            "email": email or f"{username.lower()}@mail.com",
        },
    )


@pytest.fixture
def register_user():
    """
    Registers through the API; `await register_user(client, "alice")`.

    Takes the client explicitly so tests can sign up several independent clients.
    """
    return _register
