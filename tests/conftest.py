"""Pytest configuration and fixtures for collab-sync.

Handlers run against in-memory fakes of the document store and blob
storage (tests/fakes.py); HTTP tests drive collab_sync.main.create_app
through httpx's ASGI transport with an injected runtime.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from collab_sync.api.v1.dependencies import build_event_router
from collab_sync.application.dispatch import EventRouter
from collab_sync.core.config import get_settings
from collab_sync.core.runtime import HandlerRuntime
from collab_sync.main import create_app
from tests.fakes import FakeStorage, InMemoryFirestore


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep host env and .env files out of settings; reset the cache around each test."""
    for name in (
        "FIREBASE_SERVICE_ACCOUNT_KEY",
        "FIREBASE_SERVICE_ACCOUNT_PATH",
        "STORAGE_BACKEND",
        "STORAGE_BUCKET",
        "TELEMETRY_ENABLED",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryFirestore:
    """Document store with profile u1 ("Ada") and project p1."""
    return InMemoryFirestore({
        "users/u1": {
            "email": "ada@example.com",
            "name": "Ada",
            "picture": "https://cdn.example.com/ada.png",
            "status": "active",
        },
        "projects/p1": {
            "title": "Analytical Engine",
            "images": [],
            "creator": {"uid": "owner", "name": "Charles", "picture": "https://cdn.example.com/c.png"},
        },
    })


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def runtime(store: InMemoryFirestore, storage: FakeStorage) -> HandlerRuntime:
    return HandlerRuntime(firestore=store, storage=storage)


@pytest.fixture
def event_router(runtime: HandlerRuntime) -> EventRouter:
    return build_event_router(runtime)


@pytest.fixture
async def client(runtime: HandlerRuntime) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app (ASGI) with the fake runtime injected."""
    app = create_app(runtime=runtime)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
