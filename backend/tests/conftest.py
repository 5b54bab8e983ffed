"""Test fixtures for the Boom Audio Visuals backend."""
from __future__ import annotations

import os
import threading
from collections.abc import AsyncIterator
from dataclasses import dataclass

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("APP_ENV", "test")

from boomav.api import deps
from boomav.core.config import get_settings
from boomav.db.base import Base
from boomav.db.session import dispose_engine
from boomav.main import app
from boomav.services.notification_service import NotificationDispatcher

ADMIN_EMAIL = "admin@boomav.test"


@dataclass(slots=True, frozen=True)
class SentEmail:
    recipient: str
    subject: str
    html_body: str


class RecordingTransport:
    """Mail transport that keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []
        self._lock = threading.Lock()

    def send(self, recipient: str, subject: str, html_body: str) -> bool:
        with self._lock:
            self.sent.append(SentEmail(recipient, subject, html_body))
        return True

    def recipients(self) -> list[str]:
        return [message.recipient for message in self.sent]


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest.fixture()
def mail_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def dispatcher(mail_transport: RecordingTransport) -> NotificationDispatcher:
    return NotificationDispatcher(mail_transport, admin_email=ADMIN_EMAIL)


@pytest_asyncio.fixture()
async def client(
    reset_database: None, dispatcher: NotificationDispatcher
) -> AsyncIterator[AsyncClient]:
    """Yield an API client whose notifications go to the recording transport."""
    app.dependency_overrides[deps.get_notification_dispatcher] = lambda: dispatcher
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
        await dispatcher.drain()
    finally:
        app.dependency_overrides.pop(deps.get_notification_dispatcher, None)
