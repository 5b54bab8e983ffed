"""Async engine and session factories, cached per database URL."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from boomav.core.config import get_settings

SQLITE_BUSY_TIMEOUT_SECONDS = 30

_factories: dict[str, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def engine_options(database_url: str) -> dict[str, Any]:
    """Driver-specific ``create_async_engine`` keyword arguments."""
    if make_url(database_url).get_backend_name() == "sqlite":
        # concurrent writers wait on the file lock instead of failing
        return {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT_SECONDS}}
    # hosted Postgres closes idle connections
    return {"pool_pre_ping": True, "pool_recycle": 1800}


def _url(database_url: str | None) -> str:
    return database_url or get_settings().database_url


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    url = _url(database_url)
    cached = _factories.get(url)
    if cached is None:
        engine = create_async_engine(url, **engine_options(url))
        cached = (engine, async_sessionmaker(engine, expire_on_commit=False))
        _factories[url] = cached
    return cached[1]


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_sessionmaker()() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections so the next call builds a fresh engine."""
    cached = _factories.pop(_url(database_url), None)
    if cached is not None:
        await cached[0].dispose()
