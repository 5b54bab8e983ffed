"""Catalog seeding script."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from boomav.db.session import get_sessionmaker
from boomav.models import Service
from scripts.seed_services import CATALOG, seed_services


@pytest.mark.asyncio
async def test_seed_is_repeatable(reset_database, db_url: str) -> None:
    assert await seed_services() == len(CATALOG)
    assert await seed_services() == 0

    async with get_sessionmaker(db_url)() as session:
        count = await session.scalar(select(func.count()).select_from(Service))
    assert count == len(CATALOG)
