"""Public event operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import Event, EventCategory, EventStatus
from boomav.schemas.content import EventCreate, EventUpdate
from boomav.services.slugs import slugify

LIST_LIMIT: Final = 200


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def derive_status(
    event_date: datetime,
    end_date: datetime | None,
    *,
    current: EventStatus | None = None,
    now: datetime | None = None,
) -> EventStatus:
    """Work out an event's status from its dates.

    Cancelled events stay cancelled. Without an end date the event is treated
    as finishing when it starts.
    """

    if current == EventStatus.CANCELLED:
        return EventStatus.CANCELLED
    now = now or datetime.now(UTC)
    start = _aware(event_date)
    end = _aware(end_date) if end_date is not None else start
    if now < start:
        return EventStatus.UPCOMING
    if now <= end:
        return EventStatus.ONGOING
    return EventStatus.COMPLETED


async def _commit_unique(session: AsyncSession, event: Event) -> Event:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValueError("An event with this slug already exists") from exc
    await session.refresh(event)
    return event


async def list_events(
    session: AsyncSession,
    *,
    published: bool | None = None,
    status: EventStatus | None = None,
    featured: bool | None = None,
    category: EventCategory | None = None,
    limit: int = LIST_LIMIT,
) -> list[Event]:
    stmt: Select[tuple[Event]] = select(Event)
    if published is not None:
        stmt = stmt.where(Event.published.is_(published))
    if status is not None:
        stmt = stmt.where(Event.status == status)
    if featured is not None:
        stmt = stmt.where(Event.featured.is_(featured))
    if category is not None:
        stmt = stmt.where(Event.category == category)
    stmt = stmt.order_by(Event.event_date.asc()).limit(min(limit, LIST_LIMIT))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_event(session: AsyncSession, event_id: str) -> Event | None:
    return await session.get(Event, event_id)


async def get_event_by_slug(session: AsyncSession, slug: str) -> Event | None:
    result = await session.execute(select(Event).where(Event.slug == slug))
    return result.scalar_one_or_none()


async def create_event(session: AsyncSession, *, payload: EventCreate) -> Event:
    data = payload.model_dump()
    data["slug"] = slugify(data.get("slug") or payload.title)
    if not data["slug"]:
        raise ValueError("Unable to derive a slug from the title")
    data["status"] = derive_status(
        payload.event_date, payload.end_date, current=payload.status
    )
    event = Event(**data)
    session.add(event)
    return await _commit_unique(session, event)


async def update_event(
    session: AsyncSession, *, event: Event, payload: EventUpdate
) -> Event:
    # end_date is the only nullable field; null elsewhere means "leave as is"
    data = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key == "end_date"
    }
    if data.get("slug"):
        data["slug"] = slugify(data["slug"])
    elif "title" in data and data["title"] != event.title:
        data["slug"] = slugify(data["title"])
    else:
        data.pop("slug", None)
    requested_status = data.pop("status", None) or event.status
    for key, value in data.items():
        setattr(event, key, value)
    event.status = derive_status(
        event.event_date, event.end_date, current=requested_status
    )
    return await _commit_unique(session, event)


async def delete_event(session: AsyncSession, *, event: Event) -> None:
    await session.delete(event)
    await session.commit()
