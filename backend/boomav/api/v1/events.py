"""Public event endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.models import Event, EventCategory, EventStatus
from boomav.schemas.content import (
    EventCreate,
    EventEnvelope,
    EventList,
    EventRead,
    EventUpdate,
)
from boomav.services import event_service

router = APIRouter(prefix="/events")


async def _get_event_or_404(session: AsyncSession, event_id: str) -> Event:
    event = await event_service.get_event(session, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.get("", response_model=EventList, summary="List events")
async def list_events(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    published: bool | None = Query(default=None),
    status_filter: EventStatus | None = Query(default=None, alias="status"),
    featured: bool | None = Query(default=None),
    category: EventCategory | None = Query(default=None),
    limit: int = Query(default=event_service.LIST_LIMIT, ge=1),
) -> EventList:
    events = await event_service.list_events(
        session,
        published=published,
        status=status_filter,
        featured=featured,
        category=category,
        limit=limit,
    )
    return EventList(events=[EventRead.model_validate(event) for event in events])


@router.get("/{slug}", response_model=EventEnvelope, summary="Read an event")
async def read_event(
    slug: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> EventEnvelope:
    event = await event_service.get_event_by_slug(session, slug)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return EventEnvelope(event=EventRead.model_validate(event))


@router.post(
    "",
    response_model=EventEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
)
async def create_event(
    payload: EventCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> EventEnvelope:
    try:
        event = await event_service.create_event(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return EventEnvelope(
        message="Event created successfully", event=EventRead.model_validate(event)
    )


@router.put("/{event_id}", response_model=EventEnvelope, summary="Update an event")
async def update_event(
    event_id: str,
    payload: EventUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> EventEnvelope:
    event = await _get_event_or_404(session, event_id)
    try:
        event = await event_service.update_event(session, event=event, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return EventEnvelope(
        message="Event updated successfully", event=EventRead.model_validate(event)
    )


@router.delete("/{event_id}", summary="Delete an event")
async def delete_event(
    event_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, bool | str]:
    event = await _get_event_or_404(session, event_id)
    await event_service.delete_event(session, event=event)
    return {"success": True, "message": "Event deleted successfully"}
