"""Service request endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestCreated,
    ServiceRequestList,
    ServiceRequestRead,
)
from boomav.services import notification_service, request_service
from boomav.services.notification_service import NotificationDispatcher

router = APIRouter(prefix="/requests")


@router.post(
    "",
    response_model=ServiceRequestCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a service request",
)
async def create_request(
    payload: ServiceRequestCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    dispatcher: Annotated[
        NotificationDispatcher, Depends(deps.get_notification_dispatcher)
    ],
) -> ServiceRequestCreated:
    try:
        request = await request_service.create_request(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    notification_service.notify_request_received(request, dispatcher)
    return ServiceRequestCreated(
        request_id=request.id,
        message="Service request submitted successfully",
    )


@router.get("", response_model=ServiceRequestList, summary="List service requests")
async def list_requests(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ServiceRequestList:
    requests = await request_service.list_requests(session)
    return ServiceRequestList(
        requests=[ServiceRequestRead.model_validate(item) for item in requests]
    )
