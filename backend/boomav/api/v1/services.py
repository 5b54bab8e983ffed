"""Service catalog endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.models import Service
from boomav.schemas.content import (
    ServiceCreate,
    ServiceEnvelope,
    ServiceList,
    ServiceRead,
    ServiceUpdate,
)
from boomav.services import service_catalog_service

router = APIRouter(prefix="/services")


async def _get_service_or_404(session: AsyncSession, service_key: str) -> Service:
    service = await service_catalog_service.get_service(session, service_key=service_key)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.get("", response_model=ServiceList, summary="List active services")
async def list_services(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ServiceList:
    services = await service_catalog_service.list_services(session)
    return ServiceList(services=[ServiceRead.model_validate(item) for item in services])


@router.post(
    "",
    response_model=ServiceEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a catalog service",
)
async def create_service(
    payload: ServiceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ServiceEnvelope:
    try:
        service = await service_catalog_service.create_service(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ServiceEnvelope(service=ServiceRead.model_validate(service))


@router.put("/{service_key}", response_model=ServiceEnvelope, summary="Update a catalog service")
async def update_service(
    service_key: str,
    payload: ServiceUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ServiceEnvelope:
    service = await _get_service_or_404(session, service_key)
    service = await service_catalog_service.update_service(
        session, service=service, payload=payload
    )
    return ServiceEnvelope(service=ServiceRead.model_validate(service))


@router.delete("/{service_key}", summary="Deactivate a catalog service")
async def delete_service(
    service_key: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, bool | str]:
    service = await _get_service_or_404(session, service_key)
    await service_catalog_service.deactivate_service(session, service=service)
    return {"success": True, "message": "Service deleted"}
