"""Operations for the public service catalog."""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import Service
from boomav.schemas.content import ServiceCreate, ServiceUpdate


async def list_services(session: AsyncSession) -> list[Service]:
    stmt: Select[tuple[Service]] = (
        select(Service)
        .where(Service.active.is_(True))
        .order_by(Service.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_service(session: AsyncSession, *, service_key: str) -> Service | None:
    stmt = select(Service).where(Service.service_key == service_key)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_service(session: AsyncSession, *, payload: ServiceCreate) -> Service:
    service = Service(**payload.model_dump())
    session.add(service)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValueError(f"Service '{payload.service_key}' already exists") from exc
    await session.refresh(service)
    return service


async def update_service(
    session: AsyncSession, *, service: Service, payload: ServiceUpdate
) -> Service:
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in {"title", "description", "features", "category", "active"}:
            continue
        setattr(service, key, value)
    await session.commit()
    await session.refresh(service)
    return service


async def deactivate_service(session: AsyncSession, *, service: Service) -> Service:
    """Hide a service from the public catalog; the row is kept."""
    service.active = False
    await session.commit()
    await session.refresh(service)
    return service
