"""Service request intake and lookup."""

from __future__ import annotations

from typing import Final

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import ServiceRequest, ServiceRequestStatus
from boomav.schemas.service_request import ServiceRequestCreate

LIST_LIMIT: Final = 200

_REQUIRED_FIELDS: Final = (
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("phone", "phone"),
)


def _missing_fields(payload: ServiceRequestCreate) -> list[str]:
    missing: list[str] = []
    for attr, wire_name in _REQUIRED_FIELDS:
        value = getattr(payload, attr)
        if value is None or not str(value).strip():
            missing.append(wire_name)
    return missing


async def create_request(
    session: AsyncSession, *, payload: ServiceRequestCreate
) -> ServiceRequest:
    """Persist a new request in the ``pending`` state."""

    missing = _missing_fields(payload)
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    data = payload.model_dump()
    request = ServiceRequest(**data, status=ServiceRequestStatus.PENDING)
    session.add(request)
    await session.commit()
    await session.refresh(request)
    return request


async def list_requests(
    session: AsyncSession, *, limit: int = LIST_LIMIT
) -> list[ServiceRequest]:
    stmt = (
        select(ServiceRequest)
        .order_by(ServiceRequest.created_at.desc())
        .limit(min(limit, LIST_LIMIT))
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_request(
    session: AsyncSession, request_id: str | None
) -> ServiceRequest | None:
    if not request_id:
        return None
    return await session.get(ServiceRequest, request_id)
