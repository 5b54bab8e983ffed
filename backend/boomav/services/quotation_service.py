"""Quotation creation, lookup and client resolution."""

from __future__ import annotations

import logging
from typing import Any, Final

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import Quotation, QuotationStatus, ServiceRequest
from boomav.schemas.quotation import QuotationCreate
from boomav.services import money, request_service

logger = logging.getLogger(__name__)

LIST_LIMIT: Final = 200


def _serialize_line_items(payload: QuotationCreate) -> list[dict[str, Any]]:
    return [
        {
            "description": item.description,
            "quantity": item.quantity,
            "unitPrice": str(money.to_money(item.unit_price)),
        }
        for item in payload.line_items or []
    ]


async def create_quotation(
    session: AsyncSession, *, payload: QuotationCreate
) -> Quotation:
    """Price and persist a quotation.

    Totals are computed once here and stored; they are never recomputed.
    ``request_id`` is optional and is not checked for existence.
    """

    if not payload.line_items:
        raise ValueError("lineItems must contain at least one item")

    totals = money.compute_totals(payload.line_items, payload.discount)
    quotation = Quotation(
        request_id=payload.request_id or None,
        client_name=payload.client_name,
        client_email=payload.client_email,
        event_date=payload.event_date,
        venue=payload.venue,
        line_items=_serialize_line_items(payload),
        discount=money.to_money(payload.discount),
        notes=payload.notes,
        valid_until=payload.valid_until,
        subtotal=totals.subtotal,
        tax=totals.tax,
        total=totals.total,
        status=QuotationStatus.DRAFT,
    )
    session.add(quotation)
    await session.commit()
    await session.refresh(quotation)
    return quotation


async def list_quotations(
    session: AsyncSession, *, limit: int = LIST_LIMIT
) -> list[Quotation]:
    stmt = (
        select(Quotation)
        .order_by(Quotation.created_at.desc())
        .limit(min(limit, LIST_LIMIT))
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_quotation(
    session: AsyncSession, quotation_id: str | None
) -> Quotation | None:
    if not quotation_id:
        return None
    return await session.get(Quotation, quotation_id)


async def resolve_request(
    session: AsyncSession, quotation: Quotation
) -> ServiceRequest | None:
    """Follow ``quotation.request_id``; a dangling link is logged, not raised."""

    if not quotation.request_id:
        return None
    request = await request_service.get_request(session, quotation.request_id)
    if request is None:
        logger.warning(
            "Quotation %s references missing service request %s",
            quotation.id,
            quotation.request_id,
        )
    return request
