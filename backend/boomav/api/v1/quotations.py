"""Quotation endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.schemas.quotation import (
    QuotationCreate,
    QuotationCreated,
    QuotationEnvelope,
    QuotationList,
    QuotationRead,
)
from boomav.services import notification_service, pdf_service, quotation_service
from boomav.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotations")


@router.post(
    "",
    response_model=QuotationCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quotation",
)
async def create_quotation(
    payload: QuotationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    dispatcher: Annotated[
        NotificationDispatcher, Depends(deps.get_notification_dispatcher)
    ],
) -> QuotationCreated:
    try:
        quotation = await quotation_service.create_quotation(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if quotation.request_id:
        request = await quotation_service.resolve_request(session, quotation)
        if request is None:
            logger.info("Skipping quotation email for %s", quotation.id)
        else:
            notification_service.notify_quotation_created(quotation, request, dispatcher)
    else:
        notification_service.notify_quotation_created(quotation, None, dispatcher)

    return QuotationCreated(
        quotation_id=quotation.id,
        subtotal=quotation.subtotal,
        tax=quotation.tax,
        total=quotation.total,
    )


@router.get("", response_model=QuotationList, summary="List quotations")
async def list_quotations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> QuotationList:
    quotations = await quotation_service.list_quotations(session)
    return QuotationList(
        quotations=[QuotationRead.model_validate(item) for item in quotations]
    )


@router.get("/{quotation_id}", response_model=QuotationEnvelope, summary="Get a quotation")
async def get_quotation(
    quotation_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> QuotationEnvelope:
    quotation = await quotation_service.get_quotation(session, quotation_id)
    if quotation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quotation not found")
    return QuotationEnvelope(quotation=QuotationRead.model_validate(quotation))


@router.get("/{quotation_id}/pdf", summary="Download a quotation PDF")
async def download_quotation_pdf(
    quotation_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> StreamingResponse:
    quotation = await quotation_service.get_quotation(session, quotation_id)
    if quotation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quotation not found")
    document = await asyncio.to_thread(pdf_service.render_quotation_pdf, quotation)
    return StreamingResponse(
        document.iter_chunks(),
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
