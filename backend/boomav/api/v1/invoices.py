"""Invoice endpoints."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.schemas.invoice import InvoiceCreate, InvoiceCreated, InvoiceList, InvoiceRead
from boomav.services import invoice_service, notification_service, pdf_service
from boomav.services.notification_service import NotificationDispatcher

router = APIRouter(prefix="/invoices")


@router.post(
    "",
    response_model=InvoiceCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
)
async def create_invoice(
    payload: InvoiceCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    dispatcher: Annotated[
        NotificationDispatcher, Depends(deps.get_notification_dispatcher)
    ],
) -> InvoiceCreated:
    try:
        invoice = await invoice_service.create_invoice(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    context = await invoice_service.resolve_context(session, invoice)
    notification_service.notify_invoice_created(invoice, context.request, dispatcher)
    return InvoiceCreated(invoice_id=invoice.id, message="Invoice created successfully")


@router.get("", response_model=InvoiceList, summary="List invoices")
async def list_invoices(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> InvoiceList:
    invoices = await invoice_service.list_invoices(session)
    return InvoiceList(invoices=[InvoiceRead.model_validate(item) for item in invoices])


@router.get("/{invoice_id}/pdf", summary="Download an invoice PDF")
async def download_invoice_pdf(
    invoice_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> StreamingResponse:
    invoice = await invoice_service.get_invoice(session, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    context = await invoice_service.resolve_context(session, invoice)
    document = await asyncio.to_thread(pdf_service.render_invoice_pdf, invoice, context)
    return StreamingResponse(
        document.iter_chunks(),
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
