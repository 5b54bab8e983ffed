"""Invoice creation, payment marking and reference-chain resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import Invoice, PaymentStatus, Quotation, ServiceRequest
from boomav.schemas.invoice import InvoiceCreate
from boomav.services import money, quotation_service

logger = logging.getLogger(__name__)

LIST_LIMIT: Final = 200


@dataclass(slots=True)
class InvoiceContext:
    """Records reached by walking Invoice -> Quotation -> ServiceRequest."""

    quotation: Quotation | None = None
    request: ServiceRequest | None = None

    @property
    def client_name(self) -> str | None:
        if self.request is not None and self.request.full_name:
            return self.request.full_name
        return None

    @property
    def client_email(self) -> str | None:
        return self.request.email if self.request is not None else None


async def create_invoice(session: AsyncSession, *, payload: InvoiceCreate) -> Invoice:
    """Persist an invoice with ``payment_status`` pending.

    The amount is taken as supplied and is not checked against the quotation.
    """

    missing: list[str] = []
    if not payload.quotation_id:
        missing.append("quotationId")
    if payload.amount is None:
        missing.append("amount")
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    invoice = Invoice(
        quotation_id=payload.quotation_id,
        amount=money.to_money(payload.amount),
        due_date=payload.due_date,
        payment_method=payload.payment_method,
        payment_status=PaymentStatus.PENDING,
    )
    session.add(invoice)
    await session.commit()
    await session.refresh(invoice)
    return invoice


async def list_invoices(
    session: AsyncSession, *, limit: int = LIST_LIMIT
) -> list[Invoice]:
    stmt = (
        select(Invoice)
        .order_by(Invoice.created_at.desc())
        .limit(min(limit, LIST_LIMIT))
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_invoice(session: AsyncSession, invoice_id: str | None) -> Invoice | None:
    if not invoice_id:
        return None
    return await session.get(Invoice, invoice_id)


async def resolve_context(session: AsyncSession, invoice: Invoice) -> InvoiceContext:
    """Walk the soft references behind an invoice.

    Any missing link is logged and leaves the rest of the context empty.
    """

    quotation = await quotation_service.get_quotation(session, invoice.quotation_id)
    if quotation is None:
        logger.warning(
            "Invoice %s references missing quotation %s",
            invoice.id,
            invoice.quotation_id,
        )
        return InvoiceContext()
    request = await quotation_service.resolve_request(session, quotation)
    return InvoiceContext(quotation=quotation, request=request)


async def mark_paid(
    session: AsyncSession,
    *,
    invoice_id: str,
    payment_method: str,
    payment_reference: str | None = None,
) -> Invoice | None:
    """Move an invoice from pending to paid.

    Returns the invoice when this call performed the transition, or None when
    the invoice does not exist or was already paid.
    """

    invoice = await get_invoice(session, invoice_id)
    if invoice is None:
        logger.warning("Payment received for unknown invoice %s", invoice_id)
        return None
    if invoice.payment_status == PaymentStatus.PAID:
        logger.info("Invoice %s already paid; ignoring duplicate payment", invoice_id)
        return None

    invoice.payment_status = PaymentStatus.PAID
    invoice.payment_method = payment_method
    invoice.payment_reference = payment_reference
    invoice.paid_at = datetime.now(UTC)
    await session.commit()
    await session.refresh(invoice)
    return invoice
