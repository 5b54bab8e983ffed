"""Lifecycle email notifications.

Every notification is built synchronously from the record and then handed to
``NotificationDispatcher``, which sends it on a detached task. Callers never
wait for delivery and never see delivery errors. Delivery is at-most-once:
there is no retry queue and no deduplication.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from decimal import Decimal

from boomav.models import Invoice, Quotation, ServiceRequest
from boomav.services.email_service import MailTransport, render_email
from boomav.services.money import line_total, to_money

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "Valued Client"


class NotificationDispatcher:
    """Fire-and-forget sender backed by a single mail transport."""

    def __init__(self, transport: MailTransport, *, admin_email: str | None = None) -> None:
        self._transport = transport
        self._admin_email = admin_email
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def admin_email(self) -> str | None:
        return self._admin_email

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule_email(
        self, *, recipient: str | None, subject: str, body: str, kind: str
    ) -> asyncio.Task[None] | None:
        """Start delivery on a detached task and return without waiting."""

        if not recipient:
            logger.debug("No recipient for %s email; skipping", kind)
            return None
        task = asyncio.get_running_loop().create_task(
            self._deliver(recipient, subject, body, kind)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, recipient: str, subject: str, body: str, kind: str) -> None:
        try:
            await asyncio.to_thread(self._transport.send, recipient, subject, body)
        except Exception:
            logger.exception("Failed to deliver %s email to %s", kind, recipient)

    async def drain(self) -> None:
        """Wait for in-flight sends to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def build_request_confirmation_email(request: ServiceRequest) -> tuple[str, str]:
    subject = "Service Request Received - Boom Audio Visuals"
    body = render_email("request_confirmation.html", request=request)
    return subject, body


def build_admin_alert_email(request: ServiceRequest) -> tuple[str, str]:
    subject = f"New Service Request from {request.full_name}"
    body = render_email("admin_alert.html", request=request)
    return subject, body


def build_quotation_email(quotation: Quotation, *, client_name: str) -> tuple[str, str]:
    rows = [
        {
            "description": item.get("description") or "Service",
            "quantity": item.get("quantity", 1),
            "unit_price": to_money(item.get("unitPrice")),
            "line_total": line_total(item),
        }
        for item in quotation.line_items
    ]
    subject = "Your Quotation from Boom Audio Visuals"
    body = render_email(
        "quotation.html",
        quotation=quotation,
        client_name=client_name,
        rows=rows,
        show_discount=to_money(quotation.discount) > Decimal("0"),
    )
    return subject, body


def build_invoice_email(invoice: Invoice, *, client_name: str) -> tuple[str, str]:
    subject = f"Invoice {invoice.number} from Boom Audio Visuals"
    body = render_email("invoice.html", invoice=invoice, client_name=client_name)
    return subject, body


def build_payment_confirmation_email(
    invoice: Invoice, *, client_name: str
) -> tuple[str, str]:
    paid_at = invoice.paid_at or datetime.now(UTC)
    subject = "Payment Received - Boom Audio Visuals"
    body = render_email(
        "payment_confirmation.html",
        invoice=invoice,
        client_name=client_name,
        paid_on=paid_at.date().isoformat(),
    )
    return subject, body


def notify_request_received(
    request: ServiceRequest, dispatcher: NotificationDispatcher
) -> None:
    subject, body = build_request_confirmation_email(request)
    dispatcher.schedule_email(
        recipient=request.email, subject=subject, body=body, kind="request-confirmation"
    )
    if not dispatcher.admin_email:
        logger.info("No admin address configured; skipping request alert")
        return
    subject, body = build_admin_alert_email(request)
    dispatcher.schedule_email(
        recipient=dispatcher.admin_email, subject=subject, body=body, kind="admin-alert"
    )


def notify_quotation_created(
    quotation: Quotation,
    request: ServiceRequest | None,
    dispatcher: NotificationDispatcher,
) -> None:
    if request is not None:
        recipient = request.email
        client_name = request.full_name or DEFAULT_CLIENT_NAME
    else:
        recipient = quotation.client_email
        client_name = quotation.client_name or DEFAULT_CLIENT_NAME
    if not recipient:
        logger.info("Quotation %s has no client email; skipping", quotation.id)
        return
    subject, body = build_quotation_email(quotation, client_name=client_name)
    dispatcher.schedule_email(
        recipient=recipient, subject=subject, body=body, kind="quotation"
    )


def notify_invoice_created(
    invoice: Invoice,
    request: ServiceRequest | None,
    dispatcher: NotificationDispatcher,
) -> None:
    if request is None:
        logger.info("Invoice %s has no resolvable client; skipping email", invoice.id)
        return
    subject, body = build_invoice_email(
        invoice, client_name=request.full_name or DEFAULT_CLIENT_NAME
    )
    dispatcher.schedule_email(
        recipient=request.email, subject=subject, body=body, kind="invoice"
    )


def notify_payment_received(
    invoice: Invoice,
    request: ServiceRequest | None,
    dispatcher: NotificationDispatcher,
) -> None:
    if request is None:
        logger.info(
            "Invoice %s has no resolvable client; skipping payment confirmation",
            invoice.id,
        )
        return
    subject, body = build_payment_confirmation_email(
        invoice, client_name=request.full_name or DEFAULT_CLIENT_NAME
    )
    dispatcher.schedule_email(
        recipient=request.email,
        subject=subject,
        body=body,
        kind="payment-confirmation",
    )
