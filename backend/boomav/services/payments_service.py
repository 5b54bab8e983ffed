"""Payment provider callbacks: Stripe events and M-Pesa STK results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from boomav.services import invoice_service, notification_service
from boomav.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

STRIPE_SUCCESS_EVENTS: Final = frozenset(
    {"payment_intent.succeeded", "checkout.session.completed"}
)
_INVOICE_ID_KEYS: Final = ("invoiceId", "invoice_id")


@dataclass(slots=True, frozen=True)
class PaymentNotice:
    """A successful payment attributed to an invoice."""

    invoice_id: str
    method: str
    reference: str | None = None


def _invoice_id_from(mapping: Mapping[str, Any] | None) -> str | None:
    if not isinstance(mapping, Mapping):
        return None
    for key in _INVOICE_ID_KEYS:
        value = mapping.get(key)
        if value:
            return str(value)
    return None


def parse_stripe_event(event: Mapping[str, Any]) -> PaymentNotice | None:
    """Return the paid invoice carried in a Stripe success event, if any."""

    event_type = event.get("type")
    if not isinstance(event_type, str) or event_type not in STRIPE_SUCCESS_EVENTS:
        logger.info("Ignoring Stripe event type %r", event_type)
        return None
    data = event.get("data")
    data_object = data.get("object") if isinstance(data, Mapping) else None
    if not isinstance(data_object, Mapping):
        logger.warning("Stripe event %s has no data object", event.get("id"))
        return None
    invoice_id = _invoice_id_from(data_object.get("metadata"))
    if invoice_id is None:
        logger.warning(
            "Stripe event %s carries no invoice id in metadata", event.get("id")
        )
        return None
    reference = data_object.get("payment_intent") or data_object.get("id")
    return PaymentNotice(
        invoice_id=invoice_id,
        method="stripe",
        reference=str(reference) if reference else None,
    )


def _callback_items(callback: Mapping[str, Any]) -> dict[str, Any]:
    metadata = callback.get("CallbackMetadata")
    items = metadata.get("Item") if isinstance(metadata, Mapping) else None
    values: dict[str, Any] = {}
    if not isinstance(items, list):
        return values
    for item in items:
        if isinstance(item, Mapping) and "Name" in item:
            values[str(item["Name"])] = item.get("Value")
    return values


def parse_mpesa_callback(payload: Mapping[str, Any]) -> PaymentNotice | None:
    """Return the paid invoice carried in an M-Pesa STK callback, if any.

    A ``ResultCode`` of 0 is success. The invoice id is read from the
    ``AccountReference`` metadata item, or from a top-level ``invoiceId``.
    """

    body = payload.get("Body")
    callback = body.get("stkCallback") if isinstance(body, Mapping) else None
    if not isinstance(callback, Mapping):
        logger.warning("M-Pesa callback without stkCallback body")
        return None
    result_code = callback.get("ResultCode")
    if str(result_code) != "0":
        logger.info(
            "M-Pesa payment %s not successful (ResultCode=%s): %s",
            callback.get("CheckoutRequestID"),
            result_code,
            callback.get("ResultDesc"),
        )
        return None
    items = _callback_items(callback)
    invoice_id = items.get("AccountReference") or _invoice_id_from(payload)
    if not invoice_id:
        logger.warning(
            "M-Pesa callback %s carries no invoice reference",
            callback.get("CheckoutRequestID"),
        )
        return None
    receipt = items.get("MpesaReceiptNumber") or callback.get("CheckoutRequestID")
    return PaymentNotice(
        invoice_id=str(invoice_id),
        method="mpesa",
        reference=str(receipt) if receipt else None,
    )


async def apply_payment(
    session: AsyncSession,
    notice: PaymentNotice,
    dispatcher: NotificationDispatcher,
) -> bool:
    """Mark the invoice paid and send the confirmation. Returns True on mutation."""

    invoice = await invoice_service.mark_paid(
        session,
        invoice_id=notice.invoice_id,
        payment_method=notice.method,
        payment_reference=notice.reference,
    )
    if invoice is None:
        return False
    logger.info("Invoice %s marked paid via %s", invoice.id, notice.method)
    context = await invoice_service.resolve_context(session, invoice)
    notification_service.notify_payment_received(invoice, context.request, dispatcher)
    return True


async def handle_stripe_event(
    session: AsyncSession,
    event: Mapping[str, Any],
    dispatcher: NotificationDispatcher,
) -> bool:
    notice = parse_stripe_event(event)
    if notice is None:
        return False
    return await apply_payment(session, notice, dispatcher)


async def handle_mpesa_callback(
    session: AsyncSession,
    payload: Mapping[str, Any],
    dispatcher: NotificationDispatcher,
) -> bool:
    notice = parse_mpesa_callback(payload)
    if notice is None:
        return False
    return await apply_payment(session, notice, dispatcher)
