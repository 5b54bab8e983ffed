"""Provider payload parsing and payment application."""

from __future__ import annotations

from decimal import Decimal

import pytest

from boomav.db.session import get_sessionmaker
from boomav.models import Invoice, PaymentStatus, Quotation, ServiceRequest
from boomav.services import payments_service
from boomav.services.payments_service import PaymentNotice


def _stripe_event(event_type: str = "payment_intent.succeeded", **metadata) -> dict:
    return {
        "id": "evt_1",
        "type": event_type,
        "data": {"object": {"id": "pi_123", "metadata": metadata}},
    }


def _mpesa_callback(result_code: int = 0, items: list[dict] | None = None) -> dict:
    callback = {
        "MerchantRequestID": "29115-34620561-1",
        "CheckoutRequestID": "ws_CO_191220191020363925",
        "ResultCode": result_code,
        "ResultDesc": "The service request is processed successfully.",
    }
    if items is not None:
        callback["CallbackMetadata"] = {"Item": items}
    return {"Body": {"stkCallback": callback}}


def test_stripe_success_event_with_invoice_id() -> None:
    notice = payments_service.parse_stripe_event(_stripe_event(invoiceId="inv1"))
    assert notice == PaymentNotice(invoice_id="inv1", method="stripe", reference="pi_123")


def test_stripe_checkout_session_uses_snake_case_metadata() -> None:
    event = _stripe_event("checkout.session.completed", invoice_id="inv2")
    event["data"]["object"]["payment_intent"] = "pi_999"
    notice = payments_service.parse_stripe_event(event)
    assert notice == PaymentNotice(invoice_id="inv2", method="stripe", reference="pi_999")


@pytest.mark.parametrize(
    "event",
    [
        _stripe_event("payment_intent.payment_failed", invoiceId="inv1"),
        _stripe_event(),
        {"type": "payment_intent.succeeded"},
        {"type": "payment_intent.succeeded", "data": {"object": "nope"}},
        {"type": ["payment_intent.succeeded"], "data": {}},
        {"type": {"a": 1}},
    ],
)
def test_unattributable_stripe_events(event: dict) -> None:
    assert payments_service.parse_stripe_event(event) is None


def test_mpesa_success_reads_account_reference_and_receipt() -> None:
    payload = _mpesa_callback(
        items=[
            {"Name": "Amount", "Value": 5000},
            {"Name": "MpesaReceiptNumber", "Value": "NLJ7RT61SV"},
            {"Name": "AccountReference", "Value": "inv3"},
            {"Name": "PhoneNumber", "Value": 254708374149},
        ]
    )
    notice = payments_service.parse_mpesa_callback(payload)
    assert notice == PaymentNotice(invoice_id="inv3", method="mpesa", reference="NLJ7RT61SV")


def test_mpesa_falls_back_to_top_level_invoice_id() -> None:
    payload = _mpesa_callback(items=[{"Name": "MpesaReceiptNumber", "Value": "ABC"}])
    payload["invoiceId"] = "inv4"
    notice = payments_service.parse_mpesa_callback(payload)
    assert notice is not None
    assert notice.invoice_id == "inv4"


@pytest.mark.parametrize(
    "payload",
    [
        _mpesa_callback(result_code=1032),
        _mpesa_callback(items=[{"Name": "Amount", "Value": 1}]),
        {"Body": {"stkCallback": {"ResultCode": 0, "CallbackMetadata": {"Item": 5}}}},
        {"Body": {}},
        {},
    ],
)
def test_unattributable_mpesa_callbacks(payload: dict) -> None:
    assert payments_service.parse_mpesa_callback(payload) is None


@pytest.mark.asyncio
async def test_apply_payment_is_idempotent(reset_database, db_url: str, mail_transport, dispatcher) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        request = ServiceRequest(
            first_name="Otieno",
            last_name="Omondi",
            email="otieno@example.com",
            phone="+254711000000",
        )
        session.add(request)
        await session.flush()
        quotation = Quotation(
            request_id=request.id,
            line_items=[],
            subtotal=Decimal("0"),
            tax=Decimal("0"),
            total=Decimal("0"),
        )
        session.add(quotation)
        await session.flush()
        invoice = Invoice(quotation_id=quotation.id, amount=Decimal("1000.00"))
        session.add(invoice)
        await session.commit()
        invoice_id = invoice.id

    notice = PaymentNotice(invoice_id=invoice_id, method="mpesa", reference="QWE123")
    async with sessionmaker() as session:
        assert await payments_service.apply_payment(session, notice, dispatcher) is True
        assert await payments_service.apply_payment(session, notice, dispatcher) is False
        missing = PaymentNotice(invoice_id="missing", method="mpesa")
        assert await payments_service.apply_payment(session, missing, dispatcher) is False

    await dispatcher.drain()
    assert mail_transport.recipients() == ["otieno@example.com"]
    assert mail_transport.sent[0].subject == "Payment Received - Boom Audio Visuals"

    async with sessionmaker() as session:
        stored = await session.get(Invoice, invoice_id)
        assert stored is not None
        assert stored.payment_status == PaymentStatus.PAID
        assert stored.payment_method == "mpesa"
        assert stored.payment_reference == "QWE123"
        assert stored.paid_at is not None
