"""Stripe and M-Pesa webhook receivers."""

from __future__ import annotations

import hashlib
import hmac
import json
import time

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError

from boomav.core.config import get_settings
from boomav.services import invoice_service

pytestmark = pytest.mark.asyncio

WEBHOOK_SECRET = "whsec_test_secret"


async def _invoice(client) -> str:
    request = await client.post(
        "/api/requests",
        json={
            "firstName": "Wanjiru",
            "lastName": "Kamau",
            "email": "wanjiru@example.com",
            "phone": "+254722000000",
        },
    )
    quotation = await client.post(
        "/api/quotations",
        json={
            "requestId": request.json()["requestId"],
            "lineItems": [{"description": "Stage", "quantity": 1, "unitPrice": 15000}],
        },
    )
    invoice = await client.post(
        "/api/invoices",
        json={"quotationId": quotation.json()["quotationId"], "amount": 17400},
    )
    return invoice.json()["invoiceId"]


async def _stored_invoice(client, invoice_id: str) -> dict:
    listing = await client.get("/api/invoices")
    return next(item for item in listing.json()["invoices"] if item["id"] == invoice_id)


def _stripe_event(invoice_id: str | None, event_type: str = "payment_intent.succeeded") -> dict:
    metadata = {"invoiceId": invoice_id} if invoice_id else {}
    return {
        "id": "evt_test",
        "type": event_type,
        "data": {"object": {"id": "pi_test_123", "metadata": metadata}},
    }


def _sign(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    timestamp = int(time.time())
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest_asyncio.fixture()
async def signed_webhooks(client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setenv("PAYMENTS_WEBHOOK_VERIFY", "true")
    get_settings.cache_clear()
    yield client
    monkeypatch.delenv("STRIPE_WEBHOOK_SECRET")
    get_settings.cache_clear()


async def _clear_mail(dispatcher, mail_transport) -> None:
    await dispatcher.drain()
    mail_transport.sent.clear()


async def test_stripe_success_marks_invoice_paid(client, dispatcher, mail_transport) -> None:
    invoice_id = await _invoice(client)
    await _clear_mail(dispatcher, mail_transport)

    response = await client.post("/api/payments/stripe-webhook", json=_stripe_event(invoice_id))
    assert response.status_code == 200
    assert response.json() == {"received": True}

    invoice = await _stored_invoice(client, invoice_id)
    assert invoice["paymentStatus"] == "paid"
    assert invoice["paymentMethod"] == "stripe"
    assert invoice["paymentReference"] == "pi_test_123"
    assert invoice["paidAt"] is not None

    await dispatcher.drain()
    assert mail_transport.recipients() == ["wanjiru@example.com"]
    assert mail_transport.sent[0].subject == "Payment Received - Boom Audio Visuals"


async def test_duplicate_success_is_noop(client, dispatcher, mail_transport) -> None:
    invoice_id = await _invoice(client)
    await _clear_mail(dispatcher, mail_transport)

    for _ in range(2):
        response = await client.post(
            "/api/payments/stripe-webhook", json=_stripe_event(invoice_id)
        )
        assert response.status_code == 200

    first = await _stored_invoice(client, invoice_id)
    await client.post("/api/payments/stripe-webhook", json=_stripe_event(invoice_id))
    second = await _stored_invoice(client, invoice_id)
    assert first["paidAt"] == second["paidAt"]

    await dispatcher.drain()
    assert len(mail_transport.sent) == 1


@pytest.mark.parametrize(
    "body",
    [
        _stripe_event(None),
        _stripe_event("no-such-invoice"),
        _stripe_event("ignored", event_type="charge.refunded"),
    ],
)
async def test_unattributable_stripe_events_are_acknowledged(
    client, dispatcher, mail_transport, body: dict
) -> None:
    invoice_id = await _invoice(client)
    await _clear_mail(dispatcher, mail_transport)

    response = await client.post("/api/payments/stripe-webhook", json=body)
    assert response.status_code == 200
    assert response.json() == {"received": True}

    invoice = await _stored_invoice(client, invoice_id)
    assert invoice["paymentStatus"] == "pending"
    await dispatcher.drain()
    assert mail_transport.sent == []


async def test_malformed_json_is_acknowledged(client) -> None:
    response = await client.post(
        "/api/payments/stripe-webhook",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 200
    assert response.json() == {"received": True}

    response = await client.post(
        "/api/payments/mpesa-webhook",
        content=b"[1, 2",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}


async def test_bad_signature_is_acknowledged_without_mutation(signed_webhooks) -> None:
    client = signed_webhooks
    invoice_id = await _invoice(client)
    payload = json.dumps(_stripe_event(invoice_id)).encode()

    response = await client.post(
        "/api/payments/stripe-webhook",
        content=payload,
        headers={
            "Content-Type": "application/json",
            "Stripe-Signature": _sign(payload, secret="whsec_wrong"),
        },
    )
    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert (await _stored_invoice(client, invoice_id))["paymentStatus"] == "pending"

    unsigned = await client.post(
        "/api/payments/stripe-webhook",
        content=payload,
        headers={"Content-Type": "application/json"},
    )
    assert unsigned.status_code == 200
    assert (await _stored_invoice(client, invoice_id))["paymentStatus"] == "pending"


async def test_valid_signature_is_processed(signed_webhooks) -> None:
    client = signed_webhooks
    invoice_id = await _invoice(client)
    payload = json.dumps(_stripe_event(invoice_id)).encode()

    response = await client.post(
        "/api/payments/stripe-webhook",
        content=payload,
        headers={"Content-Type": "application/json", "Stripe-Signature": _sign(payload)},
    )
    assert response.status_code == 200
    assert (await _stored_invoice(client, invoice_id))["paymentStatus"] == "paid"


def _mpesa(invoice_id: str | None, result_code: int = 0) -> dict:
    items = [
        {"Name": "Amount", "Value": 17400},
        {"Name": "MpesaReceiptNumber", "Value": "NLJ7RT61SV"},
        {"Name": "PhoneNumber", "Value": 254722000000},
    ]
    if invoice_id:
        items.append({"Name": "AccountReference", "Value": invoice_id})
    return {
        "Body": {
            "stkCallback": {
                "MerchantRequestID": "29115-34620561-1",
                "CheckoutRequestID": "ws_CO_191220191020363925",
                "ResultCode": result_code,
                "ResultDesc": "Processed",
                "CallbackMetadata": {"Item": items},
            }
        }
    }


async def test_mpesa_success_marks_invoice_paid(client, dispatcher, mail_transport) -> None:
    invoice_id = await _invoice(client)
    await _clear_mail(dispatcher, mail_transport)

    response = await client.post("/api/payments/mpesa-webhook", json=_mpesa(invoice_id))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    invoice = await _stored_invoice(client, invoice_id)
    assert invoice["paymentStatus"] == "paid"
    assert invoice["paymentMethod"] == "mpesa"
    assert invoice["paymentReference"] == "NLJ7RT61SV"

    await dispatcher.drain()
    assert mail_transport.recipients() == ["wanjiru@example.com"]


@pytest.mark.parametrize(("with_reference", "result_code"), [(True, 1032), (False, 0)])
async def test_mpesa_failures_are_acknowledged(
    client, with_reference: bool, result_code: int
) -> None:
    invoice_id = await _invoice(client)
    body = _mpesa(invoice_id if with_reference else None, result_code=result_code)

    response = await client.post("/api/payments/mpesa-webhook", json=body)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await _stored_invoice(client, invoice_id))["paymentStatus"] == "pending"


@pytest.mark.parametrize(
    "event",
    [
        {"type": ["payment_intent.succeeded"], "data": {}},
        {"type": {"a": 1}},
        {"type": 42, "data": {"object": {"metadata": {"invoiceId": "x"}}}},
    ],
)
async def test_stripe_event_with_non_string_type_is_acknowledged(client, event: dict) -> None:
    response = await client.post("/api/payments/stripe-webhook", json=event)
    assert response.status_code == 200
    assert response.json() == {"received": True}


@pytest.mark.parametrize("items", [5, "AccountReference", {"Name": "AccountReference"}])
async def test_mpesa_callback_with_malformed_items_is_acknowledged(client, items) -> None:
    body = {"Body": {"stkCallback": {"ResultCode": 0, "CallbackMetadata": {"Item": items}}}}

    response = await client.post("/api/payments/mpesa-webhook", json=body)
    assert response.status_code == 200
    assert response.json() == {"success": True}


async def test_database_failure_is_acknowledged(
    client, monkeypatch: pytest.MonkeyPatch
) -> None:
    invoice_id = await _invoice(client)

    async def failing_mark_paid(*args, **kwargs):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(invoice_service, "mark_paid", failing_mark_paid)

    response = await client.post(
        "/api/payments/stripe-webhook", json=_stripe_event(invoice_id)
    )
    assert response.status_code == 200
    assert response.json() == {"received": True}

    response = await client.post("/api/payments/mpesa-webhook", json=_mpesa(invoice_id))
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert (await _stored_invoice(client, invoice_id))["paymentStatus"] == "pending"
