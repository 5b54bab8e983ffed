"""Quotation API and client notification routing."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.asyncio

SOUND_SYSTEM = {"description": "Sound System", "quantity": 2, "unitPrice": 10000}


async def _create_request(client, email: str = "achieng@example.com") -> str:
    response = await client.post(
        "/api/requests",
        json={
            "firstName": "Achieng",
            "lastName": "Otieno",
            "email": email,
            "phone": "+254700000001",
        },
    )
    assert response.status_code == 201
    return response.json()["requestId"]


async def test_create_quotation_returns_totals(client) -> None:
    response = await client.post(
        "/api/quotations", json={"lineItems": [SOUND_SYSTEM], "discount": 0}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["subtotal"] == "20000.00"
    assert body["tax"] == "3200.00"
    assert body["total"] == "23200.00"

    detail = await client.get(f"/api/quotations/{body['quotationId']}")
    assert detail.status_code == 200
    quotation = detail.json()["quotation"]
    assert quotation["status"] == "draft"
    assert quotation["requestId"] is None
    assert quotation["lineItems"] == [
        {"description": "Sound System", "quantity": 2, "unitPrice": "10000.00"}
    ]


async def test_discount_can_drive_total_negative(client) -> None:
    response = await client.post(
        "/api/quotations",
        json={"lineItems": [{"description": "Mic", "quantity": 1, "unitPrice": 100}], "discount": 500},
    )
    assert response.status_code == 201
    assert response.json()["total"] == "-384.00"


@pytest.mark.parametrize("payload", [{"lineItems": []}, {"clientName": "No Items"}])
async def test_quotation_requires_line_items(client, payload: dict) -> None:
    response = await client.post("/api/quotations", json=payload)
    assert response.status_code == 400
    assert "lineItems" in response.json()["detail"]

    listing = await client.get("/api/quotations")
    assert listing.json() == {"quotations": []}


async def test_negative_quantity_is_rejected(client) -> None:
    response = await client.post(
        "/api/quotations",
        json={"lineItems": [{"description": "Mic", "quantity": -1, "unitPrice": 100}]},
    )
    assert response.status_code == 422


async def test_quotation_emails_linked_request_client(client, dispatcher, mail_transport) -> None:
    request_id = await _create_request(client, email="linked@example.com")
    await dispatcher.drain()
    mail_transport.sent.clear()

    response = await client.post(
        "/api/quotations",
        json={
            "requestId": request_id,
            "clientEmail": "snapshot@example.com",
            "lineItems": [SOUND_SYSTEM],
        },
    )
    assert response.status_code == 201
    await dispatcher.drain()
    assert mail_transport.recipients() == ["linked@example.com"]


async def test_dangling_request_id_skips_email(client, dispatcher, mail_transport) -> None:
    response = await client.post(
        "/api/quotations",
        json={
            "requestId": "does-not-exist",
            "clientEmail": "snapshot@example.com",
            "lineItems": [SOUND_SYSTEM],
        },
    )
    assert response.status_code == 201
    await dispatcher.drain()
    assert mail_transport.sent == []


async def test_long_dangling_request_id_is_stored(client) -> None:
    request_id = "r" * 255
    response = await client.post(
        "/api/quotations", json={"requestId": request_id, "lineItems": [SOUND_SYSTEM]}
    )
    assert response.status_code == 201

    quotation_id = response.json()["quotationId"]
    stored = await client.get(f"/api/quotations/{quotation_id}")
    assert stored.json()["quotation"]["requestId"] == request_id

    response = await client.post(
        "/api/quotations", json={"requestId": "r" * 256, "lineItems": [SOUND_SYSTEM]}
    )
    assert response.status_code == 422


async def test_standalone_quotation_emails_snapshot_address(client, dispatcher, mail_transport) -> None:
    response = await client.post(
        "/api/quotations",
        json={"clientEmail": "walkin@example.com", "lineItems": [SOUND_SYSTEM]},
    )
    assert response.status_code == 201
    await dispatcher.drain()
    assert mail_transport.recipients() == ["walkin@example.com"]


async def test_list_quotations_newest_first(client) -> None:
    ids = []
    for quantity in (1, 2):
        response = await client.post(
            "/api/quotations",
            json={"lineItems": [{**SOUND_SYSTEM, "quantity": quantity}]},
        )
        ids.append(response.json()["quotationId"])

    listing = await client.get("/api/quotations")
    assert [item["id"] for item in listing.json()["quotations"]] == list(reversed(ids))


async def test_quotation_pdf_download(client) -> None:
    created = await client.post(
        "/api/quotations",
        json={"clientEmail": "walkin@example.com", "lineItems": [SOUND_SYSTEM]},
    )
    quotation_id = created.json()["quotationId"]

    first = await client.get(f"/api/quotations/{quotation_id}/pdf")
    second = await client.get(f"/api/quotations/{quotation_id}/pdf")

    assert first.status_code == 200
    assert first.headers["content-type"] == "application/pdf"
    assert (
        first.headers["content-disposition"]
        == f'attachment; filename="quotation-{quotation_id}.pdf"'
    )
    assert first.content.startswith(b"%PDF")
    assert b"KES 23200.00" in first.content
    assert first.content == second.content


async def test_unknown_quotation_is_404(client) -> None:
    assert (await client.get("/api/quotations/missing")).status_code == 404
    assert (await client.get("/api/quotations/missing/pdf")).status_code == 404
