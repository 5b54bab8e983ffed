"""Quotation schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from boomav.models.quotation import QuotationStatus
from boomav.schemas.base import APIModel


class LineItem(APIModel):
    """One priced row of a quotation."""

    description: str = "Service"
    quantity: int = Field(default=1, ge=0)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)


class QuotationCreate(APIModel):
    """Quotation composed in the admin editor."""

    request_id: str | None = Field(default=None, max_length=255)
    client_name: str | None = None
    client_email: str | None = None
    event_date: str | None = None
    venue: str | None = None
    line_items: list[LineItem] | None = None
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    notes: str | None = None
    valid_until: str | None = None


class QuotationRead(APIModel):
    id: str
    request_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    event_date: str | None = None
    venue: str | None = None
    line_items: list[LineItem] = Field(default_factory=list)
    discount: Decimal
    notes: str | None = None
    valid_until: str | None = None
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    status: QuotationStatus
    created_at: datetime


class QuotationCreated(APIModel):
    success: bool = True
    quotation_id: str
    subtotal: Decimal
    tax: Decimal
    total: Decimal


class QuotationEnvelope(APIModel):
    quotation: QuotationRead


class QuotationList(APIModel):
    quotations: list[QuotationRead]
