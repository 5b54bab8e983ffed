"""Invoice schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field, field_validator

from boomav.models.invoice import PaymentStatus
from boomav.schemas.base import APIModel


class InvoiceCreate(APIModel):
    """Invoice payload; ``quotation_id`` and ``amount`` are required."""

    quotation_id: str | None = Field(default=None, max_length=255)
    amount: Decimal | None = Field(default=None, ge=0)
    due_date: str | None = None
    payment_method: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _blank_amount_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class InvoiceRead(APIModel):
    id: str
    invoice_number: str = Field(validation_alias=AliasChoices("number", "invoiceNumber"))
    quotation_id: str
    amount: Decimal
    due_date: str | None = None
    payment_status: PaymentStatus
    payment_method: str | None = None
    payment_reference: str | None = None
    paid_at: datetime | None = None
    created_at: datetime


class InvoiceCreated(APIModel):
    success: bool = True
    invoice_id: str
    message: str


class InvoiceList(APIModel):
    invoices: list[InvoiceRead]
