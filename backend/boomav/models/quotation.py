"""Quotation documents."""

from __future__ import annotations

import enum
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Enum, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boomav.db.base import Base
from boomav.models.mixins import DocumentIdMixin, TimestampMixin


class QuotationStatus(str, enum.Enum):
    """Quotation lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class Quotation(DocumentIdMixin, TimestampMixin, Base):
    """Priced quotation, optionally linked to a service request.

    ``request_id`` is a soft reference: it is not a foreign key and may point
    at a request that no longer exists. Client fields are snapshots taken at
    creation time.
    """

    __tablename__ = "quotations"

    request_id: Mapped[str | None] = mapped_column(String(255), index=True)
    client_name: Mapped[str | None] = mapped_column(String(255))
    client_email: Mapped[str | None] = mapped_column(String(255))
    event_date: Mapped[str | None] = mapped_column(String(64))
    venue: Mapped[str | None] = mapped_column(String(255))
    # [{"description": str, "quantity": int, "unitPrice": "123.00"}]
    line_items: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )
    discount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    valid_until: Mapped[str | None] = mapped_column(String(64))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[QuotationStatus] = mapped_column(
        Enum(QuotationStatus, native_enum=False, length=16),
        default=QuotationStatus.DRAFT,
        nullable=False,
    )
