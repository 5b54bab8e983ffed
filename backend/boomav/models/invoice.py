"""Invoice model."""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from boomav.db.base import Base
from boomav.models.mixins import DocumentIdMixin, TimestampMixin


class PaymentStatus(str, enum.Enum):
    """Invoice payment states."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class Invoice(DocumentIdMixin, TimestampMixin, Base):
    """Billing invoice raised against a quotation.

    ``amount`` is supplied by the caller and is never derived from the
    referenced quotation.
    """

    __tablename__ = "invoices"

    quotation_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    due_date: Mapped[str | None] = mapped_column(String(64))
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False, length=16),
        default=PaymentStatus.PENDING,
        nullable=False,
    )
    payment_method: Mapped[str | None] = mapped_column(String(32))
    payment_reference: Mapped[str | None] = mapped_column(String(128))
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    @property
    def number(self) -> str:
        return f"INV-{self.id[-8:].upper()}"
