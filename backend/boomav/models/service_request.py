"""Client-submitted service requests."""

from __future__ import annotations

import enum

from sqlalchemy import JSON, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boomav.db.base import Base
from boomav.models.mixins import DocumentIdMixin, TimestampMixin


class ServiceRequestStatus(str, enum.Enum):
    """Informal request lifecycle; only PENDING is assigned automatically."""

    PENDING = "pending"
    QUOTED = "quoted"
    APPROVED = "approved"
    INVOICED = "invoiced"
    PAID = "paid"


class ServiceRequest(DocumentIdMixin, TimestampMixin, Base):
    """Event service request submitted through the public form."""

    __tablename__ = "service_requests"

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255))
    event_date: Mapped[str | None] = mapped_column(String(64))
    event_time: Mapped[str | None] = mapped_column(String(64))
    venue: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str | None] = mapped_column(String(120))
    attendees: Mapped[int | None] = mapped_column(Integer)
    selected_services: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    event_description: Mapped[str | None] = mapped_column(Text)
    special_requirements: Mapped[str | None] = mapped_column(Text)
    budget: Mapped[str | None] = mapped_column(String(120))
    status: Mapped[ServiceRequestStatus] = mapped_column(
        Enum(ServiceRequestStatus, native_enum=False, length=16),
        default=ServiceRequestStatus.PENDING,
        nullable=False,
    )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
