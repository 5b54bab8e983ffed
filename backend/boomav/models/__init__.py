"""ORM models package export."""

from boomav.models.content import (
    BlogCategory,
    BlogPost,
    Event,
    EventCategory,
    EventStatus,
    Service,
)
from boomav.models.invoice import Invoice, PaymentStatus
from boomav.models.quotation import Quotation, QuotationStatus
from boomav.models.service_request import ServiceRequest, ServiceRequestStatus

__all__ = [
    "BlogCategory",
    "BlogPost",
    "Event",
    "EventCategory",
    "EventStatus",
    "Invoice",
    "PaymentStatus",
    "Quotation",
    "QuotationStatus",
    "Service",
    "ServiceRequest",
    "ServiceRequestStatus",
]
