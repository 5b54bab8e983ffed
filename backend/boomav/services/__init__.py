"""Service layer exports."""
from boomav.services import (
    blog_service,
    event_service,
    invoice_service,
    money,
    notification_service,
    payments_service,
    pdf_service,
    quotation_service,
    request_service,
    service_catalog_service,
)

__all__ = [
    "blog_service",
    "event_service",
    "invoice_service",
    "money",
    "notification_service",
    "payments_service",
    "pdf_service",
    "quotation_service",
    "request_service",
    "service_catalog_service",
]
