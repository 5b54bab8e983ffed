"""Versioned API router."""

from fastapi import APIRouter

from . import (
    blog,
    events,
    health,
    invoices,
    payments_webhook,
    quotations,
    service_requests,
    services,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(service_requests.router, tags=["requests"])
router.include_router(quotations.router, tags=["quotations"])
router.include_router(invoices.router, tags=["invoices"])
router.include_router(payments_webhook.router)
router.include_router(blog.router, tags=["blog"])
router.include_router(events.router, tags=["events"])
router.include_router(services.router, tags=["services"])

__all__ = ["router"]
