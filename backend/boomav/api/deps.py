"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from boomav.core.settings import get_mail_settings, get_payment_settings
from boomav.db.session import get_session
from boomav.integrations import StripeClient
from boomav.services.email_service import SMTPMailTransport
from boomav.services.notification_service import NotificationDispatcher


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher backed by SMTP."""
    mail_settings = get_mail_settings()
    return NotificationDispatcher(
        SMTPMailTransport(mail_settings), admin_email=mail_settings.admin_email
    )


def get_stripe_client() -> StripeClient:
    settings = get_payment_settings()
    return StripeClient(
        settings.stripe_secret_key, webhook_secret=settings.stripe_webhook_secret
    )
