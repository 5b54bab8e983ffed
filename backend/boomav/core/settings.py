"""Specialized settings adapters for integrations."""

from __future__ import annotations

from pydantic import BaseModel

from boomav.core.config import get_settings

_DEFAULT_FROM = "Boom Audio Visuals <noreply@boomaudiovisuals.co.ke>"


class MailSettings(BaseModel):
    """Slim view of outbound mail configuration."""

    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    from_address: str = _DEFAULT_FROM
    admin_email: str | None = None
    timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.port)


class PaymentSettings(BaseModel):
    """Slim view of payment-related configuration."""

    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None
    payments_webhook_verify: bool = True


def get_mail_settings() -> MailSettings:
    """Return mail-specific configuration."""

    settings = get_settings()
    return MailSettings(
        host=settings.smtp_host or None,
        port=settings.smtp_port or None,
        username=settings.smtp_username or None,
        password=settings.smtp_password or None,
        from_address=settings.smtp_from or _DEFAULT_FROM,
        admin_email=settings.admin_email or settings.smtp_username or None,
        timeout_seconds=settings.mail_timeout_seconds,
    )


def get_payment_settings() -> PaymentSettings:
    """Return payment-specific configuration."""

    settings = get_settings()
    return PaymentSettings(
        stripe_secret_key=settings.stripe_secret_key or None,
        stripe_webhook_secret=settings.stripe_webhook_secret or None,
        payments_webhook_verify=settings.payments_webhook_verify,
    )
