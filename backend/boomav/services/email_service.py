"""Email rendering and SMTP delivery."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from boomav.core.settings import MailSettings
from boomav.services.money import format_kes

logger = logging.getLogger(__name__)

__all__ = [
    "MailDeliveryError",
    "MailTransport",
    "SMTPMailTransport",
    "render_email",
]

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)
_ENV.filters["kes"] = format_kes

COMPANY_CONTACT = {
    "phone": "+254 742 412650",
    "email": "boomaudiovisuals254@gmail.com",
    "location": "Kisumu, Kenya",
    "website": "www.boomaudiovisuals.co.ke",
}


class MailDeliveryError(RuntimeError):
    """Raised when the outbound mail transport fails."""


class MailTransport(Protocol):
    def send(self, recipient: str, subject: str, html_body: str) -> bool: ...


def render_email(template_name: str, **context: Any) -> str:
    """Render an HTML email template with the shared company context."""

    template = _ENV.get_template(template_name)
    return template.render(company=COMPANY_CONTACT, **context)


class SMTPMailTransport:
    """Blocking SMTP sender with a bounded connection timeout."""

    def __init__(self, settings: MailSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> MailSettings:
        return self._settings

    def send(self, recipient: str, subject: str, html_body: str) -> bool:
        """Deliver a message.

        Returns False when delivery was skipped because SMTP is not configured.
        Raises ``MailDeliveryError`` on transport errors.
        """

        settings = self._settings
        if not settings.enabled:
            logger.info("SMTP configuration missing; skipping email to %s", recipient)
            return False

        message = EmailMessage()
        message["Subject"] = subject
        message["To"] = recipient
        message["From"] = settings.from_address
        message.set_content("This message contains HTML content.")
        message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(
                settings.host, settings.port, timeout=settings.timeout_seconds
            ) as server:
                if settings.username and settings.password:
                    try:
                        server.starttls()
                    except smtplib.SMTPException:
                        logger.debug("SMTP server does not support STARTTLS")
                    server.login(settings.username, settings.password)
                server.send_message(message)
        except (OSError, smtplib.SMTPException) as exc:
            raise MailDeliveryError(f"Failed to send email to {recipient}") from exc
        logger.info("Email sent to %s", recipient)
        return True
