"""Stripe SDK wrapper for webhook verification."""

from __future__ import annotations

import json
from typing import Any, cast

import stripe


class StripeClientError(RuntimeError):
    """Raised when Stripe interaction fails."""


class StripeClient:
    """Thin wrapper around the Stripe SDK used by the webhook receiver."""

    def __init__(
        self,
        secret_key: str | None = None,
        *,
        webhook_secret: str | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        if secret_key:
            stripe.api_key = secret_key

    @property
    def webhook_secret(self) -> str | None:
        return self._webhook_secret

    def construct_event(self, payload: bytes, signature: str) -> dict[str, Any]:
        """Verify the ``Stripe-Signature`` header and return the event as a dict."""

        if not self._webhook_secret:
            raise StripeClientError("Webhook secret is not configured")
        try:
            stripe.Webhook.construct_event(
                payload=payload,
                sig_header=signature,
                secret=self._webhook_secret,
            )
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise StripeClientError("Invalid webhook signature") from exc
        return cast(dict[str, Any], json.loads(payload))
