"""Integration shortcuts."""

from .stripe_client import StripeClient, StripeClientError

__all__ = [
    "StripeClient",
    "StripeClientError",
]
