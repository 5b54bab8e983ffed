"""Payment provider webhook receivers.

Both receivers always acknowledge with 200 so providers do not retry; problems
with the payload are logged and the request is dropped.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.core.settings import get_payment_settings
from boomav.integrations import StripeClient, StripeClientError
from boomav.services import payments_service
from boomav.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments-webhook"])


async def _read_json(request: Request) -> dict[str, Any] | None:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Webhook %s received an invalid JSON body", request.url.path)
        return None
    if not isinstance(payload, dict):
        logger.warning("Webhook %s received a non-object body", request.url.path)
        return None
    return payload


@router.post("/stripe-webhook", status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    stripe_client: Annotated[StripeClient, Depends(deps.get_stripe_client)],
    dispatcher: Annotated[
        NotificationDispatcher, Depends(deps.get_notification_dispatcher)
    ],
) -> dict[str, bool]:
    settings = get_payment_settings()
    event: dict[str, Any] | None
    if settings.payments_webhook_verify and settings.stripe_webhook_secret:
        signature = request.headers.get("Stripe-Signature")
        if not signature:
            logger.warning("Stripe webhook without signature header; ignoring")
            return {"received": True}
        try:
            event = stripe_client.construct_event(await request.body(), signature)
        except (StripeClientError, json.JSONDecodeError) as exc:
            logger.warning("Rejected Stripe webhook: %s", exc)
            return {"received": True}
    else:
        event = await _read_json(request)

    if event is not None:
        try:
            await payments_service.handle_stripe_event(session, event, dispatcher)
        except Exception:
            logger.exception("Failed to process Stripe webhook event %s", event.get("id"))
    return {"received": True}


@router.post("/mpesa-webhook", status_code=status.HTTP_200_OK)
async def mpesa_webhook(
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    dispatcher: Annotated[
        NotificationDispatcher, Depends(deps.get_notification_dispatcher)
    ],
) -> dict[str, bool]:
    payload = await _read_json(request)
    if payload is not None:
        try:
            await payments_service.handle_mpesa_callback(session, payload, dispatcher)
        except Exception:
            logger.exception("Failed to process M-Pesa callback")
    return {"success": True}
