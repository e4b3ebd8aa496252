"""Web push delivery signed with the server VAPID keypair."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from anyio import to_thread
from pywebpush import WebPushException, webpush

from app.config import Settings, get_settings
from app.domain.entities import SUBSCRIPTION_EXPIRED, DeliveryResult, NotificationPayload

logger = logging.getLogger(__name__)

EXPIRED_STATUS_CODES = frozenset({404, 410})


def serialize_push_payload(payload: NotificationPayload) -> str:
    """Return the JSON document the service worker receives."""

    return json.dumps(
        {
            "title": payload.title,
            "body": payload.body,
            "icon": payload.icon,
            "badge": payload.badge,
            "tag": payload.tag,
            "data": payload.data or {},
        }
    )


def _vapid_subject(contact: str) -> str:
    contact = contact.strip()
    if contact.startswith(("mailto:", "https:")):
        return contact
    return f"mailto:{contact}"


class WebPushBackend:
    """Deliver payloads to a browser push subscription."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sender: Callable[..., Any] = webpush,
    ) -> None:
        self._settings = settings
        self._sender = sender

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def send(
        self, subscription: Mapping[str, Any], payload: NotificationPayload
    ) -> DeliveryResult:
        settings = self.settings
        if not settings.web_push_configured:
            logger.warning("VAPID keys not configured - push notifications will not work")
            return DeliveryResult.failed("Web push not configured")

        request = partial(
            self._sender,
            subscription_info=dict(subscription),
            data=serialize_push_payload(payload),
            vapid_private_key=settings.vapid_private_key,
            # pywebpush adds "aud"/"exp" to the claims, so build a new dict every time.
            vapid_claims={"sub": _vapid_subject(settings.vapid_email or "")},
            timeout=settings.notification_timeout_seconds,
        )

        try:
            await to_thread.run_sync(request)
        except WebPushException as exc:
            status_code = getattr(exc.response, "status_code", None)
            if status_code in EXPIRED_STATUS_CODES:
                logger.info("Push subscription expired or invalid (status %s)", status_code)
                return DeliveryResult.failed(SUBSCRIPTION_EXPIRED)
            logger.error("Failed to send web push notification (status %s): %s", status_code, exc)
            return DeliveryResult.failed("Failed to send notification")
        except Exception as exc:  # pragma: no cover - transport failures depend on environment
            logger.error("Failed to send web push notification: %s", exc)
            return DeliveryResult.failed("Failed to send notification")

        logger.info("Web push notification sent successfully")
        return DeliveryResult.ok()


__all__ = ["EXPIRED_STATUS_CODES", "WebPushBackend", "serialize_push_payload"]
