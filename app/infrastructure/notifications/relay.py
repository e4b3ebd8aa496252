"""Delivery through a self-hosted push relay (ntfy compatible) addressed by URL."""

from __future__ import annotations

import base64
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit, urlunsplit

import httpx

from app.config import Settings, get_settings
from app.domain.entities import DeliveryResult, NotificationPayload
from app.infrastructure.encryption import EncryptedValue, decrypt

logger = logging.getLogger(__name__)

# Emoji blocks and everything outside the BMP; some HTTP stacks choke on 4-byte UTF-8.
_UNSAFE_CHARACTERS = re.compile("[\U00010000-\U0010FFFF\u2600-\u27bf\ufe0f]")


def strip_unsafe_characters(text: str) -> str:
    return _UNSAFE_CHARACTERS.sub("", text).strip()


def _encode_header_value(value: str) -> str:
    """Keep header values ASCII, falling back to an RFC 2047 encoded word."""

    try:
        value.encode("ascii")
    except UnicodeEncodeError:
        encoded = base64.b64encode(value.encode("utf-8")).decode("ascii")
        return f"=?UTF-8?B?{encoded}?="
    return value


@dataclass(frozen=True)
class RelayRequest:
    url: str
    headers: dict[str, str]
    body: str


def build_relay_request(relay_url: str, payload: NotificationPayload) -> RelayRequest:
    """Prepare the POST for ``relay_url``.

    Credentials embedded in the URL user-info are moved into an ``Authorization:
    Basic`` header and removed from the request URL.
    """

    parts = urlsplit(relay_url)
    headers = {
        "Content-Type": "text/plain; charset=utf-8",
        "Title": _encode_header_value(strip_unsafe_characters(payload.title)),
        "Priority": "default",
        "Tags": "calendar,reminder",
    }

    if parts.username or parts.password:
        credentials = f"{unquote(parts.username or '')}:{unquote(parts.password or '')}"
        token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        headers["Authorization"] = f"Basic {token}"
        parts = parts._replace(netloc=parts.netloc.rpartition("@")[2])

    return RelayRequest(
        url=urlunsplit(parts),
        headers=headers,
        body=strip_unsafe_characters(payload.body),
    )


class RelayBackend:
    """POST plain-text notifications to a user's encrypted relay URL."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        decryptor: Callable[[str, str], str | None] = decrypt,
    ) -> None:
        self._settings = settings
        self._client = client
        self._decryptor = decryptor

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def send(self, target: EncryptedValue, payload: NotificationPayload) -> DeliveryResult:
        relay_url = self._decryptor(target.ciphertext, target.iv)
        if not relay_url:
            logger.error("Failed to decrypt relay URL")
            return DeliveryResult.failed("Invalid Ntfy configuration")

        try:
            request = build_relay_request(relay_url, payload)
        except ValueError as exc:
            logger.error("Stored relay URL is malformed: %s", exc)
            return DeliveryResult.failed("Invalid Ntfy configuration")

        try:
            response = await self._post(request)
        except httpx.InvalidURL as exc:
            logger.error("Stored relay URL is malformed: %s", exc)
            return DeliveryResult.failed("Invalid Ntfy configuration")
        except httpx.HTTPError as exc:
            logger.error("Failed to send Ntfy notification: %s", exc)
            return DeliveryResult.failed("Failed to send notification")

        if not response.is_success:
            logger.error(
                "Ntfy notification failed: %s - %s", response.status_code, response.text[:200]
            )
            return DeliveryResult.failed(f"Ntfy error: {response.status_code}")

        logger.info("Ntfy notification sent successfully")
        return DeliveryResult.ok()

    async def _post(self, request: RelayRequest) -> httpx.Response:
        timeout = self.settings.notification_timeout_seconds
        if self._client is not None:
            return await self._client.post(
                request.url,
                headers=request.headers,
                content=request.body.encode("utf-8"),
                timeout=timeout,
            )
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(
                request.url,
                headers=request.headers,
                content=request.body.encode("utf-8"),
            )


__all__ = [
    "RelayBackend",
    "RelayRequest",
    "build_relay_request",
    "strip_unsafe_characters",
]
