"""Validation helpers for notification preferences."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from app.domain.entities import ReminderService

MAX_RELAY_URL_LENGTH = 2048

_TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


def is_valid_reminder_time(value: str | None) -> bool:
    return isinstance(value, str) and _TIME_PATTERN.fullmatch(value) is not None


def ensure_valid_reminder_time(value: str | None) -> str:
    if not is_valid_reminder_time(value):
        raise ValueError("Invalid or missing reminder time (must be HH:MM format)")
    return value


def ensure_valid_reminder_service(value: str | ReminderService | None) -> ReminderService:
    service = ReminderService.parse(value)
    if service is None:
        raise ValueError("Invalid or missing reminder service")
    return service


def ensure_valid_relay_url(value: str | None) -> str:
    """Return the stripped relay URL or raise ``ValueError``."""

    if not value or not isinstance(value, str):
        raise ValueError("Ntfy URL is required when using Ntfy service")

    sanitized = value.strip()
    if len(sanitized) > MAX_RELAY_URL_LENGTH:
        raise ValueError("Ntfy URL is too long")

    try:
        parts = urlsplit(sanitized)
        hostname = parts.hostname
        # Raises for a non-numeric or out-of-range port.
        _ = parts.port
    except ValueError as exc:
        raise ValueError("Invalid Ntfy URL") from exc

    if parts.scheme not in ("http", "https"):
        raise ValueError("Ntfy URL must use http or https")
    if not hostname:
        raise ValueError("Invalid Ntfy URL")
    return sanitized


def is_valid_push_subscription(value: Any) -> bool:
    """Check the browser ``PushSubscription.toJSON()`` shape."""

    if not isinstance(value, Mapping):
        return False

    endpoint = value.get("endpoint")
    if not isinstance(endpoint, str) or not endpoint.startswith("https://"):
        return False

    keys = value.get("keys")
    if not isinstance(keys, Mapping):
        return False

    return all(isinstance(keys.get(name), str) and keys.get(name) for name in ("p256dh", "auth"))


__all__ = [
    "MAX_RELAY_URL_LENGTH",
    "ensure_valid_relay_url",
    "ensure_valid_reminder_service",
    "ensure_valid_reminder_time",
    "is_valid_push_subscription",
    "is_valid_reminder_time",
]
