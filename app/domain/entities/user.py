"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .notification import ReminderService


@dataclass
class User:
    """Identity, credentials and reminder preferences of an account."""

    id: str | None
    email: str
    password_hash: str
    email_verified: bool = False
    display_name: str | None = None
    timezone: str = "UTC"
    week_start: str = "monday"
    reminder_enabled: bool = False
    reminder_service: ReminderService | None = None
    reminder_time: str | None = None
    push_subscription: dict[str, Any] | None = None
    relay_url_encrypted: str | None = None
    relay_encryption_iv: str | None = None
    created_at: datetime | None = None

    @property
    def has_relay_configuration(self) -> bool:
        """Return ``True`` when both halves of the encrypted relay URL are stored."""

        return bool(self.relay_url_encrypted and self.relay_encryption_iv)


__all__ = ["User"]
