"""Domain values exchanged with the notification backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SUBSCRIPTION_EXPIRED = "subscription_expired"
PUSH_SUBSCRIPTION_MISSING = "push_subscription_missing"
RELAY_NOT_CONFIGURED = "relay_not_configured"
NO_REMINDER_SERVICE = "no_reminder_service"

DEFAULT_ICON = "/icon-192.png"
DEFAULT_TAG = "habit-reminder"


class ReminderService(str, Enum):
    """Delivery channel selected by a user for their reminders."""

    PUSH = "push"
    NTFY = "ntfy"

    @classmethod
    def parse(cls, value: "str | ReminderService | None") -> "ReminderService | None":
        """Return the matching member, ``None`` for empty or unknown values."""

        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass
class NotificationPayload:
    """Content of a single notification, independent of the delivery backend."""

    title: str
    body: str
    icon: str = DEFAULT_ICON
    badge: str = DEFAULT_ICON
    tag: str = DEFAULT_TAG
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome reported by a backend after attempting a delivery."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> "DeliveryResult":
        return cls(success=False, error=error)

    @property
    def subscription_expired(self) -> bool:
        return not self.success and self.error == SUBSCRIPTION_EXPIRED


__all__ = [
    "DEFAULT_ICON",
    "DEFAULT_TAG",
    "DeliveryResult",
    "NO_REMINDER_SERVICE",
    "NotificationPayload",
    "PUSH_SUBSCRIPTION_MISSING",
    "RELAY_NOT_CONFIGURED",
    "ReminderService",
    "SUBSCRIPTION_EXPIRED",
]
