"""Domain entities exposed by the application."""

from .habit import Habit
from .notification import (
    NO_REMINDER_SERVICE,
    PUSH_SUBSCRIPTION_MISSING,
    RELAY_NOT_CONFIGURED,
    SUBSCRIPTION_EXPIRED,
    DeliveryResult,
    NotificationPayload,
    ReminderService,
)
from .session import SessionValidation, UserSession
from .user import User

__all__ = [
    "DeliveryResult",
    "Habit",
    "NO_REMINDER_SERVICE",
    "NotificationPayload",
    "PUSH_SUBSCRIPTION_MISSING",
    "RELAY_NOT_CONFIGURED",
    "ReminderService",
    "SUBSCRIPTION_EXPIRED",
    "SessionValidation",
    "User",
    "UserSession",
]
