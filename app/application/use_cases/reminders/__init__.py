"""Use cases for the daily reminder."""

from .schedule import find_due_users, is_time_for_reminder, local_clock
from .send_reminder import (
    build_reminder_for_user,
    clear_expired_subscription,
    send_reminder_to_user,
)

__all__ = [
    "build_reminder_for_user",
    "clear_expired_subscription",
    "find_due_users",
    "is_time_for_reminder",
    "local_clock",
    "send_reminder_to_user",
]
