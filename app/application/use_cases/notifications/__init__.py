"""Use cases for reminder notification preferences."""

from .get_relay_url import get_relay_url
from .register_push_subscription import register_push_subscription
from .send_test_notification import send_test_notification
from .update_notification_preferences import (
    EncryptionUnavailableError,
    update_notification_preferences,
)

__all__ = [
    "EncryptionUnavailableError",
    "get_relay_url",
    "register_push_subscription",
    "send_test_notification",
    "update_notification_preferences",
]
