"""Reminder notification delivery for the infrastructure layer."""

from .dispatcher import NotificationBackend, NotificationDispatcher
from .messages import build_test_message, compose_reminder_message
from .push import WebPushBackend, serialize_push_payload
from .relay import RelayBackend, build_relay_request, strip_unsafe_characters

__all__ = [
    "NotificationBackend",
    "NotificationDispatcher",
    "RelayBackend",
    "WebPushBackend",
    "build_relay_request",
    "build_test_message",
    "compose_reminder_message",
    "serialize_push_payload",
    "strip_unsafe_characters",
]
