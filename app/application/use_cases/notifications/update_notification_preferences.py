"""Use case for updating reminder preferences."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import ReminderService, User
from app.infrastructure.encryption import encrypt
from app.infrastructure.repositories import UserRepository

from .validators import (
    ensure_valid_relay_url,
    ensure_valid_reminder_service,
    ensure_valid_reminder_time,
)

logger = logging.getLogger(__name__)


class EncryptionUnavailableError(RuntimeError):
    """Raised when the relay URL cannot be encrypted with the configured key."""


def update_notification_preferences(
    session: Session,
    user_id: str,
    *,
    enabled: bool,
    service: str | ReminderService | None = None,
    reminder_time: str | None = None,
    relay_url: str | None = None,
) -> User:
    """Persist the reminder preferences of ``user_id`` in a single update.

    Disabling only flips ``reminder_enabled`` and keeps the rest for a later re-enable.
    Enabling validates every field first, so nothing is written for invalid input.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    if not enabled:
        user.reminder_enabled = False
        logger.info("Reminders disabled for user %s", user_id)
        return repository.update(user)

    reminder_service = ensure_valid_reminder_service(service)
    reminder_time = ensure_valid_reminder_time(reminder_time)

    relay_url_encrypted: str | None = None
    relay_encryption_iv: str | None = None
    if reminder_service is ReminderService.NTFY:
        encrypted = encrypt(ensure_valid_relay_url(relay_url))
        if encrypted is None:
            raise EncryptionUnavailableError("Failed to encrypt Ntfy URL")
        relay_url_encrypted = encrypted.ciphertext
        relay_encryption_iv = encrypted.iv
    elif not user.push_subscription:
        raise ValueError(
            "No push subscription found. Please enable notifications in your browser first."
        )

    user.reminder_enabled = True
    user.reminder_service = reminder_service
    user.reminder_time = reminder_time
    user.relay_url_encrypted = relay_url_encrypted
    user.relay_encryption_iv = relay_encryption_iv
    updated = repository.update(user)

    logger.info(
        "Notification preferences updated for user %s (service=%s, time=%s)",
        user_id,
        reminder_service.value,
        reminder_time,
    )
    return updated
