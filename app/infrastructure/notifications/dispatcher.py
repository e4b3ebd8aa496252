"""Route a notification to the backend selected in the user's preferences."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from app.domain.entities import (
    NO_REMINDER_SERVICE,
    PUSH_SUBSCRIPTION_MISSING,
    RELAY_NOT_CONFIGURED,
    DeliveryResult,
    NotificationPayload,
    ReminderService,
    User,
)
from app.infrastructure.encryption import EncryptedValue

from .push import WebPushBackend
from .relay import RelayBackend

TargetT = TypeVar("TargetT", contravariant=True)


class NotificationBackend(Protocol[TargetT]):
    async def send(self, target: TargetT, payload: NotificationPayload) -> DeliveryResult:
        ...


class NotificationDispatcher:
    """Pick the push or relay backend for a user and report the delivery outcome.

    A user whose stored preferences lack the target for the selected backend gets a
    failed :class:`DeliveryResult` instead of an exception.
    """

    def __init__(
        self,
        push_backend: NotificationBackend[Mapping[str, Any]] | None = None,
        relay_backend: NotificationBackend[EncryptedValue] | None = None,
    ) -> None:
        self.push_backend = push_backend or WebPushBackend()
        self.relay_backend = relay_backend or RelayBackend()

    async def send(self, user: User, payload: NotificationPayload) -> DeliveryResult:
        if user.reminder_service is ReminderService.PUSH:
            if not user.push_subscription:
                return DeliveryResult.failed(PUSH_SUBSCRIPTION_MISSING)
            return await self.push_backend.send(user.push_subscription, payload)

        if user.reminder_service is ReminderService.NTFY:
            if not user.has_relay_configuration:
                return DeliveryResult.failed(RELAY_NOT_CONFIGURED)
            target = EncryptedValue(
                ciphertext=user.relay_url_encrypted or "",
                iv=user.relay_encryption_iv or "",
            )
            return await self.relay_backend.send(target, payload)

        return DeliveryResult.failed(NO_REMINDER_SERVICE)


__all__ = ["NotificationBackend", "NotificationDispatcher"]
