"""Tests for backend selection in the notification dispatcher."""

from __future__ import annotations

import pytest

from app.domain.entities import (
    NO_REMINDER_SERVICE,
    PUSH_SUBSCRIPTION_MISSING,
    RELAY_NOT_CONFIGURED,
    DeliveryResult,
    NotificationPayload,
    ReminderService,
    User,
)
from app.infrastructure.notifications import NotificationDispatcher

pytestmark = pytest.mark.anyio


class RecordingBackend:
    def __init__(self) -> None:
        self.calls: list = []

    async def send(self, target, payload) -> DeliveryResult:
        self.calls.append((target, payload))
        return DeliveryResult.ok()


@pytest.fixture
def backends() -> tuple[RecordingBackend, RecordingBackend]:
    return RecordingBackend(), RecordingBackend()


def _user(**overrides) -> User:
    values = {"id": "u1", "email": "u1@example.com", "password_hash": "x"}
    values.update(overrides)
    return User(**values)


async def test_push_user_goes_to_push_backend(backends, push_subscription) -> None:
    push, relay = backends
    dispatcher = NotificationDispatcher(push, relay)

    result = await dispatcher.send(
        _user(reminder_service=ReminderService.PUSH, push_subscription=push_subscription),
        NotificationPayload("t", "b"),
    )

    assert result.success
    assert push.calls[0][0] == push_subscription
    assert relay.calls == []


async def test_relay_user_goes_to_relay_backend(backends) -> None:
    push, relay = backends
    dispatcher = NotificationDispatcher(push, relay)

    await dispatcher.send(
        _user(
            reminder_service=ReminderService.NTFY,
            relay_url_encrypted="abcd",
            relay_encryption_iv="00" * 16,
        ),
        NotificationPayload("t", "b"),
    )

    target, _ = relay.calls[0]
    assert (target.ciphertext, target.iv) == ("abcd", "00" * 16)
    assert push.calls == []


@pytest.mark.parametrize(
    ("overrides", "error"),
    [
        ({"reminder_service": ReminderService.PUSH}, PUSH_SUBSCRIPTION_MISSING),
        ({"reminder_service": ReminderService.NTFY, "relay_url_encrypted": "abcd"}, RELAY_NOT_CONFIGURED),
        ({"reminder_service": None}, NO_REMINDER_SERVICE),
    ],
)
async def test_incomplete_configuration_is_reported(backends, overrides, error) -> None:
    push, relay = backends

    result = await NotificationDispatcher(push, relay).send(
        _user(**overrides), NotificationPayload("t", "b")
    )

    assert result == DeliveryResult.failed(error)
    assert push.calls == relay.calls == []
