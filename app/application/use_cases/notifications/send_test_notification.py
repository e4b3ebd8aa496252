"""Use case for sending a test notification through the configured backend."""

from __future__ import annotations

import logging

from anyio import from_thread
from sqlalchemy.orm import Session

from app.domain.entities import DeliveryResult
from app.infrastructure.notifications import NotificationDispatcher, build_test_message
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def send_test_notification(
    session: Session, user_id: str, dispatcher: NotificationDispatcher
) -> DeliveryResult:
    """Deliver the fixed test payload to ``user_id``.

    Must run in a worker thread started by anyio (a sync FastAPI endpoint). An
    expired push subscription is cleared before the result is returned.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")
    if user.reminder_service is None:
        raise ValueError("No notification service configured")

    result = from_thread.run(dispatcher.send, user, build_test_message())

    if result.subscription_expired:
        repository.clear_push_subscription(user_id)
        logger.info("Cleared expired push subscription for user %s", user_id)
    elif result.success:
        logger.info(
            "Test notification sent to user %s via %s", user_id, user.reminder_service.value
        )
    else:
        logger.warning("Test notification for user %s failed: %s", user_id, result.error)
    return result
