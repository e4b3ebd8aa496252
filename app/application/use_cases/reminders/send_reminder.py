"""Use case for delivering the daily reminder to one user."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from anyio import to_thread
from sqlalchemy.orm import Session

from app.domain.entities import DeliveryResult, NotificationPayload, User
from app.infrastructure.notifications import NotificationDispatcher, compose_reminder_message
from app.infrastructure.repositories import HabitRepository, UserRepository
from app.utils import local_date

logger = logging.getLogger(__name__)


def build_reminder_for_user(session: Session, user: User, now: datetime) -> NotificationPayload:
    """Compose the reminder from the habits still open on the user's local date."""

    today = local_date(now, user.timezone)
    habits = HabitRepository(session).list_incomplete_for_day(user.id, today)
    return compose_reminder_message(habits, now=now)


def clear_expired_subscription(session: Session, user_id: str) -> None:
    UserRepository(session).clear_push_subscription(user_id)


async def send_reminder_to_user(
    user: User,
    *,
    now: datetime,
    dispatcher: NotificationDispatcher,
    session_factory: Callable[[], Session],
) -> DeliveryResult:
    """Compose and dispatch the reminder for ``user``.

    Database work runs in worker threads with its own session. Delivery errors come
    back as a failed :class:`DeliveryResult`; an expired push subscription is cleared.
    """

    def _load_payload() -> NotificationPayload:
        with session_factory() as session:
            return build_reminder_for_user(session, user, now)

    def _clear_subscription() -> None:
        with session_factory() as session:
            clear_expired_subscription(session, user.id)

    payload = await to_thread.run_sync(_load_payload)
    result = await dispatcher.send(user, payload)

    if result.subscription_expired:
        await to_thread.run_sync(_clear_subscription)
        logger.info("Cleared expired push subscription for user %s", user.id)
    elif result.success:
        logger.info("Reminder sent to user %s", user.id)
    else:
        logger.warning("Reminder for user %s failed: %s", user.id, result.error)
    return result
