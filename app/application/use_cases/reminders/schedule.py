"""Matching of reminder preferences against the current instant."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.utils import localize

logger = logging.getLogger(__name__)


def local_clock(now: datetime, tz_name: str | None) -> str:
    """Return ``now`` as ``HH:MM`` in the ``tz_name`` zone."""

    return localize(now, tz_name).strftime("%H:%M")


def is_time_for_reminder(tz_name: str | None, reminder_time: str | None, now: datetime) -> bool:
    """Exact ``HH:MM`` match; a skipped minute is not caught up later.

    Raises ``ValueError`` for unknown timezones.
    """

    if not reminder_time:
        return False
    return local_clock(now, tz_name) == reminder_time


def find_due_users(session: Session, now: datetime) -> Sequence[User]:
    """Return the users whose reminder minute is ``now``.

    Preferences are re-read on every call. Users with an unknown timezone are logged
    and skipped.
    """

    due: list[User] = []
    for user in UserRepository(session).list_with_reminders_enabled():
        try:
            matches = is_time_for_reminder(user.timezone, user.reminder_time, now)
        except ValueError:
            logger.warning("Skipping user %s with unknown timezone %r", user.id, user.timezone)
            continue
        if matches:
            due.append(user)
    return due
