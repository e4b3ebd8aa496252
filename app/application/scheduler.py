"""Background loops started with the application: reminder ticks and housekeeping."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from anyio import to_thread
from sqlalchemy.orm import Session

from app.application.use_cases.reminders import find_due_users, send_reminder_to_user
from app.application.use_cases.sessions import delete_expired_sessions
from app.domain.entities import User
from app.infrastructure.database import SessionLocal
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.rate_limit import ALL_RATE_LIMITERS, RateLimiter
from app.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def next_minute_boundary(now: datetime) -> datetime:
    return now.replace(second=0, microsecond=0) + timedelta(minutes=1)


class ReminderScheduler:
    """Fire reminders once per minute for every user whose local time matches.

    Each match is dispatched in its own task; the tick does not wait for deliveries
    and a failure for one user never reaches the loop or the other users.
    """

    def __init__(
        self,
        *,
        dispatcher: NotificationDispatcher | None = None,
        session_factory: Callable[[], Session] = SessionLocal,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.dispatcher = dispatcher or NotificationDispatcher()
        self.session_factory = session_factory
        self.clock = clock
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def run(self) -> None:
        """Tick on every minute boundary until cancelled."""

        logger.info("Reminder scheduler started")
        try:
            while True:
                now = ensure_utc(self.clock())
                boundary = next_minute_boundary(now)
                await asyncio.sleep((boundary - now).total_seconds())
                try:
                    await self.tick(boundary)
                except Exception:
                    logger.exception("Reminder tick at %s failed", boundary.isoformat())
        finally:
            logger.info("Reminder scheduler stopped")

    async def tick(self, now: datetime | None = None) -> list[asyncio.Task]:
        """Match users against ``now`` and launch one dispatch task per match."""

        current = ensure_utc(now) if now is not None else self.clock()
        current = current.replace(second=0, microsecond=0)

        due = await to_thread.run_sync(self._find_due_users, current)
        if due:
            logger.info("Dispatching %s reminder(s) for %s", len(due), current.strftime("%H:%M"))

        launched = []
        for user in due:
            task = asyncio.create_task(self._dispatch(user, current))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            launched.append(task)
        return launched

    async def wait_for_pending(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _find_due_users(self, now: datetime) -> list[User]:
        with self.session_factory() as session:
            return list(find_due_users(session, now))

    async def _dispatch(self, user: User, now: datetime) -> None:
        try:
            await send_reminder_to_user(
                user,
                now=now,
                dispatcher=self.dispatcher,
                session_factory=self.session_factory,
            )
        except Exception:
            logger.exception("Failed to send reminder to user %s", user.id)


async def run_housekeeping(
    interval_seconds: float,
    *,
    limiters: Iterable[RateLimiter] = ALL_RATE_LIMITERS,
    session_factory: Callable[[], Session] = SessionLocal,
) -> None:
    """Periodically purge expired rate-limit entries and sessions until cancelled."""

    limiters = tuple(limiters)
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await sweep_once(limiters=limiters, session_factory=session_factory)
        except Exception:
            logger.exception("Housekeeping sweep failed")


async def sweep_once(
    *,
    limiters: Iterable[RateLimiter] = ALL_RATE_LIMITERS,
    session_factory: Callable[[], Session] = SessionLocal,
) -> tuple[int, int]:
    """Run a single sweep; returns ``(rate_limit_entries, sessions)`` removed."""

    purged_entries = sum(limiter.cleanup() for limiter in limiters)

    def _purge_sessions() -> int:
        with session_factory() as session:
            return delete_expired_sessions(session)

    purged_sessions = await to_thread.run_sync(_purge_sessions)
    if purged_entries:
        logger.debug("Purged %s expired rate-limit entries", purged_entries)
    return purged_entries, purged_sessions


__all__ = [
    "ReminderScheduler",
    "next_minute_boundary",
    "run_housekeeping",
    "sweep_once",
]
