"""Composition of reminder and test notification payloads."""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime

from app.domain.entities import Habit, NotificationPayload
from app.utils import now_utc

MOTIVATIONAL_PHRASES: tuple[str, ...] = (
    "You've got this! 💪",
    "Small steps lead to big changes! 🌟",
    "Keep building your streak! 🔥",
    "Progress, not perfection! ✨",
    "You're doing great! 🚀",
    "Make today count! 💫",
)

ALL_COMPLETE_TITLE = "🎉 All habits completed!"
ALL_COMPLETE_BODY = (
    "Great job! You've completed all your habits for today. Keep up the momentum!"
)


def compose_reminder_message(
    incomplete_habits: Sequence[Habit],
    *,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> NotificationPayload:
    """Build the daily reminder for ``incomplete_habits``.

    The motivational phrase is picked at random on purpose so consecutive reminders
    do not read the same.
    """

    count = len(incomplete_habits)
    if count == 0:
        return NotificationPayload(
            title=ALL_COMPLETE_TITLE,
            body=ALL_COMPLETE_BODY,
            tag="habit-reminder-complete",
        )

    phrase = (rng or random).choice(MOTIVATIONAL_PHRASES)
    habit_list = "\n".join(f"• {habit.name}" for habit in incomplete_habits)
    title = "📝 1 habit waiting for you" if count == 1 else f"📝 {count} habits waiting for you"

    return NotificationPayload(
        title=title,
        body=f"{phrase}\n\n{habit_list}",
        data={
            "type": "reminder",
            "habitCount": count,
            "timestamp": (now or now_utc()).isoformat(),
        },
    )


def build_test_message() -> NotificationPayload:
    return NotificationPayload(
        title="🎉 Test Notification",
        body=(
            "Your reminders are working! You'll receive daily reminders at your "
            "scheduled time."
        ),
        tag="test-notification",
    )


__all__ = [
    "ALL_COMPLETE_BODY",
    "ALL_COMPLETE_TITLE",
    "MOTIVATIONAL_PHRASES",
    "build_test_message",
    "compose_reminder_message",
]
