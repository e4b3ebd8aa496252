"""Read-only queries over habits used by the reminder flow."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import Habit
from app.infrastructure.models import HabitModel, HabitStampModel


class HabitRepository:
    """Query habits and their completion state for a given day."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: str) -> Sequence[Habit]:
        query = (
            self.session.query(HabitModel)
            .filter(HabitModel.user_id == user_id)
            .order_by(HabitModel.sort_order.asc(), HabitModel.created_at.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_incomplete_for_day(self, user_id: str, day: date) -> Sequence[Habit]:
        """Return the user's habits without a completed stamp on ``day``.

        Weekly and monthly habits are treated like daily ones: the reminder only
        reports what has not been done today.
        """

        completed = (
            self.session.query(HabitStampModel.habit_id)
            .join(HabitModel, HabitStampModel.habit_id == HabitModel.id)
            .filter(HabitModel.user_id == user_id)
            .filter(HabitStampModel.day == day)
            .filter(HabitStampModel.value == 1)
        )
        completed_ids = {habit_id for (habit_id,) in completed.all()}
        return [habit for habit in self.list_for_user(user_id) if habit.id not in completed_ids]

    @staticmethod
    def _to_entity(model: HabitModel) -> Habit:
        return Habit(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            frequency=model.frequency,
            sort_order=model.sort_order or 0,
        )


__all__ = ["HabitRepository"]
