"""Domain entity representing a habit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Habit:
    """The subset of a habit the reminder flow needs."""

    id: str
    user_id: str
    name: str
    frequency: str = "daily"
    sort_order: int = 0


__all__ = ["Habit"]
