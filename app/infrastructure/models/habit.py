"""SQLAlchemy models for habits and their daily completion stamps."""

from uuid import uuid4

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class HabitModel(Base):
    """Database representation of a tracked habit."""

    __tablename__ = "habit"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False, default="#6750a4")
    frequency = Column(String(10), nullable=False, default="daily")
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    user = relationship("UserModel", back_populates="habits")
    stamps = relationship(
        "HabitStampModel",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class HabitStampModel(Base):
    """A completion mark for one habit on one local calendar day."""

    __tablename__ = "habit_stamp"
    __table_args__ = (UniqueConstraint("habit_id", "day", name="uq_habit_stamp_day"),)

    id = Column(Integer, primary_key=True, index=True)
    habit_id = Column(
        String(36),
        ForeignKey("habit.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day = Column(Date, nullable=False)
    value = Column(Integer, nullable=False, default=1)

    habit = relationship("HabitModel", back_populates="stamps")


__all__ = ["HabitModel", "HabitStampModel"]
