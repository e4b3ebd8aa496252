"""SQLAlchemy model for the user table."""

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text, func
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


def _new_id() -> str:
    return str(uuid4())


class UserModel(Base):
    """Database representation of an account and its reminder preferences."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    email_verified = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    display_name = Column(String(100), nullable=True)
    timezone = Column(String(64), nullable=False, default="UTC", server_default="UTC")
    week_start = Column(String(10), nullable=False, default="monday", server_default="monday")
    reminder_enabled = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
        index=True,
    )
    reminder_service = Column(String(20), nullable=True)
    reminder_time = Column(String(5), nullable=True)
    push_subscription = Column(JSON(none_as_null=True), nullable=True)
    relay_url_encrypted = Column(Text, nullable=True)
    relay_encryption_iv = Column(String(32), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    sessions = relationship(
        "UserSessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    habits = relationship(
        "HabitModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["UserModel"]
