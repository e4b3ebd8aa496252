"""User schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import User


class UserRead(BaseModel):
    id: str
    email: str
    email_verified: bool
    display_name: str | None = None
    timezone: str
    week_start: str
    reminder_enabled: bool
    reminder_service: str | None = None
    reminder_time: str | None = None
    has_push_subscription: bool
    has_relay_url: bool
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            email_verified=user.email_verified,
            display_name=user.display_name,
            timezone=user.timezone,
            week_start=user.week_start,
            reminder_enabled=user.reminder_enabled,
            reminder_service=user.reminder_service.value if user.reminder_service else None,
            reminder_time=user.reminder_time,
            has_push_subscription=bool(user.push_subscription),
            has_relay_url=user.has_relay_configuration,
            created_at=user.created_at,
        )


class TimezoneUpdate(BaseModel):
    timezone: str = Field(..., description="IANA zone name, e.g. Europe/Madrid")

    model_config = ConfigDict(extra="forbid")


class ProfileUpdate(BaseModel):
    display_name: str
    timezone: str
    week_start: str = Field(..., description="Lowercase weekday name, e.g. monday")

    model_config = ConfigDict(extra="forbid")


class EmailUpdate(BaseModel):
    new_email: str
    password: str = Field(..., description="Current password, re-checked before the change")

    model_config = ConfigDict(extra="forbid")


__all__ = ["EmailUpdate", "ProfileUpdate", "TimezoneUpdate", "UserRead"]
