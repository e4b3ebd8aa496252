"""Pydantic models for reminder notification settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PushSubscriptionRequest(BaseModel):
    """Body posted by the service worker after ``pushManager.subscribe``."""

    subscription: dict[str, Any] = Field(
        ..., description="PushSubscription.toJSON(): endpoint plus p256dh/auth keys"
    )


class NotificationPreferencesUpdate(BaseModel):
    reminder_enabled: bool
    reminder_service: str | None = Field(default=None, description="push or ntfy")
    reminder_time: str | None = Field(default=None, description="Local time as HH:MM")
    relay_url: str | None = Field(
        default=None, description="Relay topic URL, credentials may be embedded"
    )

    model_config = ConfigDict(extra="forbid")


class RelayUrlRead(BaseModel):
    relay_url: str | None


class VapidPublicKeyRead(BaseModel):
    public_key: str | None


class OperationResult(BaseModel):
    success: bool = True


__all__ = [
    "NotificationPreferencesUpdate",
    "OperationResult",
    "PushSubscriptionRequest",
    "RelayUrlRead",
    "VapidPublicKeyRead",
]
