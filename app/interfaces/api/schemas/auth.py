"""Authentication related schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .user import UserRead


class SignupRequest(BaseModel):
    email: str = Field(..., description="Address used to sign in")
    password: str


class SignupResponse(BaseModel):
    user_id: str
    requires_verification: bool = Field(
        ..., description="True when a verification code was emailed instead of signing in"
    )


class LoginRequest(BaseModel):
    email: str
    password: str
    verification_code: str | None = Field(
        default=None, description="Six digit code, only needed for unverified accounts"
    )


class SessionRead(BaseModel):
    user: UserRead
    csrf_token: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


__all__ = [
    "ChangePasswordRequest",
    "LoginRequest",
    "SessionRead",
    "SignupRequest",
    "SignupResponse",
]
