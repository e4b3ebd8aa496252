"""Helpers applying the session and CSRF cookie attributes."""

from __future__ import annotations

from datetime import datetime

from starlette.responses import Response

from app.config import Settings, get_settings
from app.domain.entities import UserSession


def set_session_cookie(
    response: Response, token: str, expires_at: datetime, settings: Settings | None = None
) -> None:
    settings = settings or get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        token,
        expires=expires_at,
        path="/",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="lax",
    )


def set_csrf_cookie(
    response: Response, csrf_token: str, expires_at: datetime, settings: Settings | None = None
) -> None:
    """The CSRF cookie stays readable by scripts so the front end can echo it."""

    settings = settings or get_settings()
    response.set_cookie(
        settings.csrf_cookie_name,
        csrf_token,
        expires=expires_at,
        path="/",
        secure=settings.secure_cookies,
        httponly=False,
        samesite="strict",
    )


def delete_session_cookie(response: Response, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="lax",
    )


def delete_csrf_cookie(response: Response, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    response.delete_cookie(
        settings.csrf_cookie_name,
        path="/",
        secure=settings.secure_cookies,
        httponly=False,
        samesite="strict",
    )


def issue_session_cookies(response: Response, token: str, user_session: UserSession) -> None:
    set_session_cookie(response, token, user_session.expires_at)
    set_csrf_cookie(response, user_session.csrf_token, user_session.expires_at)


def clear_session_cookies(response: Response) -> None:
    delete_session_cookie(response)
    delete_csrf_cookie(response)


def sets_cookie(response: Response, name: str) -> bool:
    """Return ``True`` when ``response`` already carries a ``Set-Cookie`` for ``name``."""

    prefix = f"{name}="
    return any(
        value.decode("latin-1").startswith(prefix)
        for key, value in response.raw_headers
        if key.lower() == b"set-cookie"
    )


__all__ = [
    "clear_session_cookies",
    "delete_csrf_cookie",
    "delete_session_cookie",
    "issue_session_cookies",
    "set_csrf_cookie",
    "set_session_cookie",
    "sets_cookie",
]
