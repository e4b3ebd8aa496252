"""Resolve the session cookie on every request and keep the cookies in sync."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.application.use_cases.sessions import validate_session
from app.config import get_settings
from app.domain.entities import SessionValidation
from app.infrastructure.database import SessionLocal

from .cookies import clear_session_cookies, issue_session_cookies, sets_cookie


class SessionMiddleware(BaseHTTPMiddleware):
    """Expose ``request.state.user`` and ``request.state.session``.

    Refreshed sessions get both cookies re-issued with the new expiry; a cookie that
    no longer maps to a session is cleared. Handlers that write the session cookie
    themselves (login, logout, password change) take precedence.
    """

    def __init__(
        self, app: ASGIApp, *, session_factory: Callable[[], Session] | None = None
    ) -> None:
        super().__init__(app)
        self._session_factory = session_factory

    def _validate(self, token: str) -> SessionValidation:
        factory = self._session_factory or SessionLocal
        with factory() as db:
            return validate_session(db, token)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cookie_name = get_settings().session_cookie_name
        token = request.cookies.get(cookie_name)

        validation = SessionValidation.invalid()
        if token:
            validation = await run_in_threadpool(self._validate, token)
        request.state.user = validation.user
        request.state.session = validation.session
        request.state.session_token = token if validation.is_valid else None

        response = await call_next(request)

        if not token or sets_cookie(response, cookie_name):
            return response
        if not validation.is_valid:
            clear_session_cookies(response)
        elif validation.fresh:
            issue_session_cookies(response, token, validation.session)
        return response


__all__ = ["SessionMiddleware"]
