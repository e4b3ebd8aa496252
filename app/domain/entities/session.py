"""Domain entities describing authenticated sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User


@dataclass
class UserSession:
    """Server side record of a login, keyed by the hash of its token."""

    id: str
    user_id: str
    expires_at: datetime
    csrf_token: str


@dataclass(frozen=True)
class SessionValidation:
    """Result of validating a session token.

    ``fresh`` is ``True`` when the expiration was extended during validation and the
    caller has to re-issue the session cookies.
    """

    session: UserSession | None
    user: User | None
    fresh: bool = False

    @classmethod
    def invalid(cls) -> "SessionValidation":
        return cls(session=None, user=None, fresh=False)

    @property
    def is_valid(self) -> bool:
        return self.session is not None and self.user is not None


__all__ = ["SessionValidation", "UserSession"]
