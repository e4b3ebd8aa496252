"""Persistence layer for authenticated sessions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from app.domain.entities import User, UserSession
from app.infrastructure.models import UserSessionModel
from app.utils import ensure_naive_utc, ensure_utc

from .user_repository import UserRepository


class SessionRepository:
    """Single-row CRUD for :class:`UserSession` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, user_session: UserSession) -> UserSession:
        model = UserSessionModel(
            id=user_session.id,
            user_id=user_session.user_id,
            expires_at=ensure_naive_utc(user_session.expires_at),
            csrf_token=user_session.csrf_token,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_with_user(self, session_id: str) -> tuple[UserSession, User] | None:
        """Return the session joined with its owner, or ``None``."""

        model = (
            self.session.query(UserSessionModel)
            .options(joinedload(UserSessionModel.user))
            .filter(UserSessionModel.id == session_id)
            .first()
        )
        if model is None or model.user is None:
            return None
        return self._to_entity(model), UserRepository._to_entity(model.user)

    def update_expiration(self, session_id: str, expires_at: datetime) -> None:
        self.session.query(UserSessionModel).filter(
            UserSessionModel.id == session_id
        ).update(
            {UserSessionModel.expires_at: ensure_naive_utc(expires_at)},
            synchronize_session=False,
        )
        self.session.commit()

    def delete(self, session_id: str) -> None:
        self.session.query(UserSessionModel).filter(
            UserSessionModel.id == session_id
        ).delete(synchronize_session=False)
        self.session.commit()

    def delete_for_user(self, user_id: str) -> int:
        deleted = (
            self.session.query(UserSessionModel)
            .filter(UserSessionModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_expired(self, now: datetime) -> int:
        deleted = (
            self.session.query(UserSessionModel)
            .filter(UserSessionModel.expires_at <= ensure_naive_utc(now))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _to_entity(model: UserSessionModel) -> UserSession:
        return UserSession(
            id=model.id,
            user_id=model.user_id,
            expires_at=ensure_utc(model.expires_at),
            csrf_token=model.csrf_token,
        )


__all__ = ["SessionRepository"]
