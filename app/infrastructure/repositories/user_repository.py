"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import ReminderService, User
from app.infrastructure.models import UserModel
from app.utils import ensure_naive_utc, ensure_utc


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: str) -> None:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def list_with_reminders_enabled(self) -> Sequence[User]:
        """Return users whose reminder preferences make them scheduler candidates."""

        query = (
            self.session.query(UserModel)
            .filter(UserModel.reminder_enabled.is_(True))
            .filter(UserModel.reminder_service.isnot(None))
            .filter(UserModel.reminder_time.isnot(None))
        )
        return [self._to_entity(model) for model in query.all()]

    def set_push_subscription(self, user_id: str, subscription: dict[str, Any]) -> None:
        self._update_columns(user_id, {UserModel.push_subscription: subscription})

    def clear_push_subscription(self, user_id: str) -> None:
        """Drop a stale subscription with a single-row update."""

        self._update_columns(user_id, {UserModel.push_subscription: None})

    def mark_email_verified(self, user_id: str) -> None:
        self._update_columns(user_id, {UserModel.email_verified: True})

    def _update_columns(self, user_id: str, values: dict) -> None:
        updated = (
            self.session.query(UserModel)
            .filter(UserModel.id == user_id)
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        if not updated:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            email_verified=bool(model.email_verified),
            display_name=model.display_name,
            timezone=model.timezone or "UTC",
            week_start=model.week_start or "monday",
            reminder_enabled=bool(model.reminder_enabled),
            reminder_service=ReminderService.parse(model.reminder_service),
            reminder_time=model.reminder_time,
            push_subscription=model.push_subscription,
            relay_url_encrypted=model.relay_url_encrypted,
            relay_encryption_iv=model.relay_encryption_iv,
            created_at=ensure_utc(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            if user.id is not None:
                model.id = user.id
            if user.created_at is not None:
                model.created_at = ensure_naive_utc(user.created_at)
        model.email = user.email
        model.password_hash = user.password_hash
        model.email_verified = user.email_verified
        model.display_name = user.display_name
        model.timezone = user.timezone
        model.week_start = user.week_start
        model.reminder_enabled = user.reminder_enabled
        model.reminder_service = (
            user.reminder_service.value if user.reminder_service is not None else None
        )
        model.reminder_time = user.reminder_time
        model.push_subscription = user.push_subscription
        model.relay_url_encrypted = user.relay_url_encrypted
        model.relay_encryption_iv = user.relay_encryption_iv


__all__ = ["UserRepository"]
