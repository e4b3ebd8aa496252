"""Persistence helpers for email verification codes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.models import EmailVerificationCodeModel
from app.utils import ensure_naive_utc, ensure_utc


@dataclass(frozen=True)
class VerificationCode:
    code: str
    expires_at: datetime


class VerificationCodeRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, user_id: str, code: str, expires_at: datetime) -> None:
        self.session.add(
            EmailVerificationCodeModel(
                user_id=user_id,
                code=code,
                expires_at=ensure_naive_utc(expires_at),
            )
        )
        self.session.commit()

    def get_latest(self, user_id: str) -> VerificationCode | None:
        model = (
            self.session.query(EmailVerificationCodeModel)
            .filter(EmailVerificationCodeModel.user_id == user_id)
            .order_by(
                EmailVerificationCodeModel.created_at.desc(),
                EmailVerificationCodeModel.id.desc(),
            )
            .first()
        )
        if model is None:
            return None
        return VerificationCode(code=model.code, expires_at=ensure_utc(model.expires_at))

    def delete_for_user(self, user_id: str) -> None:
        self.session.query(EmailVerificationCodeModel).filter(
            EmailVerificationCodeModel.user_id == user_id
        ).delete(synchronize_session=False)
        self.session.commit()


__all__ = ["VerificationCode", "VerificationCodeRepository"]
