"""SQLAlchemy model for email verification codes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base
from app.utils import ensure_naive_utc, now_utc


def _created_now():
    return ensure_naive_utc(now_utc())


class EmailVerificationCodeModel(Base):
    """Short lived numeric code mailed to a user after signup."""

    __tablename__ = "email_verification_code"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_created_now)


__all__ = ["EmailVerificationCodeModel"]
