"""SQLAlchemy model for authenticated sessions."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class UserSessionModel(Base):
    """A session row keyed by the SHA-256 of the cookie token."""

    __tablename__ = "session"

    id = Column(String(64), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = Column(DateTime, nullable=False, index=True)
    csrf_token = Column(String(64), nullable=False)

    user = relationship("UserModel", back_populates="sessions", lazy="joined")


__all__ = ["UserSessionModel"]
