"""ORM models used by the application infrastructure."""

from .habit import HabitModel, HabitStampModel
from .session import UserSessionModel
from .user import UserModel
from .verification_code import EmailVerificationCodeModel

__all__ = [
    "EmailVerificationCodeModel",
    "HabitModel",
    "HabitStampModel",
    "UserModel",
    "UserSessionModel",
]
