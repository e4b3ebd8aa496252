"""Repository implementations for infrastructure layer."""

from .habit_repository import HabitRepository
from .session_repository import SessionRepository
from .user_repository import UserRepository
from .verification_code_repository import VerificationCode, VerificationCodeRepository

__all__ = [
    "HabitRepository",
    "SessionRepository",
    "UserRepository",
    "VerificationCode",
    "VerificationCodeRepository",
]
