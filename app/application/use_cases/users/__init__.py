"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .change_password import change_password
from .register_user import register_user
from .update_email import update_email
from .update_profile import update_profile
from .update_timezone import update_timezone
from .validators import is_valid_email, normalize_email
from .verify_email import confirm_verification_code, issue_verification_code

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "change_password",
    "confirm_verification_code",
    "is_valid_email",
    "issue_verification_code",
    "normalize_email",
    "register_user",
    "update_email",
    "update_profile",
    "update_timezone",
]
