"""Security helpers for hashing and token generation."""

import base64
import hashlib
import secrets

from passlib.context import CryptContext

# ---- Password hashing (passlib) ----
# "rounds" trades login latency for brute-force cost; 310000 follows current guidance.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

TOKEN_BYTES = 20
VERIFICATION_CODE_DIGITS = 6


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


# ---- Opaque tokens ----


def generate_token() -> str:
    """Return 160 random bits encoded as lowercase, unpadded base32."""

    raw = secrets.token_bytes(TOKEN_BYTES)
    return base64.b32encode(raw).decode("ascii").rstrip("=").lower()


def generate_session_token() -> str:
    return generate_token()


def generate_csrf_token() -> str:
    return generate_token()


def hash_session_token(token: str) -> str:
    """Derive the stored session id from the cookie token."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def constant_time_equals(expected: str | None, provided: str | None) -> bool:
    """Compare two secrets without leaking the position of the first mismatch.

    A length mismatch returns early; the length of these tokens is not secret.
    """

    if not isinstance(expected, str) or not isinstance(provided, str):
        return False
    expected_bytes = expected.encode("utf-8")
    provided_bytes = provided.encode("utf-8")
    if len(expected_bytes) != len(provided_bytes):
        return False
    result = 0
    for left, right in zip(expected_bytes, provided_bytes):
        result |= left ^ right
    return result == 0


def generate_verification_code() -> str:
    """Return a six digit numeric code (never starting with 0) for email verification."""

    upper = 10**VERIFICATION_CODE_DIGITS
    return str(secrets.randbelow(upper - upper // 10) + upper // 10)
