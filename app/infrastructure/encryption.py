"""Symmetric encryption for secrets stored at rest (relay endpoint URLs).

AES-256-GCM with a fresh random IV per call. The 16 byte authentication tag is
appended to the ciphertext, so the hex ciphertext together with the hex IV is all
that needs to be persisted.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.config import get_settings

logger = logging.getLogger(__name__)

IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
KEY_HEX_LENGTH = 64

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True)
class EncryptedValue:
    """Hex encoded ciphertext (tag included) and the IV it was produced with."""

    ciphertext: str
    iv: str


def _get_encryption_key() -> bytes | None:
    """Return the configured 256-bit key, logging why it is unusable otherwise."""

    key = (get_settings().notification_encryption_key or "").strip()
    if not key:
        logger.error("NOTIFICATION_ENCRYPTION_KEY not configured")
        return None
    if len(key) != KEY_HEX_LENGTH or not _HEX_PATTERN.match(key):
        logger.error("NOTIFICATION_ENCRYPTION_KEY must be %s hex characters (32 bytes)", KEY_HEX_LENGTH)
        return None
    return bytes.fromhex(key)


def encrypt(plaintext: str) -> EncryptedValue | None:
    """Encrypt ``plaintext``; ``None`` means the write path must be aborted."""

    key = _get_encryption_key()
    if key is None:
        return None

    iv = os.urandom(IV_LENGTH)
    try:
        sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
    except (ValueError, OverflowError) as exc:
        logger.error("Failed to encrypt value: %s", exc)
        return None
    return EncryptedValue(ciphertext=sealed.hex(), iv=iv.hex())


def decrypt(ciphertext: str, iv_hex: str) -> str | None:
    """Decrypt a value produced by :func:`encrypt`.

    Any authentication failure (tampered data, wrong key, corrupted IV) yields
    ``None``; a wrong plaintext is never returned.
    """

    key = _get_encryption_key()
    if key is None:
        return None

    try:
        iv = bytes.fromhex(iv_hex)
        sealed = bytes.fromhex(ciphertext)
        if len(sealed) < AUTH_TAG_LENGTH or not iv:
            raise ValueError("ciphertext or IV too short")
        plaintext = AESGCM(key).decrypt(iv, sealed, None)
        return plaintext.decode("utf-8")
    except InvalidTag:
        logger.error("Failed to decrypt value: authentication tag mismatch")
        return None
    except (TypeError, ValueError) as exc:
        logger.error("Failed to decrypt value: %s", exc)
        return None


def generate_encryption_key() -> str:
    """Return a fresh key suitable for ``NOTIFICATION_ENCRYPTION_KEY``."""

    return os.urandom(KEY_HEX_LENGTH // 2).hex()


__all__ = [
    "EncryptedValue",
    "decrypt",
    "encrypt",
    "generate_encryption_key",
]
