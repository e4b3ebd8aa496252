"""Print fresh keys for the notification settings, ready to paste into ``.env``."""

from __future__ import annotations

import argparse
import base64

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from app.infrastructure.encryption import generate_encryption_key


def _urlsafe_b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def generate_vapid_keypair() -> tuple[str, str]:
    """Return ``(public_key, private_key)`` for a new P-256 keypair.

    The public key is the uncompressed point and the private key the raw 32 byte
    scalar, both URL-safe base64 without padding as expected by browsers and pywebpush.
    """

    private_key = ec.generate_private_key(ec.SECP256R1())
    public_bytes = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    private_bytes = private_key.private_numbers().private_value.to_bytes(32, "big")
    return _urlsafe_b64(public_bytes), _urlsafe_b64(private_bytes)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate the encryption key and VAPID keypair used for reminders.",
    )
    parser.add_argument(
        "--email",
        default="noreply@example.com",
        help="Contact address written as VAPID_EMAIL (default: noreply@example.com)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    public_key, private_key = generate_vapid_keypair()

    print(f"NOTIFICATION_ENCRYPTION_KEY={generate_encryption_key()}")
    print(f"VAPID_PUBLIC_KEY={public_key}")
    print(f"VAPID_PRIVATE_KEY={private_key}")
    print(f"VAPID_EMAIL={args.email}")


if __name__ == "__main__":
    main()
