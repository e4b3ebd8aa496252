"""Use case for reading back the decrypted relay URL."""

from sqlalchemy.orm import Session

from app.infrastructure.encryption import decrypt
from app.infrastructure.repositories import UserRepository


def get_relay_url(session: Session, user_id: str) -> str | None:
    """Return the stored relay URL, ``None`` when nothing is configured.

    Raises ``ValueError`` when the stored value cannot be decrypted.
    """

    user = UserRepository(session).get(user_id)
    if user is None:
        raise ValueError("User not found")

    if not user.has_relay_configuration:
        return None

    relay_url = decrypt(user.relay_url_encrypted, user.relay_encryption_iv)
    if relay_url is None:
        raise ValueError("Stored Ntfy URL could not be decrypted")
    return relay_url
