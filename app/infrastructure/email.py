"""Transactional email (verification codes) sent through SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_body(body: Any) -> str | None:
    """Return the error messages contained in a SendGrid response body."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not body:
        return None
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None

    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        messages = [
            str(item["message"])
            for item in body["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    return json.dumps(body, default=str)


def send_email(subject: str, html_content: str, recipient: str, *, text_content: str | None = None) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        details = _describe_sendgrid_body(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed (status %s): %s", status_code, details or exc
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        logger.error(
            "SendGrid API responded with status %s: %s",
            status_code,
            _describe_sendgrid_body(getattr(response, "body", None)),
        )
        return False

    return True


def send_verification_email(email: str, code: str, *, ttl_minutes: int) -> bool:
    """Mail the signup verification ``code`` to ``email``."""

    subject = "Verify your email"
    text_content = (
        f"Your verification code is: {code}\n\n"
        f"This code will expire in {ttl_minutes} minutes."
    )
    html_content = (
        '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h1>Verify your email</h1>"
        "<p>Your verification code is:</p>"
        '<div style="background: #f5f5f5; padding: 20px; text-align: center; '
        'font-size: 32px; font-weight: bold; letter-spacing: 8px; margin: 20px 0;">'
        f"{code}"
        "</div>"
        f'<p style="color: #666;">This code will expire in {ttl_minutes} minutes.</p>'
        "</div>"
    )
    return send_email(subject, html_content, email, text_content=text_content)


__all__ = ["send_email", "send_verification_email"]
