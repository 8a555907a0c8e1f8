"""Fire-and-forget email delivery."""

import structlog

from storefront.mail import get_mailer
from storefront.mail.port import SENT

logger = structlog.get_logger(__name__)


def send_email(to: str, subject: str, body: str, html_body: str | None = None) -> bool:
    """Send an email through the active mailer.

    Never raises: delivery failures are logged and reported as ``False`` so
    that callers can carry on with the business operation that triggered
    the message.
    """
    if not to:
        logger.warning("Email skipped, no recipient", subject=subject)
        return False

    try:
        result = get_mailer().send(to=to, subject=subject, body=body, html_body=html_body)
    except Exception as exc:
        logger.error("Email dispatch failed", to=to, subject=subject, error=str(exc))
        return False

    if result.get("status") != SENT:
        logger.error("Email delivery failed", to=to, subject=subject, error=result.get("error"))
        return False

    logger.info("Email sent", to=to, subject=subject, message_id=result.get("message_id"))
    return True
