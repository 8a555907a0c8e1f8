"""Mailer registry.

Provides get_mailer() / set_mailer() / reset_mailer() to swap implementations:
- FakeEmailAdapter for development and testing (default)
- SMTPEmailAdapter when STOREFRONT_EMAIL_BACKEND=smtp
"""

from storefront import config
from storefront.mail.port import EmailPort

_current_mailer: EmailPort | None = None


def get_mailer() -> EmailPort:
    """Return the configured mailer (singleton)."""
    global _current_mailer
    if _current_mailer is None:
        if config.EMAIL_BACKEND == "smtp":
            from storefront.mail.smtp_adapter import SMTPEmailAdapter

            _current_mailer = SMTPEmailAdapter(
                host=config.SMTP_HOST,
                port=config.SMTP_PORT,
                sender=config.EMAIL_FROM,
                username=config.SMTP_USER,
                password=config.SMTP_PASSWORD,
            )
        elif config.EMAIL_BACKEND == "fake":
            from storefront.mail.fake_adapter import FakeEmailAdapter

            _current_mailer = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email backend: {config.EMAIL_BACKEND}")
    return _current_mailer


def set_mailer(mailer: EmailPort) -> None:
    """Override the active mailer (useful for tests)."""
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    """Reset to the configured default mailer."""
    global _current_mailer
    _current_mailer = None
