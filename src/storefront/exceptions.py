"""Storefront-specific error kinds layered on Protean's exception hierarchy."""

from protean.exceptions import ProteanException, ValidationError


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the product's current stock."""


class DuplicateEmailError(ValidationError):
    """An account with the given email already exists."""


class AuthExpiredError(ProteanException):
    """Credentials, session or token are missing, invalid or past their TTL."""


class ForbiddenError(ProteanException):
    """The authenticated principal lacks the role required for an action."""
