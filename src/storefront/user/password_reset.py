"""Password reset by emailed, time-limited token."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.exceptions import AuthExpiredError
from storefront.mail.dispatch import send_email
from storefront.mail.templates import PasswordResetTemplate
from storefront.shared.security import create_token, decode_token
from storefront.user.user import User

logger = structlog.get_logger(__name__)

RESET_PURPOSE = "password_reset"


@storefront.command(part_of="User")
class RequestPasswordReset:
    email = String(required=True, max_length=254)


@storefront.command(part_of="User")
class ResetPassword:
    token = String(required=True)
    password = String(required=True, max_length=128)
    confirm_password = String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class PasswordResetHandler:
    @handle(RequestPasswordReset)
    def request_reset(self, command):
        user = current_domain.repository_for(User).find_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError({"email": [f"No account is registered for {command.email}"]})

        token = create_token({"sub": str(user.id), "purpose": RESET_PURPOSE}, config.RESET_TOKEN_TTL_MINUTES)
        link = f"{config.BASE_URL}/api/sessions/reset-password/{token}"
        send_email(
            user.email,
            **PasswordResetTemplate.render({"reset_link": link, "expires_minutes": config.RESET_TOKEN_TTL_MINUTES}),
        )

        logger.info("Password reset requested", user_id=str(user.id))
        return token

    @handle(ResetPassword)
    def reset_password(self, command):
        claims = decode_token(command.token)
        if claims.get("purpose") != RESET_PURPOSE:
            raise AuthExpiredError({"token": ["Token is not a password reset token"]})

        if command.password != command.confirm_password:
            raise ValidationError({"confirm_password": ["Passwords do not match"]})

        repo = current_domain.repository_for(User)
        user = repo.find_by_id(claims.get("sub"))
        if user is None:
            raise AuthExpiredError({"token": ["Account no longer exists"]})

        user.set_password(command.password)
        repo.add(user)

        logger.info("Password reset", user_id=str(user.id))
