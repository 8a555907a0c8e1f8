"""Account removal: by an administrator, or by the inactivity sweep.

Removing an account zeroes the stock of the products it listed (they stay in
the catalog), emails the owner, then deletes the user's sessions, cart and
user record. Administrators are never removed.
"""

from datetime import datetime, timedelta

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront import config
from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.mail.dispatch import send_email
from storefront.mail.templates import AccountDeletedByAdminTemplate, AccountDeletedForInactivityTemplate
from storefront.product.product import Product
from storefront.user.session import end_sessions_for
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@storefront.command(part_of="User")
class DeleteInactiveUsers:
    inactivity_days = Integer(min_value=0)


def remove_account(user: User, notification: dict) -> None:
    zeroed = current_domain.repository_for(Product).zero_stock_for_owner(str(user.id))
    send_email(user.email, **notification)

    end_sessions_for(user.id)

    if user.cart_id:
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo._dao.query.filter(id=str(user.cart_id)).all().first
        if cart is not None:
            cart_repo._dao.delete(cart)

    current_domain.repository_for(User)._dao.delete(user)
    logger.info("Account removed", user_id=str(user.id), products_zeroed=zeroed)


@storefront.command_handler(part_of=User)
class AccountRemovalHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        user = current_domain.repository_for(User).get(command.user_id)
        if user.is_admin():
            raise InvalidOperationError("Administrator accounts cannot be deleted")

        remove_account(user, AccountDeletedByAdminTemplate.render({}))

    @handle(DeleteInactiveUsers)
    def delete_inactive_users(self, command):
        days = config.INACTIVITY_DAYS if command.inactivity_days is None else command.inactivity_days
        cutoff = datetime.now() - timedelta(days=days)

        stale = current_domain.repository_for(User).inactive_since(cutoff)
        notification = AccountDeletedForInactivityTemplate.render({"days": days})
        for user in stale:
            remove_account(user, notification)

        logger.info("Inactive accounts swept", removed=len(stale), cutoff=cutoff.isoformat())
        return len(stale)
