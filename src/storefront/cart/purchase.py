"""Checkout: turns the purchasable lines of a cart into a Ticket.

Each line is checked against current stock and then claimed with a
conditional decrement, so concurrent purchases of the same product can
never sell more units than exist. Lines that cannot be claimed stay in the
cart and are reported back as unavailable.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.ticket.ticket import Ticket

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class PurchaseCart:
    cart_id = Identifier(required=True)
    purchaser_email = String(required=True, max_length=254)


def _unavailable_line(item, product=None) -> dict:
    return {
        "product_id": str(item.product_id),
        "name": product.name if product else None,
        "quantity": item.quantity,
        "stock": product.stock if product else 0,
    }


def _snapshot(product: Product, quantity: int) -> dict:
    return {
        "product_id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "quantity": quantity,
    }


@storefront.command_handler(part_of=Cart)
class PurchaseCartHandler:
    @handle(PurchaseCart)
    def purchase(self, command):
        """Returns ``{"ticket": <payload or None>, "unavailable": [...]}``."""
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)
        cart = cart_repo.get(command.cart_id)

        candidates = []
        unavailable = []
        for item in cart.items:
            product = product_repo._dao.query.filter(id=str(item.product_id)).all().first
            if product is None or item.quantity > product.stock:
                unavailable.append(_unavailable_line(item, product))
            else:
                candidates.append(item)

        purchased = []
        for item in candidates:
            product = product_repo.decrement_stock(item.product_id, item.quantity)
            if product is None:
                # Stock moved since the partition; report what is left now
                latest = product_repo._dao.query.filter(id=str(item.product_id)).all().first
                unavailable.append(_unavailable_line(item, latest))
                continue
            purchased.append(_snapshot(product, item.quantity))

        if not purchased:
            logger.info(
                "Purchase rejected, nothing available",
                cart_id=str(cart.id),
                unavailable=len(unavailable),
            )
            return {"ticket": None, "unavailable": unavailable}

        ticket = Ticket.issue(cart_id=cart.id, purchaser=command.purchaser_email, lines=purchased)
        current_domain.repository_for(Ticket).add(ticket)

        from storefront.user.user import User

        user_repo = current_domain.repository_for(User)
        user = user_repo.find_by_email(command.purchaser_email)
        if user is not None:
            user.record_purchase(ticket.id)
            user_repo.add(user)

        cart.remove_products([line["product_id"] for line in purchased])
        cart_repo.add(cart)

        logger.info(
            "Purchase completed",
            cart_id=str(cart.id),
            ticket_code=ticket.code,
            amount=ticket.amount,
            unavailable=len(unavailable),
        )
        return {"ticket": ticket.to_payload(), "unavailable": unavailable}
