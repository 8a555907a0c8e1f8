"""Cart read model: lines resolved to product records, with totals."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.product.product import Product


def cart_total(lines: list[dict]) -> float:
    return round(sum(line["subtotal"] for line in lines), 2)


def cart_details(cart_id) -> dict:
    """Return the cart with each line's product and subtotal.

    Lines whose product no longer exists are kept with ``product`` set to
    ``None`` and a zero subtotal.
    """
    cart = current_domain.repository_for(Cart).get(cart_id)
    product_dao = current_domain.repository_for(Product)._dao

    lines = []
    for item in cart.items:
        product = product_dao.query.filter(id=str(item.product_id)).all().first
        lines.append(
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "product": product.to_payload() if product else None,
                "subtotal": round(product.price * item.quantity, 2) if product else 0.0,
            }
        )

    return {
        "id": str(cart.id),
        "owner_id": str(cart.owner_id) if cart.owner_id else None,
        "items": lines,
        "total": cart_total(lines),
    }
