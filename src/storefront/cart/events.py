"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its line was incremented."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    """The quantity of a cart line was replaced."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A product line was taken out of the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    removed_items = Integer(required=True)
