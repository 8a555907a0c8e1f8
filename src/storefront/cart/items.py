"""Cart line management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Dict, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.exceptions import ForbiddenError, InsufficientStockError
from storefront.product.product import Product


@storefront.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    requester_id = Identifier()  # premium owners may not buy their own listings


@storefront.command(part_of="Cart")
class UpdateCartItemQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ReplaceCartQuantities:
    """Set several line quantities at once, keyed by product id."""

    cart_id = Identifier(required=True)
    quantities = Dict(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        if command.requester_id and product.is_owned_by(command.requester_id):
            raise ForbiddenError({"product_id": ["You cannot add your own product to your cart"]})

        if command.quantity > product.stock:
            raise InsufficientStockError(
                {"quantity": [f"Only {product.stock} units of {product.name} are in stock"]}
            )

        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.update_item_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

    @handle(ReplaceCartQuantities)
    def replace_cart_quantities(self, command):
        quantities = {}
        for product_id, quantity in (command.quantities or {}).items():
            try:
                quantities[str(product_id)] = int(quantity)
            except (TypeError, ValueError):
                raise ValidationError({"quantities": [f"Invalid quantity for product {product_id}"]}) from None

        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.replace_quantities(quantities)
        repo.add(cart)
