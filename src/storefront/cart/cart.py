"""Cart aggregate: one per user, provisioned at registration.

A cart holds at most one line per product. Lines never reserve stock:
availability is only checked when an item is added and again, atomically,
at purchase time.
"""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Cart:
    owner_id = Identifier()
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, owner_id=None):
        now = datetime.now()
        return cls(owner_id=owner_id, created_at=now, updated_at=now)

    def line_for(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id, quantity):
        """Add ``quantity`` units of a product, merging into an existing line."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity))
            line_quantity = quantity

        self.updated_at = datetime.now()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        """Replace the quantity of an existing line.

        Raises:
            ObjectNotFoundError: the product has no line in this cart.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": [f"Product {product_id} is not in cart {self.id}"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now()

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop the line for ``product_id``; a no-op when there is none."""
        item = self.line_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now()

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def remove_products(self, product_ids):
        for product_id in product_ids:
            self.remove_item(product_id)

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now()

        self.raise_(CartCleared(cart_id=str(self.id), removed_items=removed))

    def replace_quantities(self, quantities: dict):
        """Bulk-update line quantities; products not in the cart are ignored."""
        for product_id, quantity in quantities.items():
            if self.line_for(product_id) is not None:
                self.update_item_quantity(product_id, quantity)
