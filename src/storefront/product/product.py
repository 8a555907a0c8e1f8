"""Product aggregate root."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront

# Owner recorded for products created by an administrator
ADMIN_OWNER = "admin"


@storefront.aggregate
class Product:
    """A sellable catalog item.

    ``owner`` is the id of the premium user who listed the product, or the
    ``ADMIN_OWNER`` sentinel. Stock is only decremented at purchase time; a
    product can be in any number of carts regardless of its stock.
    """

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock: Integer(required=True, min_value=0, default=0)
    category: String(max_length=100)
    status: Boolean(default=True)
    thumbnail: String(max_length=500)
    owner: String(required=True, max_length=255, default=ADMIN_OWNER)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(
        cls,
        name,
        price,
        stock=0,
        description=None,
        category=None,
        status=True,
        thumbnail=None,
        owner=ADMIN_OWNER,
    ):
        from storefront.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category=category,
            status=True if status is None else status,
            thumbnail=thumbnail,
            owner=owner or ADMIN_OWNER,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=price,
                stock=stock,
                category=category,
                owner=product.owner,
                created_at=now,
            )
        )
        return product

    def is_owned_by(self, user_id) -> bool:
        return self.owner == str(user_id)

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        stock=None,
        category=None,
        status=None,
        thumbnail=None,
    ):
        """Apply the provided fields; ``None`` keeps the current value."""
        from storefront.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if stock is not None:
            self.stock = stock
        if category is not None:
            self.category = category
        if status is not None:
            self.status = status
        if thumbnail is not None:
            self.thumbnail = thumbnail

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                stock=self.stock,
                status=str(self.status),
            )
        )

    def to_payload(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "stock": self.stock,
            "category": self.category,
            "status": self.status,
            "thumbnail": self.thumbnail,
            "owner": self.owner,
        }
