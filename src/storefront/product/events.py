"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    category: String()
    owner: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """A product's catalog details, price or stock were edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    status: String(required=True)
