"""Repository for the Product aggregate."""

import math
from dataclasses import dataclass, field

from protean.utils.query import Q

from storefront.domain import storefront
from storefront.product.product import Product

# Attempts at the conditional decrement before a line is given up as unavailable
_DECREMENT_ATTEMPTS = 3


@dataclass
class ProductPage:
    items: list = field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    page: int = 1
    limit: int = 10

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def prev_page(self) -> int | None:
        return self.page - 1 if self.has_prev_page else None

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next_page else None


@storefront.repository(part_of=Product)
class ProductRepository:
    """Product persistence with catalog queries and stock updates that bypass the aggregate."""

    def paginate(self, query=None, category=None, sort=None, page=1, limit=10) -> ProductPage:
        """Return one page of products.

        ``query`` matches product names case-insensitively, ``category`` is an
        exact match and ``sort`` orders by price (``asc`` or ``desc``; any other
        value keeps store order).
        """
        page = max(int(page or 1), 1)
        limit = max(int(limit or 10), 1)

        queryset = self._dao.query
        if query:
            queryset = queryset.filter(name__icontains=query)
        if category:
            queryset = queryset.filter(category=category)
        if sort == "asc":
            queryset = queryset.order_by("price")
        elif sort == "desc":
            queryset = queryset.order_by("-price")

        results = queryset.offset((page - 1) * limit).limit(limit).all()

        return ProductPage(
            items=list(results.items),
            total=results.total,
            total_pages=math.ceil(results.total / limit),
            page=page,
            limit=limit,
        )

    def owned_by(self, owner: str) -> list[Product]:
        return self._dao.query.filter(owner=str(owner)).all().items

    def decrement_stock(self, product_id, quantity: int) -> Product | None:
        """Atomically take ``quantity`` units out of a product's stock.

        The write is a compare-and-set on the stock value just read, so two
        concurrent purchases can never both consume the same units. Returns the
        product as read at decrement time (its price is the one charged), or
        ``None`` when the product is gone or no longer has enough stock.
        """
        for _ in range(_DECREMENT_ATTEMPTS):
            current = self._dao.query.filter(id=str(product_id)).all().first
            if current is None or current.stock < quantity:
                return None

            updated = self._dao._update_all(
                Q(id=str(product_id), stock=current.stock),
                stock=current.stock - quantity,
            )
            if updated:
                return current

        return None

    def zero_stock_for_owner(self, owner: str) -> int:
        """Set stock to 0 on every product listed by ``owner``; returns the number touched."""
        return self._dao._update_all(Q(owner=str(owner)), stock=0)
