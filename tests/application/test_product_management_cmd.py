"""Application tests for catalog management commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from storefront.exceptions import ForbiddenError
from storefront.product.events import ProductCreated
from storefront.product.management import CreateProduct, DeleteProduct, SeedProducts, UpdateProduct
from storefront.product.product import ADMIN_OWNER, Product


def _create(**overrides):
    defaults = {"name": "Desk Lamp", "price": 19.9, "stock": 8, "category": "Home"}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


class TestCreateProduct:
    def test_admin_owned_by_default(self):
        product = current_domain.repository_for(Product).get(_create())
        assert product.owner == ADMIN_OWNER
        assert product.stock == 8

    def test_premium_owner_recorded(self):
        product = current_domain.repository_for(Product).get(_create(owner="user-42"))
        assert product.owner == "user-42"


class TestUpdateProduct:
    def test_owner_can_update(self):
        product_id = _create(owner="user-42")
        current_domain.process(
            UpdateProduct(product_id=product_id, requester_id="user-42", requester_role="premium", price=5.0),
            asynchronous=False,
        )
        assert current_domain.repository_for(Product).get(product_id).price == 5.0

    def test_admin_can_update_any(self):
        product_id = _create(owner="user-42")
        current_domain.process(
            UpdateProduct(product_id=product_id, requester_id="admin-1", requester_role="admin", stock=0),
            asynchronous=False,
        )
        assert current_domain.repository_for(Product).get(product_id).stock == 0

    def test_other_premium_user_forbidden(self):
        product_id = _create(owner="user-42")
        with pytest.raises(ForbiddenError):
            current_domain.process(
                UpdateProduct(product_id=product_id, requester_id="user-7", requester_role="premium", price=1.0),
                asynchronous=False,
            )
        assert current_domain.repository_for(Product).get(product_id).price == 19.9


class TestDeleteProduct:
    def test_admin_deletes_premium_listing_and_owner_is_emailed(self, make_user, mailer):
        seller = make_user(email="seller@example.com", role="premium")
        product_id = _create(name="Vintage Radio", owner=str(seller.id))

        current_domain.process(
            DeleteProduct(product_id=product_id, requester_id="admin-1", requester_role="admin"),
            asynchronous=False,
        )

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)
        emails = mailer.sent_to("seller@example.com")
        assert len(emails) == 1
        assert "Vintage Radio" in emails[0]["body"]

    def test_admin_listing_sends_no_email(self, mailer):
        product_id = _create()
        current_domain.process(
            DeleteProduct(product_id=product_id, requester_id="admin-1", requester_role="admin"),
            asynchronous=False,
        )
        assert mailer.sent_emails == []

    def test_non_owner_forbidden(self):
        product_id = _create(owner="user-42")
        with pytest.raises(ForbiddenError):
            current_domain.process(
                DeleteProduct(product_id=product_id, requester_id="user-7", requester_role="premium"),
                asynchronous=False,
            )


class TestSeedProducts:
    def test_seeds_requested_count(self):
        created = current_domain.process(SeedProducts(count=12), asynchronous=False)
        products = current_domain.repository_for(Product)._dao.query.all().items
        assert created == 12
        assert len(products) == 12
        assert all(p.owner == ADMIN_OWNER and p.stock >= 10 for p in products)


class TestProductEvents:
    def test_create_raises_event(self):
        product = Product.create(name="Lamp", price=1.0)
        assert isinstance(product._events[0], ProductCreated)
