"""Tests for the Cart aggregate and its line management."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved


def _make_cart():
    return Cart.create(owner_id="user-001")


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_same_product_merges_into_one_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-001", 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_different_products_get_their_own_lines(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-002", 1)
        assert [str(i.product_id) for i in cart.items] == ["prod-001", "prod-002"]

    @pytest.mark.parametrize("quantity", [0, -2, None])
    def test_non_positive_quantity_rejected(self, quantity):
        cart = _make_cart()
        with pytest.raises(ValidationError):
            cart.add_item("prod-001", quantity)

    def test_raises_event_with_line_total(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-001", 4)
        event = [e for e in cart._events if isinstance(e, CartItemAdded)][-1]
        assert event.quantity == 4
        assert event.line_quantity == 5


class TestUpdateItemQuantity:
    def test_replaces_quantity(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.update_item_quantity("prod-001", 6)
        assert cart.items[0].quantity == 6

        event = [e for e in cart._events if isinstance(e, CartItemQuantityUpdated)][-1]
        assert event.previous_quantity == 1
        assert event.new_quantity == 6

    def test_product_not_in_cart_is_not_found(self):
        cart = _make_cart()
        with pytest.raises(ObjectNotFoundError):
            cart.update_item_quantity("prod-404", 2)

    def test_zero_quantity_rejected(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        with pytest.raises(ValidationError):
            cart.update_item_quantity("prod-001", 0)


class TestRemoveItem:
    def test_remove_item(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.remove_item("prod-001")
        assert len(cart.items) == 0
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_is_idempotent(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-002", 2)

        cart.remove_item("prod-001")
        after_once = [(str(i.product_id), i.quantity) for i in cart.items]
        cart.remove_item("prod-001")
        after_twice = [(str(i.product_id), i.quantity) for i in cart.items]

        assert after_once == after_twice == [("prod-002", 2)]

    def test_remove_products(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-002", 1)
        cart.add_item("prod-003", 1)
        cart.remove_products(["prod-001", "prod-003"])
        assert [str(i.product_id) for i in cart.items] == ["prod-002"]


class TestClear:
    def test_clear_empties_cart(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-002", 3)
        cart.clear()
        assert len(cart.items) == 0

        event = [e for e in cart._events if isinstance(e, CartCleared)][-1]
        assert event.removed_items == 2

    def test_clear_empty_cart(self):
        cart = _make_cart()
        cart.clear()
        assert len(cart.items) == 0


class TestReplaceQuantities:
    def test_updates_known_lines_and_ignores_others(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1)
        cart.add_item("prod-002", 1)
        cart.replace_quantities({"prod-001": 4, "prod-999": 7})

        quantities = {str(i.product_id): i.quantity for i in cart.items}
        assert quantities == {"prod-001": 4, "prod-002": 1}
