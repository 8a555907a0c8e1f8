"""Shared BDD fixtures and step definitions for the Storefront."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.cart import Cart
from storefront.product.product import Product


@pytest.fixture()
def products():
    """Products created by the scenario, keyed by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the result or error of the last When step."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a registered shopper "{email}"'), target_fixture="shopper")
def registered_shopper(make_user, email):
    return make_user(email=email)


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} units in stock'))
def product_in_stock(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the cart holds {quantity:d} units of "{name}"'))
def cart_holds(shopper, products, quantity, name):
    # Written directly on the aggregate so a scenario can hold more than is in stock
    repo = current_domain.repository_for(Cart)
    cart = repo.get(shopper.cart_id)
    cart.add_item(products[name].id, quantity)
    repo.add(cart)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} units in stock'))
def product_has_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock == stock


@then("the cart is empty")
def cart_is_empty(shopper):
    assert current_domain.repository_for(Cart).get(shopper.cart_id).items == []


@then(parsers.cfparse('the cart holds {quantity:d} units of "{name}" afterwards'))
def cart_still_holds(shopper, products, quantity, name):
    cart = current_domain.repository_for(Cart).get(shopper.cart_id)
    line = cart.line_for(products[name].id)
    assert line is not None
    assert line.quantity == quantity
