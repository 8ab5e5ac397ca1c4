"""Shared BDD fixtures and step definitions for the Storefront domain."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import Cart
from storefront.cart.items import AddProductToCart, RemoveOneUnit, RemoveProductFromCart
from storefront.catalogue.product import Product
from storefront.order.order import Order
from storefront.order.payment import PayOrder
from storefront.order.placement import CreateOrder
from storefront.order.removal import DeleteOrder
from storefront.shared.errors import ForbiddenError, InternalServerError

_DOMAIN_ERRORS = (ValidationError, ObjectNotFoundError, ForbiddenError, InternalServerError)


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _attempt(context, command):
    context["error"] = None
    try:
        return _process(command)
    except _DOMAIN_ERRORS as exc:
        context["error"] = exc
        return None


def _error_messages(exc):
    if isinstance(exc, ValidationError) and isinstance(exc.messages, dict):
        return [message for messages in exc.messages.values() for message in messages]
    return [str(exc)]


@pytest.fixture()
def context():
    return {"products": {}, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a validated shopper with an open cart")
def validated_shopper_with_cart(context, register_user, open_cart):
    context["user_id"] = register_user(validated=True)
    context["cart_id"] = open_cart(user_id=context["user_id"])


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} units in stock'))
def product_in_stock(context, stock_product, name, price, stock):
    context["products"][name] = stock_product(price=price, stock=stock, name=name)


@given(parsers.cfparse('the shopper has {quantity:d} units of "{name}" in the cart'))
def units_in_cart(context, quantity, name):
    _process(
        AddProductToCart(
            cart_id=context["cart_id"],
            product_id=context["products"][name],
            quantity=quantity,
        )
    )


@given(parsers.cfparse("the shopper has placed an order with discount {discount:d}"))
def order_placed(context, discount):
    context["order_id"] = _process(CreateOrder(cart_id=context["cart_id"], discount=discount))["order"]["id"]


@given("the order has been paid")
def order_paid(context):
    _process(PayOrder(order_id=context["order_id"]))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {quantity:d} units of "{name}" to the cart'))
def add_units_to_cart(context, quantity, name):
    _attempt(
        context,
        AddProductToCart(
            cart_id=context["cart_id"],
            product_id=context["products"][name],
            quantity=quantity,
        ),
    )


@when(parsers.cfparse('the shopper removes one unit of "{name}"'))
def remove_one_unit(context, name):
    _attempt(context, RemoveOneUnit(cart_id=context["cart_id"], product_id=context["products"][name]))


@when(parsers.cfparse('the shopper removes "{name}" from the cart'))
def remove_line(context, name):
    _attempt(context, RemoveProductFromCart(cart_id=context["cart_id"], product_id=context["products"][name]))


@when(parsers.cfparse("the shopper places an order with discount {discount:d}"))
def place_order(context, discount):
    result = _attempt(context, CreateOrder(cart_id=context["cart_id"], discount=discount))
    if result:
        context["order_id"] = result["order"]["id"]


@when("the shopper pays the order")
def pay_order(context):
    _attempt(context, PayOrder(order_id=context["order_id"]))


@when("the shopper deletes the order")
def delete_order(context):
    _attempt(context, DeleteOrder(order_id=context["order_id"]))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _cart(context):
    return current_domain.repository_for(Cart).get(context["cart_id"])


@then(parsers.cfparse("the cart subtotal is {amount:f}"))
def cart_subtotal_is(context, amount):
    assert _cart(context).subtotal == pytest.approx(amount)


@then(parsers.cfparse("the cart tax is {amount:f}"))
def cart_tax_is(context, amount):
    assert _cart(context).tax == pytest.approx(amount)


@then(parsers.cfparse("the cart total is {amount:f}"))
def cart_total_is(context, amount):
    assert _cart(context).total == pytest.approx(amount, abs=1e-6)


@then("the cart is empty")
def cart_is_empty(context):
    assert len(_cart(context).items) == 0


@then("the cart no longer exists")
def cart_is_gone(context):
    assert current_domain.repository_for(Cart).get_or_none(context["cart_id"]) is None


@then(parsers.cfparse('"{name}" has {stock:d} units in stock'))
def product_stock_is(context, name, stock):
    assert current_domain.repository_for(Product).get(context["products"][name]).stock == stock


@then(parsers.cfparse("the order final price is {amount:f}"))
def order_final_price_is(context, amount):
    order = current_domain.repository_for(Order).get(context["order_id"])
    assert order.final_price == pytest.approx(amount)


@then(parsers.cfparse('the order is "{status}"'))
def order_status_is(context, status):
    assert current_domain.repository_for(Order).get(context["order_id"]).status == status


@then("the order no longer exists")
def order_is_gone(context):
    assert current_domain.repository_for(Order).get_or_none(context["order_id"]) is None


@then(parsers.cfparse('the request is rejected with "{message}"'))
def rejected_with_message(context, message):
    assert context["error"] is not None
    assert message in _error_messages(context["error"])


@then("the request is rejected")
def rejected(context):
    assert context["error"] is not None
