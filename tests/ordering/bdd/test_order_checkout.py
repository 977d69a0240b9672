"""BDD tests for order checkout and status changes."""

import json

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.ordering.order.checkout import CheckoutOrder
from storefront.ordering.order.creation import CreateOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import OverwriteOrderStatus

scenarios("features/order_checkout.feature")


@pytest.fixture()
def outcome():
    """Container for the settlement result or the captured error."""
    return {"result": None, "exc": None}


@pytest.fixture()
def products():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced at {price:f}'))
def product_priced(make_product, products, title, price):
    products[title] = make_product(title=title, price=price)


@given(
    parsers.cfparse('an order for {quantity:d} "{title}" placed by "{user_id}"'),
    target_fixture="order_id",
)
def placed_order(products, quantity, title, user_id):
    items = [{"product": products[title], "quantity": quantity}]
    command = CreateOrder(user_id=user_id, items=json.dumps(items))
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the order is checked out with "{method}"'))
def checked_out(order_id, outcome, method):
    try:
        outcome["result"] = current_domain.process(
            CheckoutOrder(order_id=order_id, payment_method=method), asynchronous=False
        )
    except ValidationError as exc:
        outcome["exc"] = exc


@when(parsers.cfparse('the order status is overwritten with "{status}"'))
def status_overwritten(order_id, status):
    current_domain.process(OverwriteOrderStatus(order_id=order_id, status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(outcome, status):
    assert outcome["result"].status == status


@then(parsers.cfparse('the payment provider is "{provider}"'))
def payment_provider_is(outcome, provider):
    assert outcome["result"].provider == provider


@then(parsers.cfparse('the checkout fails with "{message}"'))
def checkout_fails(outcome, message):
    assert outcome["exc"] is not None
    assert message in outcome["exc"].messages["payment_method"]


@then(parsers.cfparse("the order total is {total:f}"))
def order_total_is(order_id, total):
    assert current_domain.repository_for(Order).get(order_id).total_price == pytest.approx(total)
