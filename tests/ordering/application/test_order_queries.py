import json
from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.product.removal import DeleteProduct
from storefront.identity.user.removal import DeleteUser
from storefront.ordering.order.creation import CreateOrder
from storefront.ordering.order.details import get_order, list_orders
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import OverwriteOrderStatus


def _place(user_id, product_id, placed_at=None):
    command = CreateOrder(user_id=user_id, items=json.dumps([{"product": product_id}]))
    order_id = current_domain.process(command, asynchronous=False)
    if placed_at:
        repo = current_domain.repository_for(Order)
        order = repo.get(order_id)
        order.created_at = placed_at
        repo.add(order)
    return order_id


class TestListOrders:
    def test_newest_first(self, make_product):
        product_id = make_product()
        start = datetime.now(UTC)
        older = _place("u-1", product_id, placed_at=start - timedelta(hours=2))
        newer = _place("u-1", product_id, placed_at=start - timedelta(hours=1))

        assert [str(r.order.id) for r in list_orders()] == [newer, older]

    def test_filter_by_user(self, make_product):
        product_id = make_product()
        mine = _place("u-1", product_id)
        _place("u-2", product_id)

        assert [str(r.order.id) for r in list_orders(user_id="u-1")] == [mine]

    def test_references_are_resolved(self, make_product, make_user):
        user_id = make_user()
        product_id = make_product(title="Widget")
        _place(user_id, product_id)

        resolved = list_orders()[0]
        assert resolved.user.email == "jane@example.com"
        assert resolved.items[0].product.title == "Widget"


class TestGetOrder:
    def test_deleted_product_still_readable(self, make_product):
        product_id = make_product()
        order_id = _place("u-1", product_id)
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        resolved = get_order(order_id)
        assert resolved.items[0].product is None
        assert str(resolved.items[0].item.product_id) == product_id

    def test_deleted_user_resolves_to_none(self, make_product, make_user):
        user_id = make_user()
        order_id = _place(user_id, make_product())
        current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)

        assert get_order(order_id).user is None

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            get_order("missing")
        assert str(exc_info.value) == "Order not found"


class TestOverwriteStatus:
    def test_overwrite(self, make_product):
        order_id = _place("u-1", make_product())
        current_domain.process(OverwriteOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).status == "shipped"

    def test_invalid_status(self, make_product):
        order_id = _place("u-1", make_product())
        with pytest.raises(ValidationError):
            current_domain.process(OverwriteOrderStatus(order_id=order_id, status="lost"), asynchronous=False)

    def test_missing_status(self, make_product):
        order_id = _place("u-1", make_product())
        with pytest.raises(ValidationError):
            current_domain.process(OverwriteOrderStatus(order_id=order_id, status=None), asynchronous=False)
