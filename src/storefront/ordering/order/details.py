"""Read-side assembly of orders for display.

Owner and product references are resolved against the identity and
catalogue stores. A reference that no longer resolves comes back as
``None``; removed products never make an order unreadable.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order
from storefront.shared.lookup import load


@dataclass
class ResolvedItem:
    item: object
    product: Product | None


@dataclass
class ResolvedOrder:
    order: Order
    user: User | None
    items: list[ResolvedItem]


def _find(aggregate_cls, identifier, cache):
    key = (aggregate_cls.__name__, str(identifier))
    if key not in cache:
        try:
            cache[key] = current_domain.repository_for(aggregate_cls).get(identifier)
        except ObjectNotFoundError:
            cache[key] = None
    return cache[key]


def _resolve(order, cache):
    return ResolvedOrder(
        order=order,
        user=_find(User, order.user_id, cache),
        items=[ResolvedItem(item=item, product=_find(Product, item.product_id, cache)) for item in order.items],
    )


def list_orders(user_id=None) -> list[ResolvedOrder]:
    cache = {}
    orders = current_domain.repository_for(Order).newest_first(user_id=user_id)
    return [_resolve(order, cache) for order in orders]


def get_order(order_id) -> ResolvedOrder:
    return _resolve(load(Order, order_id), {})
