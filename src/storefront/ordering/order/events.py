"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderCreated:
    """A new order was placed and is awaiting settlement."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_count: Integer(required=True)
    total_price: Float(required=True)
    payment_method: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentSettled:
    """A settlement gateway reported an outcome for the order."""

    __version__ = 1

    order_id: Identifier(required=True)
    payment_method: String(required=True)
    transaction_id: String(required=True)
    settlement_status: String(required=True)
    provider: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    settled_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator overwrote the order status."""

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)
