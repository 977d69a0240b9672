"""Order aggregate root with OrderItem entity and PaymentResult value object."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront


class OrderStatus(Enum):
    CREATED = "created"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@storefront.value_object(part_of="Order")
class PaymentResult:
    """What the settlement gateway reported for the last checkout."""

    transaction_id: String(required=True, max_length=100)
    status: String(required=True, max_length=20)
    provider: String(required=True, max_length=50)


@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line. The price is a snapshot taken when the order was placed."""

    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    price: Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.quantity * self.price


@storefront.aggregate
class Order:
    """Order aggregate root."""

    user_id: Identifier(required=True)
    items: HasMany(OrderItem)
    shipping_address: String(max_length=500, default="")
    payment_method: String(max_length=20, default="cash")
    payment_result: ValueObject(PaymentResult)
    total_price: Float(required=True, min_value=0.0)
    status: String(choices=OrderStatus, default=OrderStatus.CREATED.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, user_id, items, shipping_address=None, payment_method="cash", total_price=None):
        """Place a new order.

        ``items`` is a list of ``{"product_id", "quantity", "price"}`` dicts
        with prices already resolved. ``total_price`` overrides the computed
        sum when given.
        """
        from storefront.ordering.order.events import OrderCreated

        if not items:
            raise ValidationError({"items": ["At least one item is required"]})

        now = datetime.now(UTC)
        order_items = [
            OrderItem(
                product_id=item["product_id"],
                quantity=item["quantity"],
                price=item["price"],
            )
            for item in items
        ]
        computed_total = sum(item.line_total for item in order_items)

        order = cls(
            user_id=user_id,
            items=order_items,
            shipping_address=shipping_address or "",
            payment_method=payment_method,
            total_price=computed_total if total_price is None else total_price,
            status=OrderStatus.CREATED.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderCreated(
                order_id=order.id,
                user_id=user_id,
                item_count=len(order_items),
                total_price=order.total_price,
                payment_method=payment_method,
                created_at=now,
            )
        )
        return order

    def record_settlement(self, payment_method, result):
        """Store a gateway outcome. Success marks the order paid; anything else leaves the status alone.

        No guard against settling twice: a repeat checkout overwrites the
        previous result.
        """
        from storefront.ordering.order.events import PaymentSettled

        previous_status = self.status
        self.payment_method = payment_method
        self.payment_result = PaymentResult(
            transaction_id=result.transaction_id,
            status=result.status,
            provider=result.provider,
        )
        if result.succeeded:
            self.status = OrderStatus.PAID.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentSettled(
                order_id=self.id,
                payment_method=payment_method,
                transaction_id=result.transaction_id,
                settlement_status=result.status,
                provider=result.provider,
                previous_status=previous_status,
                new_status=self.status,
                settled_at=self.updated_at,
            )
        )

    def overwrite_status(self, new_status):
        """Set any status from the enumeration, regardless of the current one."""
        from storefront.ordering.order.events import OrderStatusChanged

        try:
            target = OrderStatus(new_status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Invalid status '{new_status}'. Allowed: {allowed}"]}) from None

        previous_status = self.status
        self.status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous_status,
                new_status=target.value,
                changed_at=self.updated_at,
            )
        )
