"""Checkout: settle an order through the gateway for its payment method."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.gateway import get_gateway, resolve_method
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CheckoutOrder:
    order_id: Identifier()
    payment_method: String(max_length=20)


@storefront.command_handler(part_of=Order)
class CheckoutOrderHandler:
    @handle(CheckoutOrder)
    def checkout(self, command):
        """Settle the order and return the gateway's ``SettlementResult``.

        The method is resolved before the order is touched, so an
        unsupported method leaves the order exactly as it was.
        """
        if not command.order_id or not command.payment_method:
            raise ValidationError({"_checkout": ["orderId and paymentMethod are required"]})

        method = resolve_method(command.payment_method)
        order = load(Order, command.order_id)

        result = get_gateway(method.value).settle(str(order.id), order.total_price)
        order.record_settlement(method.value, result)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "payment_settled",
            order_id=str(order.id),
            payment_method=method.value,
            settlement_status=result.status,
            order_status=order.status,
        )
        return result
