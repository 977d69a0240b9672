"""Administrative status overwrite: command and handler.

Any value of ``OrderStatus`` is accepted from any current status.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class OverwriteOrderStatus:
    order_id: Identifier(required=True)
    status: String(max_length=20)


@storefront.command_handler(part_of=Order)
class OverwriteOrderStatusHandler:
    @handle(OverwriteOrderStatus)
    def overwrite_status(self, command):
        order = load(Order, command.order_id)
        previous_status = order.status
        order.overwrite_status(command.status)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_status_overwritten",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
