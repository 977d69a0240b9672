"""Order creation: command and handler.

Each requested line names a product and optionally a quantity and a unit
price. Prices the caller leaves out are snapshotted from the catalogue at
this point; later catalogue changes never touch the order. Stock is not
decremented.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.gateway import PaymentMethod, normalize_method
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Accepted spellings of a line's product reference, in lookup order
PRODUCT_REFERENCE_KEYS = ("product", "productId", "product_id", "id")


@storefront.command(part_of="Order")
class CreateOrder:
    user_id: Identifier()
    items: Text()  # JSON list of line requests
    shipping_address: String(max_length=500)
    payment_method: String(max_length=20, default=PaymentMethod.CASH.value)
    total_price: Float()


def product_reference(line):
    for key in PRODUCT_REFERENCE_KEYS:
        value = line.get(key)
        if isinstance(value, dict):
            value = value.get("id")
        if value:
            return str(value)
    return None


def line_quantity(raw):
    """Integer quantity for a line; absent, blank, zero or non-numeric values count as 1."""
    if raw is None or isinstance(raw, bool):
        return 1
    try:
        quantity = int(raw)
    except (TypeError, ValueError):
        return 1
    if quantity < 0:
        raise ValidationError({"items": ["Quantity cannot be negative"]})
    return quantity or 1


def line_price(raw, product):
    if raw is None or raw == "":
        return product.price
    if isinstance(raw, bool):
        raise ValidationError({"items": ["Price must be a number"]})
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValidationError({"items": ["Price must be a number"]}) from None


def parse_lines(items_json):
    if items_json is None:
        raise ValidationError({"items": ["Items are required"]})
    try:
        lines = json.loads(items_json)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"items": ["Items must be a list of line records"]}) from None

    if not isinstance(lines, list) or not all(isinstance(line, dict) for line in lines):
        raise ValidationError({"items": ["Items must be a list of line records"]})
    if not lines:
        raise ValidationError({"items": ["At least one item is required"]})
    return lines


@storefront.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        if not command.user_id:
            raise ValidationError({"user_id": ["userId is required"]})

        lines = parse_lines(command.items)
        # Stored as given; the method is only checked against the gateways at checkout
        payment_method = normalize_method(command.payment_method)

        product_repo = current_domain.repository_for(Product)
        resolved = []
        for line in lines:
            product_id = product_reference(line)
            if not product_id:
                raise ValidationError({"items": ["Product ID is required for each item"]})
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                raise ValidationError({"items": [f"Product not found: {product_id}"]}) from None

            resolved.append(
                {
                    "product_id": product_id,
                    "quantity": line_quantity(line.get("quantity")),
                    "price": line_price(line.get("price"), product),
                }
            )

        order = Order.create(
            user_id=command.user_id,
            items=resolved,
            shipping_address=command.shipping_address,
            payment_method=payment_method,
            total_price=command.total_price,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_created",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(resolved),
            total_price=order.total_price,
        )
        return str(order.id)
