"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from internal Protean
commands. ``items`` must be a JSON array of objects; strings and single
objects are rejected before any domain code runs.
"""

from datetime import datetime
from typing import Any

from storefront.api.schemas import CamelModel


class CreateOrderRequest(CamelModel):
    user_id: str | None = None
    items: list[dict[str, Any]] | None = None
    shipping_address: str | None = None
    payment_method: str | None = None
    total_price: float | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "userId": "5f2b9c1e-0000-4000-8000-000000000001",
                    "items": [
                        {"product": "5f2b9c1e-0000-4000-8000-0000000000a1", "quantity": 2, "price": 10},
                        {"productId": "5f2b9c1e-0000-4000-8000-0000000000a2"},
                    ],
                    "shippingAddress": "1 High Street",
                    "paymentMethod": "cash",
                }
            ]
        }
    }


class CheckoutRequest(CamelModel):
    order_id: str | None = None
    payment_method: str | None = None


class UpdateStatusRequest(CamelModel):
    status: str | None = None


class PaymentResultSchema(CamelModel):
    id: str
    status: str
    provider: str

    @classmethod
    def from_result(cls, result) -> "PaymentResultSchema":
        return cls(id=result.transaction_id, status=result.status, provider=result.provider)


class OrderUserSchema(CamelModel):
    id: str
    name: str
    email: str
    role: str
    is_admin: bool


class OrderProductSchema(CamelModel):
    id: str
    title: str
    price: float
    images: list[str] = []


class OrderItemResponse(CamelModel):
    id: str
    product_id: str
    product: OrderProductSchema | None = None
    quantity: int
    price: float


class OrderResponse(CamelModel):
    id: str
    user_id: str
    user: OrderUserSchema | None = None
    items: list[OrderItemResponse]
    shipping_address: str | None = None
    payment_method: str
    payment_result: PaymentResultSchema | None = None
    total_price: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_resolved(cls, resolved) -> "OrderResponse":
        order, user = resolved.order, resolved.user
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            user=(
                OrderUserSchema(
                    id=str(user.id),
                    name=user.name,
                    email=user.email,
                    role=user.role,
                    is_admin=user.is_admin,
                )
                if user
                else None
            ),
            items=[
                OrderItemResponse(
                    id=str(line.item.id),
                    product_id=str(line.item.product_id),
                    product=(
                        OrderProductSchema(
                            id=str(line.product.id),
                            title=line.product.title,
                            price=line.product.price,
                            images=[image.url for image in line.product.images],
                        )
                        if line.product
                        else None
                    ),
                    quantity=line.item.quantity,
                    price=line.item.price,
                )
                for line in resolved.items
            ],
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            payment_result=PaymentResultSchema.from_result(order.payment_result) if order.payment_result else None,
            total_price=order.total_price,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class CheckoutResponse(CamelModel):
    order: OrderResponse
    payment: PaymentResultSchema
