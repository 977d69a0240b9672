"""FastAPI routes for the Ordering context.

None of these endpoints require authentication.
"""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.ordering.api.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CreateOrderRequest,
    OrderResponse,
    PaymentResultSchema,
    UpdateStatusRequest,
)
from storefront.ordering.order.checkout import CheckoutOrder
from storefront.ordering.order.creation import CreateOrder
from storefront.ordering.order.details import get_order, list_orders
from storefront.ordering.order.status import OverwriteOrderStatus
from storefront.payments.gateway import PaymentMethod

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    command = CreateOrder(
        user_id=body.user_id,
        items=json.dumps(body.items) if body.items is not None else None,
        shipping_address=body.shipping_address,
        payment_method=body.payment_method or PaymentMethod.CASH.value,
        total_price=body.total_price,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_resolved(get_order(order_id))


@order_router.post("/checkout", response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest) -> CheckoutResponse:
    command = CheckoutOrder(order_id=body.order_id, payment_method=body.payment_method)
    result = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(
        order=OrderResponse.from_resolved(get_order(body.order_id)),
        payment=PaymentResultSchema.from_result(result),
    )


@order_router.get("", response_model=list[OrderResponse])
async def get_orders(user_id: str | None = Query(default=None, alias="userId")) -> list[OrderResponse]:
    return [OrderResponse.from_resolved(resolved) for resolved in list_orders(user_id=user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_by_id(order_id: str) -> OrderResponse:
    return OrderResponse.from_resolved(get_order(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> OrderResponse:
    current_domain.process(OverwriteOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_resolved(get_order(order_id))
