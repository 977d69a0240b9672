"""Client-side checkout: turn the cart into an order and settle it."""

from storefront.client.api import StorefrontClient
from storefront.client.store import Store
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutError(Exception):
    pass


def sign_in(store: Store, client: StorefrontClient, email: str, password: str) -> dict:
    """Log in, then hand the session to both the store and the client."""
    response = client.login(email, password)
    client.token = response["token"]
    store.set_session(response["user"], response["token"])
    return response["user"]


def place_order(
    store: Store,
    client: StorefrontClient,
    shipping_address: str = "",
    payment_method: str = "cash",
) -> dict:
    """Create an order from the cart, check it out and clear the cart.

    The cart is left untouched when either request fails.
    """
    if store.session is None:
        raise CheckoutError("Sign in before placing an order")
    if not store.cart:
        raise CheckoutError("Your cart is empty")

    payload = {
        "userId": store.session.user_id,
        "items": [
            {"product": line.product_id, "quantity": line.quantity, "price": line.price} for line in store.cart
        ],
        "shippingAddress": shipping_address,
        "paymentMethod": payment_method,
        "totalPrice": store.total_price(),
    }
    order = client.create_order(payload)
    settled = client.checkout(order["id"], payment_method)

    store.record_order(settled["order"])
    logger.info(
        "order_placed",
        order_id=order["id"],
        payment_status=settled["payment"]["status"],
    )
    return settled
