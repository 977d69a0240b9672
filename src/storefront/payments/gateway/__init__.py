"""Settlement gateway factory.

Payment methods form a closed set. ``get_gateway()`` resolves a method name
(case-insensitively) to its adapter and rejects anything else.
``set_gateway()`` swaps the adapter for one method, which tests use to
inject failures.
"""

from enum import Enum

from protean.exceptions import ValidationError

from storefront.payments.gateway.cash_adapter import CashOnDeliveryGateway
from storefront.payments.gateway.port import PaymentGateway
from storefront.payments.gateway.paypal_adapter import PayPalGateway
from storefront.payments.gateway.stripe_adapter import StripeGateway


class PaymentMethod(Enum):
    STRIPE = "stripe"
    PAYPAL = "paypal"
    CASH = "cash"


_DEFAULT_GATEWAYS = {
    PaymentMethod.STRIPE: StripeGateway,
    PaymentMethod.PAYPAL: PayPalGateway,
    PaymentMethod.CASH: CashOnDeliveryGateway,
}

_overrides: dict[PaymentMethod, PaymentGateway] = {}


def normalize_method(name: str | None) -> str:
    """Trimmed, lower-cased method name. A blank name means cash on delivery."""
    return (name or "").strip().lower() or PaymentMethod.CASH.value


def resolve_method(name: str | None) -> PaymentMethod:
    """Map a method name onto ``PaymentMethod``, ignoring case and surrounding spaces."""
    normalized = (name or "").strip().lower()
    try:
        return PaymentMethod(normalized)
    except ValueError:
        raise ValidationError({"payment_method": ["Unsupported payment method"]}) from None


def get_gateway(name: str | None) -> PaymentGateway:
    """Return the gateway that settles payments made with ``name``."""
    method = resolve_method(name)
    if method in _overrides:
        return _overrides[method]
    return _DEFAULT_GATEWAYS[method]()


def set_gateway(method: PaymentMethod, gateway: PaymentGateway) -> None:
    """Override the gateway used for ``method`` (useful for tests)."""
    _overrides[method] = gateway


def reset_gateways() -> None:
    """Reset to default gateways."""
    _overrides.clear()
