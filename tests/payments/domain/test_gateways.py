import pytest
from protean.exceptions import ValidationError
from storefront.payments.gateway import PaymentMethod, get_gateway, normalize_method, reset_gateways, resolve_method, set_gateway
from storefront.payments.gateway.cash_adapter import CashOnDeliveryGateway
from storefront.payments.gateway.paypal_adapter import PayPalGateway
from storefront.payments.gateway.port import SettlementResult
from storefront.payments.gateway.stripe_adapter import StripeGateway


class TestResolveMethod:
    @pytest.mark.parametrize(
        ("name", "method"),
        [
            ("stripe", PaymentMethod.STRIPE),
            ("PayPal", PaymentMethod.PAYPAL),
            (" CASH ", PaymentMethod.CASH),
        ],
    )
    def test_known_methods(self, name, method):
        assert resolve_method(name) is method

    @pytest.mark.parametrize("name", ["bitcoin", "", None])
    def test_unsupported(self, name):
        with pytest.raises(ValidationError) as exc_info:
            resolve_method(name)
        assert exc_info.value.messages == {"payment_method": ["Unsupported payment method"]}


@pytest.mark.parametrize(
    ("name", "normalized"),
    [(" PayPal ", "paypal"), ("Bitcoin", "bitcoin"), ("", "cash"), ("   ", "cash"), (None, "cash")],
)
def test_normalize_method(name, normalized):
    assert normalize_method(name) == normalized


class TestGateways:
    @pytest.mark.parametrize(
        ("name", "cls"),
        [("stripe", StripeGateway), ("paypal", PayPalGateway), ("cash", CashOnDeliveryGateway)],
    )
    def test_factory(self, name, cls):
        assert isinstance(get_gateway(name), cls)

    def test_stripe_succeeds(self):
        result = StripeGateway().settle("o-1", 10.0)
        assert result.succeeded
        assert result.provider == "stripe"
        assert result.transaction_id.startswith("stripe_tx_")

    def test_paypal_succeeds(self):
        result = PayPalGateway().settle("o-1", 10.0)
        assert result.succeeded
        assert result.transaction_id.startswith("paypal_tx_")

    def test_cash_is_pending(self):
        result = CashOnDeliveryGateway().settle("o-1", 10.0)
        assert not result.succeeded
        assert result.status == "pending"
        assert result.provider == "cash-on-delivery"

    def test_transaction_ids_are_unique(self):
        ids = {StripeGateway().settle("o-1", 1.0).transaction_id for _ in range(20)}
        assert len(ids) == 20

    def test_results_are_immutable(self):
        result = StripeGateway().settle("o-1", 1.0)
        with pytest.raises(AttributeError):
            result.status = "pending"


class TestOverrides:
    def test_override_and_reset(self):
        class Declining(StripeGateway):
            def settle(self, order_id, amount):
                return SettlementResult(transaction_id="x", status="failed", provider="stripe")

        declining = Declining()
        set_gateway(PaymentMethod.STRIPE, declining)
        assert get_gateway("stripe") is declining

        reset_gateways()
        assert get_gateway("stripe") is not declining
