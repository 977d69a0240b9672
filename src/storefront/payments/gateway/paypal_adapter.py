"""Simulated PayPal settlement. Always succeeds; no network call is made."""

from uuid import uuid4

from storefront.payments.gateway.port import PaymentGateway, SettlementResult, SettlementStatus


class PayPalGateway(PaymentGateway):
    provider = "paypal"

    def settle(self, order_id: str, amount: float) -> SettlementResult:  # noqa: ARG002
        return SettlementResult(
            transaction_id=f"paypal_tx_{uuid4().hex[:12]}",
            status=SettlementStatus.SUCCESS,
            provider=self.provider,
        )
