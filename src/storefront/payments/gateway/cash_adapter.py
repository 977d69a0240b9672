"""Cash on delivery.

Nothing is collected up front, so the settlement stays pending and the
order keeps its ``created`` status until someone overwrites it.
"""

from uuid import uuid4

from storefront.payments.gateway.port import PaymentGateway, SettlementResult, SettlementStatus


class CashOnDeliveryGateway(PaymentGateway):
    provider = "cash-on-delivery"

    def settle(self, order_id: str, amount: float) -> SettlementResult:  # noqa: ARG002
        return SettlementResult(
            transaction_id=f"cash_tx_{uuid4().hex[:12]}",
            status=SettlementStatus.PENDING,
            provider=self.provider,
        )
