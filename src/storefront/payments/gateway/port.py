"""Settlement gateway port (abstract interface).

Every payment method resolves to an adapter implementing this contract, so
checkout never needs to know which provider it is talking to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class SettlementStatus:
    SUCCESS = "success"
    PENDING = "pending"


@dataclass(frozen=True)
class SettlementResult:
    """Uniform outcome of a settlement attempt."""

    transaction_id: str
    status: str
    provider: str

    @property
    def succeeded(self) -> bool:
        return self.status == SettlementStatus.SUCCESS


class PaymentGateway(ABC):
    """Abstract settlement gateway interface."""

    provider: str

    @abstractmethod
    def settle(self, order_id: str, amount: float) -> SettlementResult:
        """Settle ``amount`` for ``order_id`` and report the outcome."""
        ...
