"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
FakeGateway (dev/test) and StripeGateway (production) can be swapped without
touching the payment handlers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

# Currencies whose smallest unit is the whole unit
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})


def to_minor_units(amount: float, currency: str) -> int:
    """Convert ``12.34 USD`` to ``1234`` and ``500 JPY`` to ``500``."""
    if currency.upper() in ZERO_DECIMAL_CURRENCIES:
        return int(round(amount))
    return int(round(amount * 100))


def from_minor_units(amount: int, currency: str) -> float:
    if currency.upper() in ZERO_DECIMAL_CURRENCIES:
        return float(amount)
    return round(amount / 100, 2)


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    amount: float
    currency: str
    transaction_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    amount: float
    currency: str
    refund_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class GatewayCall:
    method: str
    arguments: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_token: str,
        payment_method: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        """Charge ``amount`` against the tokenised payment instrument."""
        ...

    @abstractmethod
    def create_refund(
        self,
        transaction_id: str,
        amount: float,
        currency: str,
        reason: str | None = None,
    ) -> RefundResult:
        """Refund part or all of a previous charge."""
        ...
