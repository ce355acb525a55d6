"""Configurable fake payment gateway for development and testing.

Simulates a real gateway without any external calls. It can be told to
succeed or fail at runtime and records every call it receives, which keeps
handler tests free of network access.
"""

from uuid import uuid4

from storefront.payments.gateway.port import ChargeResult, GatewayCall, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[GatewayCall] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_token: str,
        payment_method: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        self.calls.append(
            GatewayCall(
                method="create_charge",
                arguments={
                    "amount": amount,
                    "currency": currency,
                    "payment_token": payment_token,
                    "payment_method": payment_method,
                    "metadata": dict(metadata or {}),
                },
            )
        )

        if self.should_succeed:
            return ChargeResult(
                success=True,
                amount=amount,
                currency=currency,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                status="Completed",
            )
        return ChargeResult(
            success=False,
            amount=amount,
            currency=currency,
            status="Failed",
            failure_reason=self.failure_reason,
        )

    def create_refund(
        self,
        transaction_id: str,
        amount: float,
        currency: str,
        reason: str | None = None,
    ) -> RefundResult:
        self.calls.append(
            GatewayCall(
                method="create_refund",
                arguments={
                    "transaction_id": transaction_id,
                    "amount": amount,
                    "currency": currency,
                    "reason": reason,
                },
            )
        )

        if self.should_succeed:
            return RefundResult(
                success=True,
                amount=amount,
                currency=currency,
                refund_id=f"fake_ref_{uuid4().hex[:12]}",
                status="Completed",
            )
        return RefundResult(
            success=False,
            amount=amount,
            currency=currency,
            status="Failed",
            failure_reason=self.failure_reason,
        )
