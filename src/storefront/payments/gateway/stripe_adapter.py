"""Stripe payment gateway adapter (production stub).

Charges map onto Stripe PaymentIntents confirmed immediately with the
client-side payment method token, and refunds onto Stripe Refunds. Request
payloads are built here; the SDK calls themselves are not wired in yet.
"""

from storefront.payments.gateway.port import ChargeResult, PaymentGateway, RefundResult, to_minor_units


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter. Not yet implemented."""

    def __init__(self, api_key: str | None) -> None:
        if not api_key:
            raise ValueError("A Stripe secret key is required to use the Stripe gateway")
        self.api_key = api_key

    @staticmethod
    def payment_intent_params(
        amount: float,
        currency: str,
        payment_token: str,
        metadata: dict[str, str] | None = None,
    ) -> dict:
        return {
            "amount": to_minor_units(amount, currency),
            "currency": currency.lower(),
            "payment_method": payment_token,
            "confirm": True,
            "metadata": dict(metadata or {}),
        }

    @staticmethod
    def refund_params(transaction_id: str, amount: float, currency: str, reason: str | None = None) -> dict:
        params = {
            "payment_intent": transaction_id,
            "amount": to_minor_units(amount, currency),
        }
        if reason:
            params["metadata"] = {"reason": reason}
        return params

    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_token: str,
        payment_method: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        params = self.payment_intent_params(amount, currency, payment_token, metadata)
        raise NotImplementedError(
            f"StripeGateway.create_charge() is not yet implemented. Call stripe.PaymentIntent.create(**{params!r})."
        )

    def create_refund(
        self,
        transaction_id: str,
        amount: float,
        currency: str,
        reason: str | None = None,
    ) -> RefundResult:
        params = self.refund_params(transaction_id, amount, currency, reason)
        raise NotImplementedError(
            f"StripeGateway.create_refund() is not yet implemented. Call stripe.Refund.create(**{params!r})."
        )
