"""Payment aggregate — a single charge against an order and its refunds.

State Machine:
    PENDING → PROCESSING → COMPLETED → REFUNDED (→ REFUNDED for further partial refunds)
    PENDING/PROCESSING → FAILED

Refunds accumulate in ``refund_amount`` and may never exceed the charged amount.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, ValueObject

from storefront.domain import storefront
from storefront.payments.events import PaymentCompleted, PaymentFailed, PaymentRefunded
from storefront.shared.money import Money

MAX_TRANSACTION_ID_LENGTH = 100


class PaymentStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


PAYMENT_METHODS = ("Credit Card", "Debit Card", "PayPal", "Stripe", "Bank Transfer")

_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PROCESSING, PaymentStatus.FAILED},
    PaymentStatus.PROCESSING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.COMPLETED: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),  # Terminal
}


def canonical_payment_method(method):
    """Map user input such as ``"credit card"`` to its canonical spelling."""
    cleaned = (method or "").strip()
    for candidate in PAYMENT_METHODS:
        if candidate.lower() == cleaned.lower():
            return candidate
    raise ValidationError({"payment_method": [f"Invalid payment method: {method}"]})


@storefront.aggregate
class Payment:
    order_id = Identifier(required=True)
    amount = ValueObject(Money, required=True)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    method = String(required=True, max_length=50)
    transaction_id = String(max_length=MAX_TRANSACTION_ID_LENGTH)
    failure_reason = String(max_length=500)
    refund_amount = Float(default=0.0)
    refunded_at = DateTime()
    processed_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, order_id, amount, method):
        if amount is None or amount.amount <= 0:
            raise ValidationError({"amount": ["Payment amount must be greater than zero"]})

        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            amount=amount,
            method=canonical_payment_method(method),
            status=PaymentStatus.PENDING.value,
            refund_amount=0.0,
            created_at=now,
            updated_at=now,
        )

    def _assert_can_transition(self, target_status):
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError(
                {"status": [f"Cannot transition payment from {current.value} to {target_status.value}"]}
            )

    # -------------------------------------------------------------------
    # Capture
    # -------------------------------------------------------------------
    def mark_as_processing(self, transaction_id):
        cleaned = (transaction_id or "").strip()
        if not cleaned:
            raise ValidationError({"transaction_id": ["Transaction ID cannot be empty"]})
        if len(cleaned) > MAX_TRANSACTION_ID_LENGTH:
            raise ValidationError(
                {"transaction_id": [f"Transaction ID cannot exceed {MAX_TRANSACTION_ID_LENGTH} characters"]}
            )

        self._assert_can_transition(PaymentStatus.PROCESSING)
        self.status = PaymentStatus.PROCESSING.value
        self.transaction_id = cleaned
        self.updated_at = datetime.now(UTC)

    def mark_as_completed(self):
        self._assert_can_transition(PaymentStatus.COMPLETED)
        if not self.transaction_id:
            raise ValidationError({"transaction_id": ["Cannot complete payment without transaction ID"]})

        now = datetime.now(UTC)
        self.status = PaymentStatus.COMPLETED.value
        self.processed_at = now
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            PaymentCompleted(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount.amount,
                currency=self.amount.currency,
                transaction_id=self.transaction_id,
                completed_at=now,
            )
        )

    def mark_as_failed(self, reason):
        cleaned = (reason or "").strip()
        if not cleaned:
            raise ValidationError({"failure_reason": ["Failure reason cannot be empty"]})
        if PaymentStatus(self.status) in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED):
            raise ValidationError({"status": ["Cannot mark completed payment as failed"]})

        self._assert_can_transition(PaymentStatus.FAILED)
        now = datetime.now(UTC)
        self.status = PaymentStatus.FAILED.value
        self.failure_reason = cleaned
        self.updated_at = now

        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                reason=cleaned,
                failed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Refunds
    # -------------------------------------------------------------------
    def refund(self, amount):
        """Refund part or all of a completed payment."""
        if PaymentStatus(self.status) not in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED):
            raise ValidationError({"status": ["Can only refund completed payments"]})
        if amount.currency != self.amount.currency:
            raise ValidationError(
                {
                    "currency": [
                        f"Refund currency {amount.currency} does not match payment currency {self.amount.currency}"
                    ]
                }
            )
        if amount.amount <= 0:
            raise ValidationError({"amount": ["Refund amount must be greater than zero"]})

        already_refunded = self.refund_amount or 0.0
        if round(already_refunded + amount.amount, 2) > self.amount.amount:
            raise ValidationError({"amount": ["Total refund amount cannot exceed payment amount"]})

        now = datetime.now(UTC)
        self.status = PaymentStatus.REFUNDED.value
        self.refund_amount = round(already_refunded + amount.amount, 2)
        if self.refunded_at is None:
            self.refunded_at = now
        self.updated_at = now

        self.raise_(
            PaymentRefunded(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=amount.amount,
                currency=amount.currency,
                total_refunded=self.refund_amount,
                refunded_at=now,
            )
        )

    def remaining_refundable(self):
        if PaymentStatus(self.status) not in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED):
            return Money.zero(self.amount.currency)
        return Money.of(self.amount.amount - (self.refund_amount or 0.0), self.amount.currency)

    def can_be_refunded(self):
        return not self.remaining_refundable().is_zero()

    def is_successful(self):
        return PaymentStatus(self.status) == PaymentStatus.COMPLETED
