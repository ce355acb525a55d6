"""Payment refund — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.payments.gateway import get_gateway
from storefront.payments.payment import Payment
from storefront.payments.processing import PaymentResult
from storefront.shared.money import Money

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Payment")
class RefundPayment:
    """Refund a payment. Without an amount, whatever is left is refunded."""

    payment_id = Identifier(required=True)
    amount = Float()
    reason = String(max_length=500)


@storefront.command_handler(part_of=Payment)
class RefundPaymentHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)

        if not payment.can_be_refunded():
            raise ValidationError(
                {"status": [f"Payment {payment.id} cannot be refunded. Current status: {payment.status}"]}
            )

        remaining = payment.remaining_refundable()
        amount = round(command.amount if command.amount is not None else remaining.amount, 2)
        if amount <= 0:
            raise ValidationError({"amount": ["Refund amount must be greater than zero"]})
        if amount > remaining.amount:
            raise ValidationError({"amount": ["Refund amount exceeds remaining refundable amount"]})

        result = get_gateway().create_refund(
            transaction_id=payment.transaction_id,
            amount=amount,
            currency=payment.amount.currency,
            reason=command.reason,
        )

        if result.success:
            payment.refund(Money.of(amount, payment.amount.currency))
            repo.add(payment)
            logger.info("Refund processed", payment_id=str(payment.id), amount=amount)
        else:
            logger.warning(
                "Refund declined by gateway",
                payment_id=str(payment.id),
                reason=result.failure_reason,
            )

        return PaymentResult(
            is_successful=result.success,
            status=payment.status,
            amount=result.amount,
            currency=result.currency,
            payment_id=str(payment.id),
            transaction_id=result.refund_id,
            error_message=result.failure_reason,
        )
