"""Payment processing — command and handler.

Charges the order total through the configured gateway. A declined charge is
still recorded, as a Failed payment, so the attempt is visible afterwards.
"""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.payments.duplicates import remember_payment_token, seen_recently
from storefront.payments.errors import DuplicatePaymentError
from storefront.payments.gateway import get_gateway
from storefront.payments.payment import Payment
from storefront.shared.money import Money

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PaymentResult:
    is_successful: bool
    status: str
    amount: float
    currency: str
    payment_id: str | None = None
    transaction_id: str | None = None
    error_message: str | None = None


@storefront.command(part_of="Payment")
class ProcessPayment:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True, max_length=50)
    payment_token = String(max_length=255)


@storefront.command_handler(part_of=Payment)
class ProcessPaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        if seen_recently(command.order_id, command.payment_token):
            logger.warning("Duplicate payment attempt detected", order_id=str(command.order_id))
            raise DuplicatePaymentError(command.order_id)

        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(command.order_id)
        if not order.is_owned_by(command.user_id):
            raise ObjectNotFoundError(f"`Order` object with identifier {command.order_id} does not exist.")

        payment_repo = current_domain.repository_for(Payment)
        if payment_repo.completed_for_order(order.id) is not None:
            raise ValidationError({"order_id": ["Order already has a successful payment"]})
        if order.status != OrderStatus.PENDING.value:
            raise ValidationError({"order_id": [f"Cannot pay for an order with status {order.status}"]})

        payment = Payment.create(
            order_id=order.id,
            amount=Money.of(order.total.amount, order.total.currency),
            method=command.payment_method,
        )

        charge = get_gateway().create_charge(
            amount=order.total.amount,
            currency=order.total.currency,
            payment_token=command.payment_token or "",
            payment_method=payment.method,
            metadata={"order_id": str(order.id), "payment_id": str(payment.id)},
        )

        if charge.success:
            payment.mark_as_processing(charge.transaction_id)
            payment.mark_as_completed()
            order.mark_as_paid()
            order_repo.add(order)
            logger.info(
                "Payment processed",
                order_id=str(order.id),
                payment_id=str(payment.id),
                transaction_id=charge.transaction_id,
            )
        else:
            payment.mark_as_failed(charge.failure_reason or "Payment processing failed")
            logger.warning(
                "Payment declined",
                order_id=str(order.id),
                payment_id=str(payment.id),
                reason=payment.failure_reason,
            )

        payment_repo.add(payment)
        if charge.success:
            remember_payment_token(order.id, command.payment_token)

        return PaymentResult(
            is_successful=charge.success,
            status=payment.status,
            amount=charge.amount,
            currency=charge.currency,
            payment_id=str(payment.id),
            transaction_id=charge.transaction_id,
            error_message=charge.failure_reason,
        )
