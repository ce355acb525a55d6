"""Repository for the Payment aggregate."""

from storefront.domain import storefront
from storefront.payments.payment import Payment, PaymentStatus


@storefront.repository(part_of=Payment)
class PaymentRepository:
    def for_order(self, order_id) -> list[Payment]:
        return self._dao.query.filter(order_id=str(order_id)).limit(None).all().items

    def latest_for_order(self, order_id) -> Payment | None:
        payments = self.for_order(order_id)
        if not payments:
            return None
        return max(payments, key=lambda p: p.created_at)

    def completed_for_order(self, order_id) -> Payment | None:
        return next(
            (p for p in self.for_order(order_id) if p.status == PaymentStatus.COMPLETED.value),
            None,
        )
