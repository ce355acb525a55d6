"""Payment lookups for the API."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.payments.payment import Payment


def payment_for_order(order_id: str) -> Payment:
    """Latest payment attempt for an order."""
    payment = current_domain.repository_for(Payment).latest_for_order(order_id)
    if payment is None:
        raise ObjectNotFoundError(f"No payment found for order {order_id}")
    return payment


def get_payment(payment_id: str) -> Payment:
    return current_domain.repository_for(Payment).get(payment_id)
