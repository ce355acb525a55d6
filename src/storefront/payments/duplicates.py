"""Duplicate payment guard.

A successful charge remembers its ``(order_id, payment_token)`` pair for a
short window. Resubmitting the same pair inside that window is rejected
before the gateway is called again.

Pairs live in the domain's default cache (memory in development, Redis in
production), so every API worker sees the same window and expired pairs are
evicted by the cache itself.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.inflection import underscore

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.payments.payment import Payment


@storefront.projection(cache="default")
class RecentPaymentToken:
    key = String(identifier=True, max_length=400)
    order_id = Identifier(required=True)


def _key(order_id, payment_token):
    return f"{order_id}:{payment_token}"


def _cache():
    return current_domain.cache_for(RecentPaymentToken)


def remember_payment_token(order_id, payment_token) -> None:
    if not payment_token:
        return
    window = get_settings().duplicate_payment_window_seconds
    _cache().add(RecentPaymentToken(key=_key(order_id, payment_token), order_id=str(order_id)), ttl=window)


def seen_recently(order_id, payment_token) -> bool:
    if not payment_token:
        return False
    cache_key = f"{underscore(RecentPaymentToken.__name__)}:::{_key(order_id, payment_token)}"
    return _cache().get(cache_key) is not None


def is_duplicate(order_id, payment_token) -> bool:
    """True when this token was charged recently or the order is already paid."""
    if not payment_token:
        return False
    if seen_recently(order_id, payment_token):
        return True
    return current_domain.repository_for(Payment).completed_for_order(order_id) is not None


def forget_payment_tokens() -> None:
    _cache().flush_all()
