"""Order aggregate — a placed purchase and its fulfilment status.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED, PROCESSING)

Delivered and Cancelled are terminal. Prices are copied from the cart when
the order is placed and never change afterwards.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
)
from storefront.shared.address import Address
from storefront.shared.money import DEFAULT_CURRENCY, Money

MAX_ITEM_QUANTITY = 1000


class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_NON_CANCELLABLE_STATES = {
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
}


@storefront.entity(part_of="Order")
class OrderItem:
    """A product line captured at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    unit_price = Float(required=True, min_value=0.01)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)

    @property
    def price(self):
        return Money.of(self.unit_price, self.currency)

    def subtotal(self):
        return self.price * self.quantity


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    total = ValueObject(Money)
    shipping_address = ValueObject(Address, required=True)
    placed_at = DateTime()
    updated_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def items_must_share_one_currency(self):
        currencies = {i.currency for i in self.items}
        if len(currencies) > 1:
            raise ValidationError({"items": ["All order items must share one currency"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, shipping_address, items_data):
        """Create a pending order.

        Args:
            user_id: The user placing the order.
            shipping_address: An Address value object.
            items_data: List of dicts with product_id, product_name,
                        unit_price, currency, quantity.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address,
            items=[OrderItem(**item) for item in items_data],
            placed_at=now,
            updated_at=now,
        )
        order._recalculate_total()

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=sum(i.quantity for i in order.items),
                total=order.total.amount,
                currency=order.total.currency,
                placed_at=now,
            )
        )
        return order

    def _recalculate_total(self):
        if not self.items:
            self.total = Money.zero()
            return

        total = Money.zero(self.items[0].currency)
        for item in self.items:
            total = total + item.subtotal()
        self.total = total

    # -------------------------------------------------------------------
    # Status machine
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError(
                {"status": [f"Invalid status transition from {current.value} to {target_status.value}"]}
            )

    def update_status(self, new_status):
        target = OrderStatus(new_status)
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.SHIPPED:
            self.shipped_at = now
        elif target == OrderStatus.DELIVERED:
            self.delivered_at = now
        elif target == OrderStatus.CANCELLED:
            self.cancelled_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def can_be_cancelled(self):
        return OrderStatus(self.status) not in _NON_CANCELLABLE_STATES

    def cancel(self):
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Order is already cancelled"]})
        if current in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise ValidationError({"status": ["Cannot cancel shipped or delivered orders"]})

        self.update_status(OrderStatus.CANCELLED)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                cancelled_at=self.cancelled_at,
            )
        )

    def mark_as_paid(self):
        """Confirm a pending order once payment has been captured."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            return

        self.update_status(OrderStatus.CONFIRMED)
        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                amount=self.total.amount,
                currency=self.total.currency,
            )
        )

    def is_completed(self):
        return OrderStatus(self.status) == OrderStatus.DELIVERED

    def is_owned_by(self, user_id):
        return str(self.user_id) == str(user_id)
