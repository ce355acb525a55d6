"""Shopping cart aggregate — one per user, emptied when an order is placed.

Cart items snapshot the product name and unit price at the moment they are
added. Stock is checked against the live product on every add or update, and
carts are trimmed when an admin lowers a product's stock.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemAdjustedForStock,
    CartItemRemoved,
    CartQuantityUpdated,
)
from storefront.domain import storefront
from storefront.shared.money import DEFAULT_CURRENCY, Money

MAX_QUANTITY_PER_PRODUCT = 100


def _validate_quantity(quantity):
    if quantity is None or quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
    if quantity > MAX_QUANTITY_PER_PRODUCT:
        raise ValidationError(
            {"quantity": [f"Quantity cannot exceed {MAX_QUANTITY_PER_PRODUCT} items per product"]}
        )


def _require_stock(product, quantity, label="Requested"):
    if not product.is_in_stock(quantity):
        raise ValidationError(
            {
                "stock": [
                    f"Insufficient stock for product '{product.name}'. "
                    f"Available: {product.stock}, {label}: {quantity}"
                ]
            }
        )


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    unit_price = Float(required=True, min_value=0.01)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY_PER_PRODUCT)
    added_at = DateTime()

    @property
    def price(self):
        return Money.of(self.unit_price, self.currency)

    def subtotal(self):
        return self.price * self.quantity


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def total(self):
        """Sum of line subtotals, in the currency of the first item."""
        if not self.items:
            return Money.zero()
        total = Money.zero(self.items[0].currency)
        for item in self.items:
            total = total + item.subtotal()
        return total

    def total_item_count(self):
        return sum(i.quantity for i in self.items)

    def is_empty(self):
        return not self.items

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Add a product to the cart, merging with an existing line for the same product."""
        _validate_quantity(quantity)
        _require_stock(product, quantity)

        existing = self.item_for(product.id)
        now = datetime.now(UTC)

        if existing:
            combined = existing.quantity + quantity
            _validate_quantity(combined)
            _require_stock(product, combined, label="Total requested")
            existing.quantity = combined
        else:
            if self.items and self.items[0].currency != product.price.currency:
                raise ValidationError({"currency": ["All cart items must share one currency"]})
            self.add_items(
                CartItem(
                    product_id=product.id,
                    product_name=product.name,
                    unit_price=product.price.amount,
                    currency=product.price.currency,
                    quantity=quantity,
                    added_at=now,
                )
            )

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product.id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product, quantity):
        item = self.item_for(product.id)
        if item is None:
            raise ValidationError({"product_id": ["Cart item not found"]})

        _validate_quantity(quantity)
        _require_stock(product, quantity)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Cart item not found"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id)))

    def adjust_for_stock(self, product_id, available):
        """Shrink or drop the line for ``product_id`` so it fits ``available`` stock.

        Returns True when the cart changed.
        """
        item = self.item_for(product_id)
        if item is None or item.quantity <= available:
            return False

        previous_quantity = item.quantity
        if available <= 0:
            self.remove_items(item)
            new_quantity = 0
        else:
            item.quantity = available
            new_quantity = available

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdjustedForStock(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return True
