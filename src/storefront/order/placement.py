"""Order placement — command and handler.

Placing an order touches three aggregates in a single unit of work: each
product's stock is reduced, the order is created from the cart's prices and
the cart is emptied. Any failure rolls back all of them.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.cache import invalidate_catalogue_cache
from storefront.catalogue.product import Product, StockChangeReason
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.address import Address

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    street = String(required=True, max_length=200)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is None or cart.is_empty():
            raise ValidationError({"cart": ["Cannot place an order with an empty cart"]})

        product_repo = current_domain.repository_for(Product)
        items_data = []
        for item in cart.items:
            product = product_repo.get(item.product_id)
            product.reduce_stock(item.quantity, reason=StockChangeReason.ORDER_PLACED)
            product_repo.add(product)

            items_data.append(
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "unit_price": item.unit_price,
                    "currency": item.currency,
                    "quantity": item.quantity,
                }
            )

        address = Address.build(
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        order = Order.place(
            user_id=command.user_id,
            shipping_address=address,
            items_data=items_data,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)

        invalidate_catalogue_cache()
        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total=order.total.amount,
            currency=order.total.currency,
        )
        return str(order.id)
