"""Carts react to product stock changes.

When a product's stock drops below what a cart holds, the cart line is
clamped to the remaining stock, or removed when nothing is left. Increases
leave carts untouched.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.cart import Cart
from storefront.catalogue.events import ProductStockChanged
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def adjust_carts_for_stock(product_id, available):
    """Clamp every cart holding ``product_id`` to ``available`` units.

    Returns the number of carts that changed.
    """
    repo = current_domain.repository_for(Cart)
    adjusted = 0
    for cart in repo.containing_product(product_id):
        if cart.adjust_for_stock(product_id, available):
            repo.add(cart)
            adjusted += 1
    return adjusted


@storefront.event_handler(part_of=Product)
class CartStockEventHandler:
    """Keeps cart quantities within available product stock."""

    @handle(ProductStockChanged)
    def on_product_stock_changed(self, event: ProductStockChanged) -> None:
        if event.new_stock >= event.previous_stock:
            return

        adjusted = adjust_carts_for_stock(event.product_id, event.new_stock)
        if adjusted:
            logger.info(
                "Carts adjusted for reduced stock",
                product_id=str(event.product_id),
                new_stock=event.new_stock,
                adjusted_cart_count=adjusted,
            )
