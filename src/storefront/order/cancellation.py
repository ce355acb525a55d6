"""Order cancellation — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.cache import invalidate_catalogue_cache
from storefront.catalogue.product import Product, StockChangeReason
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def restore_stock(order):
    """Put every item's quantity back on its product.

    Products deleted since the order was placed are skipped.
    """
    product_repo = current_domain.repository_for(Product)
    for item in order.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            logger.warning(
                "Product no longer exists, stock not restored",
                order_id=str(order.id),
                product_id=str(item.product_id),
            )
            continue

        product.increase_stock(item.quantity, reason=StockChangeReason.ORDER_CANCELLED)
        product_repo.add(product)

    invalidate_catalogue_cache()


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_admin = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if not command.is_admin and not order.is_owned_by(command.user_id):
            raise ObjectNotFoundError(f"`Order` object with identifier {command.order_id} does not exist.")

        order.cancel()
        repo.add(order)
        restore_stock(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            cancelled_by=str(command.user_id),
        )
