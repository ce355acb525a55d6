"""Product maintenance — update, delete and stock commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.cache import invalidate_catalogue_cache
from storefront.catalogue.creation import parse_image_urls
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Replace a product's details and image list."""

    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: Float(required=True)
    currency: String(max_length=3)
    category: String(required=True, max_length=50)
    image_urls: Text()  # JSON array of absolute URLs


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class UpdateStock:
    """Set the on-hand stock of a product to an absolute value."""

    product_id: Identifier(required=True)
    stock: Integer(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            currency=command.currency,
        )
        product.replace_images(parse_image_urls(command.image_urls))
        repo.add(product)
        invalidate_catalogue_cache()

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        invalidate_catalogue_cache()
        logger.info("Product deleted", product_id=str(command.product_id))

    @handle(UpdateStock)
    def update_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        previous = product.stock
        product.update_stock(command.stock)
        repo.add(product)
        invalidate_catalogue_cache()

        logger.info(
            "Product stock updated",
            product_id=str(product.id),
            previous_stock=previous,
            new_stock=product.stock,
        )
        return previous
