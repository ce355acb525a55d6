"""Product creation — command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.cache import invalidate_catalogue_cache
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def parse_image_urls(raw):
    if not raw:
        return []
    return json.loads(raw) if isinstance(raw, str) else list(raw)


@storefront.command(part_of="Product")
class CreateProduct:
    """Add a new product to the catalogue."""

    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: Float(required=True)
    currency: String(max_length=3, default="USD")
    stock: Integer(required=True, min_value=0)
    category: String(required=True, max_length=50)
    image_urls: Text()  # JSON array of absolute URLs


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            currency=command.currency or "USD",
            stock=command.stock,
            category=command.category,
            image_urls=parse_image_urls(command.image_urls),
        )
        current_domain.repository_for(Product).add(product)
        invalidate_catalogue_cache()

        logger.info("Product created", product_id=str(product.id), category=product.category)
        return str(product.id)
