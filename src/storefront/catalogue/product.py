"""Product aggregate root with ProductImage entity."""

from datetime import UTC, datetime
from enum import Enum
from urllib.parse import urlparse

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.shared.money import Money


class StockChangeReason(Enum):
    ADJUSTMENT = "Adjustment"
    ORDER_PLACED = "OrderPlaced"
    ORDER_CANCELLED = "OrderCancelled"
    RESTOCK = "Restock"


def is_absolute_http_url(url):
    parsed = urlparse(url or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@storefront.entity(part_of="Product")
class ProductImage:
    """An image shown on the product page."""

    url: String(required=True, max_length=500)
    display_order: Integer(default=0)


@storefront.aggregate
class Product:
    """A sellable item with a price and an on-hand stock count."""

    name: String(required=True, max_length=200)
    description: String(required=True, max_length=2000)
    price: ValueObject(Money, required=True)
    stock: Integer(required=True, min_value=0, default=0)
    category: String(required=True, max_length=50)
    images: HasMany(ProductImage)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_have_minimum_length(self):
        if len((self.name or "").strip()) < 2:
            raise ValidationError({"name": ["Product name must be at least 2 characters"]})

    @invariant.post
    def description_must_have_minimum_length(self):
        if len((self.description or "").strip()) < 10:
            raise ValidationError({"description": ["Product description must be at least 10 characters"]})

    @invariant.post
    def category_must_have_minimum_length(self):
        if len((self.category or "").strip()) < 2:
            raise ValidationError({"category": ["Category must be at least 2 characters"]})

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price.amount <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @invariant.post
    def image_urls_must_be_absolute_and_unique(self):
        seen = set()
        for image in self.images:
            if not is_absolute_http_url(image.url):
                raise ValidationError({"images": [f"Invalid image URL: {image.url}"]})
            key = image.url.lower()
            if key in seen:
                raise ValidationError({"images": [f"Duplicate image URL: {image.url}"]})
            seen.add(key)

    @classmethod
    def create(cls, name, description, price, stock, category, currency="USD", image_urls=None):
        from storefront.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        price_vo = price if isinstance(price, Money) else Money.of(price, currency)
        product = cls(
            name=(name or "").strip(),
            description=(description or "").strip(),
            price=price_vo,
            stock=stock,
            category=(category or "").strip(),
            images=[ProductImage(url=url.strip(), display_order=i) for i, url in enumerate(image_urls or [])],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                category=product.category,
                price=price_vo.amount,
                currency=price_vo.currency,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(self, name, description, price, category, currency=None):
        from storefront.catalogue.events import ProductDetailsUpdated

        price_vo = price if isinstance(price, Money) else Money.of(price, currency or self.price.currency)
        with atomic_change(self):
            self.name = (name or "").strip()
            self.description = (description or "").strip()
            self.price = price_vo
            self.category = (category or "").strip()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=price_vo.amount,
                currency=price_vo.currency,
            )
        )

    # -------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------
    def add_image(self, url):
        url = (url or "").strip()
        if any(i.url.lower() == url.lower() for i in self.images):
            raise ValidationError({"images": [f"Duplicate image URL: {url}"]})

        self.add_images(ProductImage(url=url, display_order=len(self.images)))
        self.updated_at = datetime.now(UTC)

    def remove_image(self, url):
        image = next((i for i in self.images if i.url.lower() == (url or "").strip().lower()), None)
        if image is None:
            raise ValidationError({"images": [f"Image {url} not found"]})

        self.remove_images(image)
        self.updated_at = datetime.now(UTC)

    def replace_images(self, urls):
        with atomic_change(self):
            for image in list(self.images):
                self.remove_images(image)
            for url in urls or []:
                self.add_image(url)

    @property
    def image_urls(self):
        return [i.url for i in sorted(self.images, key=lambda i: i.display_order or 0)]

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def is_in_stock(self, quantity=1):
        if quantity is None or quantity <= 0:
            return False
        return self.stock >= quantity

    def update_stock(self, new_stock, reason=StockChangeReason.ADJUSTMENT):
        if new_stock is None or new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        self._change_stock(new_stock, reason)

    def reduce_stock(self, quantity, reason=StockChangeReason.ORDER_PLACED):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
        if self.stock < quantity:
            raise ValidationError(
                {
                    "stock": [
                        f"Insufficient stock for product '{self.name}'. "
                        f"Available: {self.stock}, Requested: {quantity}"
                    ]
                }
            )
        self._change_stock(self.stock - quantity, reason)

    def increase_stock(self, quantity, reason=StockChangeReason.RESTOCK):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
        self._change_stock(self.stock + quantity, reason)

    def _change_stock(self, new_stock, reason):
        from storefront.catalogue.events import ProductStockChanged

        previous = self.stock
        self.stock = new_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductStockChanged(
                product_id=self.id,
                product_name=self.name,
                previous_stock=previous,
                new_stock=new_stock,
                reason=StockChangeReason(reason).value,
            )
        )

