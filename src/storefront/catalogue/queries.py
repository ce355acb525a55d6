"""Read side of the catalogue: filtered listing, search and stock checks."""

from dataclasses import asdict, dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.cache import LIST_TTL_SECONDS, PRODUCT_TTL_SECONDS, catalogue_cache
from storefront.catalogue.product import Product
from storefront.shared.paging import DEFAULT_PAGE_SIZE, Page, PageRequest, paginate

_SORT_KEYS = {
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price.amount,
    "stock": lambda p: p.stock,
    "created_at": lambda p: p.created_at,
    "category": lambda p: p.category.lower(),
}


@dataclass(frozen=True)
class ProductQuery:
    keyword: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_stock: int | None = None
    max_stock: int | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "name"
    sort_descending: bool = False

    def cache_key(self) -> str:
        return "products:" + "|".join(f"{k}={v}" for k, v in sorted(asdict(self).items()))

    def matches(self, product: Product) -> bool:
        if self.keyword:
            needle = self.keyword.strip().lower()
            if needle not in product.name.lower() and needle not in product.description.lower():
                return False
        if self.category and product.category.lower() != self.category.strip().lower():
            return False
        if self.min_price is not None and product.price.amount < self.min_price:
            return False
        if self.max_price is not None and product.price.amount > self.max_price:
            return False
        if self.min_stock is not None and product.stock < self.min_stock:
            return False
        if self.max_stock is not None and product.stock > self.max_stock:
            return False
        return True


def _repo():
    return current_domain.repository_for(Product)


def list_products(query: ProductQuery | None = None) -> Page:
    query = query or ProductQuery()
    sort_key = _SORT_KEYS.get((query.sort_by or "name").lower())
    if sort_key is None:
        raise ValidationError({"sort_by": [f"Cannot sort products by '{query.sort_by}'"]})

    def load():
        matching = [p for p in _repo().all_products() if query.matches(p)]
        matching.sort(key=sort_key, reverse=query.sort_descending)
        return paginate(matching, PageRequest(query.page, query.page_size))

    return catalogue_cache.get_or_load(query.cache_key(), load, LIST_TTL_SECONDS)


def get_product(product_id: str) -> Product:
    """Fetch a product, raising ObjectNotFoundError when it does not exist."""
    return catalogue_cache.get_or_load(f"product:{product_id}", lambda: _repo().get(product_id), PRODUCT_TTL_SECONDS)


def search_products(keyword: str) -> list[Product]:
    if not keyword or not keyword.strip():
        return []
    key = f"search:{keyword.strip().lower()}"
    return catalogue_cache.get_or_load(key, lambda: _repo().search(keyword), LIST_TTL_SECONDS)


def products_in_category(category: str) -> list[Product]:
    key = f"category:{(category or '').strip().lower()}"
    return catalogue_cache.get_or_load(key, lambda: _repo().in_category(category), LIST_TTL_SECONDS)


def check_stock(product_id: str, quantity: int) -> bool:
    return _repo().get(product_id).is_in_stock(quantity)
