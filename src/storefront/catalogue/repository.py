"""Repository for the Product aggregate."""

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def all_products(self) -> list[Product]:
        return self._dao.query.limit(None).all().items

    def in_category(self, category: str) -> list[Product]:
        """Products whose category matches ignoring case."""
        wanted = (category or "").strip().lower()
        return [p for p in self.all_products() if p.category.lower() == wanted]

    def search(self, keyword: str) -> list[Product]:
        """Products whose name or description contains ``keyword`` (case-insensitive)."""
        needle = (keyword or "").strip().lower()
        if not needle:
            return []
        return [p for p in self.all_products() if needle in p.name.lower() or needle in p.description.lower()]

    def low_stock(self, threshold: int) -> list[Product]:
        return sorted((p for p in self.all_products() if p.stock <= threshold), key=lambda p: p.stock)
