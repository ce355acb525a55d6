"""In-process read-through cache for catalogue reads.

Single product lookups are kept for 15 minutes, lists and searches for 5.
Every product command clears the whole cache, so readers never see a product
that was changed or deleted through this process.
"""

from storefront.shared.cache import TTLCache

PRODUCT_TTL_SECONDS = 15 * 60
LIST_TTL_SECONDS = 5 * 60

catalogue_cache = TTLCache()


def invalidate_catalogue_cache() -> None:
    catalogue_cache.clear()
