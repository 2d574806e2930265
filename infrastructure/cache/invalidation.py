"""
Cache Invalidation
===================

Write operations call these helpers instead of touching cache keys directly.

Key layout:
    medium  products_*, stores_*          flushed together on any catalog write
    long    master_search_*               flushed with the products
    short   reviews_<productId>_*         removed per product prefix
    session user_profile_<id>, vendor_profile_<id>, vendor_products_<id>,
            vendor_dashboard_<id>         removed by exact key
"""

import logging
from typing import Dict, Iterable

from .interface import ResponseCacheInterface

logger = logging.getLogger(__name__)

USER_KEY_PREFIXES = ("user_profile", "vendor_profile", "vendor_products", "vendor_dashboard")


def review_prefix(product_id) -> str:
    return f"reviews_{product_id}"


def user_key(kind: str, user_id) -> str:
    return f"{kind}_{user_id}"


class CacheInvalidator:
    def __init__(self, caches: Dict[str, ResponseCacheInterface]):
        self.caches = caches

    def _tier(self, name: str) -> ResponseCacheInterface:
        return self.caches[name]

    def products(self) -> int:
        removed = self._tier("medium").flush() + self._tier("long").flush()
        logger.debug(f"Product caches invalidated ({removed} entries)")
        return removed

    def reviews(self, product_id) -> int:
        return self._tier("short").delete_prefix(review_prefix(product_id))

    def user(self, user_id) -> int:
        session = self._tier("session")
        return sum(1 for kind in USER_KEY_PREFIXES if session.delete(user_key(kind, user_id)))

    def users(self, user_ids: Iterable) -> int:
        return sum(self.user(user_id) for user_id in set(user_ids))

    def all(self) -> int:
        removed = sum(cache.flush() for cache in self.caches.values())
        logger.info(f"All response caches flushed ({removed} entries)")
        return removed

    def stats(self) -> Dict[str, dict]:
        return {name: cache.stats() for name, cache in self.caches.items()}
