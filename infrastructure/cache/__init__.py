"""
Response Cache Abstraction Layer
=================================

Injectable TTL-tiered key-value cache for read endpoints.
"""

from .django_cache import DjangoResponseCache, NullResponseCache
from .factory import ResponseCacheFactory
from .interface import CacheTier, ResponseCacheInterface
from .invalidation import CacheInvalidator, review_prefix, user_key

__all__ = [
    "CacheInvalidator",
    "CacheTier",
    "DjangoResponseCache",
    "NullResponseCache",
    "ResponseCacheFactory",
    "ResponseCacheInterface",
    "review_prefix",
    "user_key",
]
