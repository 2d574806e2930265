"""
Response Cache Factory
=======================

Builds one cache per TTL tier from settings.RESPONSE_CACHE.
"""

import logging
from typing import Dict

from django.conf import settings

from .django_cache import DjangoResponseCache, NullResponseCache
from .interface import CacheTier, ResponseCacheInterface

logger = logging.getLogger(__name__)

DEFAULT_TIERS = {"short": 60, "medium": 300, "long": 900, "session": 1800}


class ResponseCacheFactory:
    @staticmethod
    def tiers() -> Dict[str, CacheTier]:
        config = getattr(settings, "RESPONSE_CACHE", {})
        return {name: CacheTier(name, int(ttl)) for name, ttl in config.get("TIERS", DEFAULT_TIERS).items()}

    @staticmethod
    def create(tier_name: str) -> ResponseCacheInterface:
        """
        Create the cache for one tier.

        Raises:
            ValueError: If the tier is not configured
        """
        config = getattr(settings, "RESPONSE_CACHE", {})
        tiers = ResponseCacheFactory.tiers()
        if tier_name not in tiers:
            raise ValueError(f"Unknown response cache tier: {tier_name}. Configured: {', '.join(tiers)}")

        if not config.get("ENABLED", True):
            return NullResponseCache(tiers[tier_name])
        return DjangoResponseCache(tiers[tier_name], alias=config.get("ALIAS", "default"))

    @staticmethod
    def create_all() -> Dict[str, ResponseCacheInterface]:
        return {name: ResponseCacheFactory.create(name) for name in ResponseCacheFactory.tiers()}
