"""
Dependency Injection Container
================================

Simple service locator for infrastructure dependencies and domain services.
Services receive their collaborators (payment providers, response caches,
cache invalidator) through their constructors; the container only wires them.

Usage:
    from infrastructure.container import container

    order_service = container.order_service()
    products_cache = container.response_cache("medium")
"""

import logging
from typing import Dict, Optional

from .cache import CacheInvalidator, ResponseCacheFactory, ResponseCacheInterface
from .payments import PaymentFactory, PaymentMode, PaymentProviderInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._clear()
            self._initialized = True
            logger.info("Service container initialized")

    def _clear(self):
        self._payment_providers: Optional[Dict[PaymentMode, PaymentProviderInterface]] = None
        self._response_caches: Optional[Dict[str, ResponseCacheInterface]] = None
        self._cache_invalidator: Optional[CacheInvalidator] = None

        # Domain Services
        self._catalog_service = None
        self._vendor_service = None
        self._cart_service = None
        self._order_service = None
        self._review_service = None
        self._moderation_service = None
        self._support_service = None
        self._payout_service = None
        self._payment_service = None

    def payment_providers(self) -> Dict[PaymentMode, PaymentProviderInterface]:
        """Payment providers keyed by mode (gateway, demo)."""
        if self._payment_providers is None:
            self._payment_providers = PaymentFactory.create_all()
            logger.debug("Created payment providers")
        return self._payment_providers

    def payment(self, mode: PaymentMode | str) -> PaymentProviderInterface:
        return self.payment_providers()[PaymentMode(mode)]

    def response_caches(self) -> Dict[str, ResponseCacheInterface]:
        if self._response_caches is None:
            self._response_caches = ResponseCacheFactory.create_all()
            logger.debug(f"Created response caches: {', '.join(self._response_caches)}")
        return self._response_caches

    def response_cache(self, tier: str) -> ResponseCacheInterface:
        return self.response_caches()[tier]

    def cache_invalidator(self) -> CacheInvalidator:
        if self._cache_invalidator is None:
            self._cache_invalidator = CacheInvalidator(self.response_caches())
        return self._cache_invalidator

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.services import CatalogService

            self._catalog_service = CatalogService(cache_invalidator=self.cache_invalidator())
            logger.debug("Created CatalogService")
        return self._catalog_service

    def vendor_service(self):
        """Get VendorService instance."""
        if self._vendor_service is None:
            from marketplace.services import VendorService

            self._vendor_service = VendorService(cache_invalidator=self.cache_invalidator())
            logger.debug("Created VendorService")
        return self._vendor_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.services import CartService

            self._cart_service = CartService()
            logger.debug("Created CartService")
        return self._cart_service

    def payout_service(self):
        """Get PayoutService instance."""
        if self._payout_service is None:
            from payment_system.domain.services import PayoutService

            self._payout_service = PayoutService(cache_invalidator=self.cache_invalidator())
            logger.debug("Created PayoutService")
        return self._payout_service

    def payment_service(self):
        """Get PaymentService instance."""
        if self._payment_service is None:
            from payment_system.domain.services import PaymentService

            self._payment_service = PaymentService()
            logger.debug("Created PaymentService")
        return self._payment_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            self._order_service = OrderService(
                cart_service=self.cart_service(),
                payout_service=self.payout_service(),
                payment_providers=self.payment_providers(),
                cache_invalidator=self.cache_invalidator(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def review_service(self):
        """Get ReviewService instance."""
        if self._review_service is None:
            from marketplace.services import ReviewService

            self._review_service = ReviewService(cache_invalidator=self.cache_invalidator())
            logger.debug("Created ReviewService")
        return self._review_service

    def moderation_service(self):
        """Get ModerationService instance."""
        if self._moderation_service is None:
            from marketplace.services import ModerationService

            self._moderation_service = ModerationService(cache_invalidator=self.cache_invalidator())
            logger.debug("Created ModerationService")
        return self._moderation_service

    def support_service(self):
        """Get SupportService instance."""
        if self._support_service is None:
            from marketplace.services import SupportService

            self._support_service = SupportService()
            logger.debug("Created SupportService")
        return self._support_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when settings change at runtime.
        """
        self._clear()
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()


def get_payment_provider(mode: PaymentMode | str) -> PaymentProviderInterface:
    """Get payment provider for a mode from global container."""
    return container.payment(mode)
