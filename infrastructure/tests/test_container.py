"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from django.test import TestCase

from infrastructure.cache import CacheInvalidator, ResponseCacheInterface
from infrastructure.container import ServiceContainer, container, get_payment_provider
from infrastructure.payments import DemoProvider, GatewayProvider, PaymentMode


class ServiceContainerTest(TestCase):
    def setUp(self):
        container.reset()

    def test_container_is_singleton(self):
        self.assertIs(ServiceContainer(), ServiceContainer())
        self.assertIs(ServiceContainer(), container)

    def test_payment_providers_by_mode(self):
        self.assertIsInstance(container.payment(PaymentMode.GATEWAY), GatewayProvider)
        self.assertIsInstance(get_payment_provider("demo"), DemoProvider)
        self.assertIs(container.payment("demo"), container.payment("demo"))

    def test_response_caches_per_tier(self):
        for tier in ("short", "medium", "long", "session"):
            self.assertIsInstance(container.response_cache(tier), ResponseCacheInterface)
        self.assertIsInstance(container.cache_invalidator(), CacheInvalidator)

    def test_services_share_collaborators(self):
        order_service = container.order_service()

        self.assertIs(order_service.cart_service, container.cart_service())
        self.assertIs(order_service.cache_invalidator, container.cache_invalidator())
        self.assertIs(order_service, container.order_service())

    def test_reset_drops_instances(self):
        first = container.order_service()
        container.reset()
        self.assertIsNot(first, container.order_service())

    def test_moderation_and_support_services(self):
        from marketplace.services import ModerationService, SupportService

        self.assertIsInstance(container.moderation_service(), ModerationService)
        self.assertIs(container.moderation_service().cache_invalidator, container.cache_invalidator())
        self.assertIsInstance(container.support_service(), SupportService)
        self.assertIs(container.support_service(), container.support_service())
